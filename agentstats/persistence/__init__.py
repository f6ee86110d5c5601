"""
agentstats Persistence Layer

Provides SQLite-based persistence for projects, sessions and prompts.
Single source of truth - each invocation reads and writes through it.
"""

from agentstats.persistence.models import (
    # Enums
    PromptState,
    # Core entities
    Project,
    Prompt,
    Session,
)
from agentstats.persistence.repository import StatsRepository

__all__ = [
    "PromptState",
    "Project",
    "Session",
    "Prompt",
    "StatsRepository",
]
