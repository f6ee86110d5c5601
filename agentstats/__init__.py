"""
agentstats - timing and identity metadata for AI coding-agent sessions.

Agent hooks report when a prompt starts and ends; agentstats files each
prompt under a deduplicated project (git origin first, directory second)
and records the git commit at both ends.
"""

__version__ = "0.1.0"

from agentstats.exceptions import (
    AgentStatsError,
    ConfigError,
    HookInputError,
    RecordError,
    StoreError,
    UnknownAgentError,
)

__all__ = [
    "__version__",
    "AgentStatsError",
    "ConfigError",
    "HookInputError",
    "UnknownAgentError",
    "StoreError",
    "RecordError",
]
