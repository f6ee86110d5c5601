"""
Tracking core: project identity resolution and the prompt lifecycle.
"""

from agentstats.tracking.recorder import (
    PromptRecorder,
    record_prompt_end,
    record_prompt_start,
)
from agentstats.tracking.resolver import ProjectResolver, resolve_directory

__all__ = [
    "ProjectResolver",
    "resolve_directory",
    "PromptRecorder",
    "record_prompt_start",
    "record_prompt_end",
]
