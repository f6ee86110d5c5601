"""
Hook event types.

A HookEvent is the normalized record every agent parser produces.
"""

from dataclasses import dataclass
from enum import Enum

from agentstats.exceptions import HookInputError


class EventType(str, Enum):
    """Whether a hook marks the start or the end of a prompt."""

    PROMPT_START = "prompt-start"
    PROMPT_END = "prompt-end"


@dataclass
class HookEvent:
    """Normalized data extracted from a hook payload."""

    session_id: str
    cwd: str
    event_type: EventType
    agent_type: str = "claude-code"
    prompt_text: str = ""  # empty for prompt-end events

    def validate(self) -> None:
        """
        Check the mandatory fields.

        Raises:
            HookInputError: If session_id or cwd is empty
        """
        missing = [name for name in ("session_id", "cwd") if not getattr(self, name)]
        if missing:
            raise HookInputError(
                f"Missing {', '.join(missing)} in hook event",
                {"event_type": self.event_type.value, "agent_type": self.agent_type},
            )
