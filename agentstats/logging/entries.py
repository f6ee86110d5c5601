"""
Log Entry Data Structures for agentstats.

One structured entry is written per hook invocation.
"""

import json
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Any


@dataclass
class HookLogEntry:
    """Log entry for a single hook invocation."""

    # Identity
    timestamp: str  # ISO 8601
    event_type: str  # "prompt-start" or "prompt-end"
    agent_type: str = ""
    session_id: str = ""

    # Context
    cwd: str = ""
    project_id: str | None = None
    prompt_id: str | None = None

    # Outcome
    success: bool = False
    error: str | None = None
    error_type: str | None = None

    # Metrics
    latency_ms: int = 0

    def to_json(self) -> str:
        """Serialize to JSON string."""
        return json.dumps(asdict(self), default=str)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "HookLogEntry":
        """Create from dictionary."""
        return cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})


def now_iso() -> str:
    """Get current UTC time as ISO 8601 string."""
    return datetime.now(timezone.utc).isoformat()
