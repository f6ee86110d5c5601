"""
agentstats - Exception Hierarchy

All agentstats-specific exceptions inherit from AgentStatsError.
"""

from typing import Any


class AgentStatsError(Exception):
    """Base exception for all agentstats errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# Configuration Errors
class ConfigError(AgentStatsError):
    """Raised when configuration is invalid or missing."""

    pass


# Hook Input Errors
class HookInputError(AgentStatsError):
    """Raised when a hook payload is malformed or missing mandatory fields."""

    pass


class UnknownAgentError(HookInputError):
    """Raised when no hook parser is registered for an agent type."""

    def __init__(self, agent_type: str, known: list[str]):
        super().__init__(f"Unknown agent type '{agent_type}'", {"known": known})
        self.agent_type = agent_type


# Storage Errors
class StoreError(AgentStatsError):
    """Raised when the database cannot be opened, read or written."""

    pass


class RecordError(StoreError):
    """Raised when recording a hook event fails part way.

    The failing step is kept so callers can tell where the sequence stopped.
    """

    def __init__(self, message: str, step: str, session_id: str = "", error: str = ""):
        super().__init__(message, {"step": step, "session_id": session_id, "error": error})
        self.step = step
        self.session_id = session_id
