"""
agentstats Persistence Models

One dataclass per table (projects, sessions, prompts). Each knows its
column list and converts to and from a raw sqlite row.

Timestamps are stored as UTC ISO-8601 strings with microseconds, so
ORDER BY on the text column is chronological.
"""

from __future__ import annotations

import os
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


DEFAULT_AGENT_TYPE = "claude-code"


# ============================================================================
# ENUMS
# ============================================================================


class PromptState(str, Enum):
    """Prompt lifecycle status, derived from completed_at."""

    OPEN = "open"
    COMPLETED = "completed"


# ============================================================================
# HELPER FUNCTIONS
# ============================================================================


def generate_id() -> str:
    """Generate a new UUID string."""
    return str(uuid.uuid4())


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def to_iso(value: datetime | None) -> str | None:
    """Convert a datetime to the stored ISO form (UTC)."""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="microseconds")


def parse_datetime(value: str | datetime | None) -> datetime | None:
    """Parse a stored timestamp. Naive values are taken as UTC."""
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = datetime.fromisoformat(value)
        except (ValueError, TypeError):
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def none_if_empty(value: str | None) -> str | None:
    """Map "" to None so optional columns store NULL."""
    return value if value else None


# ============================================================================
# CORE ENTITIES
# ============================================================================


@dataclass
class Project:
    """
    A deduplicated identity for a tracked codebase.

    Maps to: projects table
    Matched by git_origin first, directory second.
    """

    id: str = field(default_factory=generate_id)
    git_origin: str | None = None
    directory: str = ""
    created_at: datetime = field(default_factory=utc_now)

    COLUMNS = "id, git_origin, directory, created_at"

    @classmethod
    def from_row(cls, row: tuple) -> Project:
        """Create from database row."""
        return cls(
            id=row[0],
            git_origin=row[1],
            directory=row[2],
            created_at=parse_datetime(row[3]) or utc_now(),
        )

    def to_row(self) -> tuple:
        """Convert to database row for INSERT."""
        return (
            self.id,
            none_if_empty(self.git_origin),
            self.directory,
            to_iso(self.created_at),
        )

    @property
    def short_name(self) -> str:
        """Human-readable name: the last path component of the directory."""
        return os.path.basename(self.directory.rstrip(os.sep)) or self.directory

    @property
    def display_origin(self) -> str:
        """Origin URL without scheme, ssh user and trailing .git."""
        if not self.git_origin:
            return ""
        display = self.git_origin
        # git@github.com:user/repo.git -> github.com/user/repo
        if display.startswith("git@"):
            display = display[len("git@"):].replace(":", "/", 1)
        for prefix in ("https://", "http://"):
            if display.startswith(prefix):
                display = display[len(prefix):]
        if display.endswith(".git"):
            display = display[: -len(".git")]
        return display


@dataclass
class Session:
    """
    One continuous agent run.

    Maps to: sessions table
    The id comes from the agent; the owning project is fixed at creation.
    """

    id: str = ""
    project_id: str = ""
    agent_type: str = DEFAULT_AGENT_TYPE
    started_at: datetime = field(default_factory=utc_now)

    COLUMNS = "id, project_id, agent_type, started_at"

    @classmethod
    def from_row(cls, row: tuple) -> Session:
        """Create from database row."""
        return cls(
            id=row[0],
            project_id=row[1],
            agent_type=row[2] or DEFAULT_AGENT_TYPE,
            started_at=parse_datetime(row[3]) or utc_now(),
        )

    def to_row(self) -> tuple:
        """Convert to database row for INSERT."""
        return (
            self.id,
            self.project_id,
            self.agent_type,
            to_iso(self.started_at),
        )


@dataclass
class Prompt:
    """
    One submit-to-completion work unit within a session.

    Maps to: prompts table
    Open while completed_at is None (in-flight).
    """

    id: str = field(default_factory=generate_id)
    session_id: str = ""
    project_id: str = ""
    prompt_text: str | None = None
    submitted_at: datetime = field(default_factory=utc_now)
    completed_at: datetime | None = None
    git_hash_start: str | None = None
    git_hash_end: str | None = None
    agent_type: str = DEFAULT_AGENT_TYPE

    COLUMNS = (
        "id, session_id, project_id, prompt_text, submitted_at, completed_at, "
        "git_hash_start, git_hash_end, agent_type"
    )

    @classmethod
    def from_row(cls, row: tuple) -> Prompt:
        """Create from database row."""
        return cls(
            id=row[0],
            session_id=row[1],
            project_id=row[2],
            prompt_text=row[3],
            submitted_at=parse_datetime(row[4]) or utc_now(),
            completed_at=parse_datetime(row[5]),
            git_hash_start=row[6],
            git_hash_end=row[7],
            agent_type=row[8] or DEFAULT_AGENT_TYPE,
        )

    def to_row(self) -> tuple:
        """Convert to database row for INSERT."""
        return (
            self.id,
            self.session_id,
            self.project_id,
            none_if_empty(self.prompt_text),
            to_iso(self.submitted_at),
            to_iso(self.completed_at),
            none_if_empty(self.git_hash_start),
            none_if_empty(self.git_hash_end),
            self.agent_type,
        )

    @property
    def state(self) -> PromptState:
        return PromptState.OPEN if self.completed_at is None else PromptState.COMPLETED

    @property
    def duration_seconds(self) -> float | None:
        """completed_at - submitted_at, or None while in-flight."""
        if self.completed_at is None:
            return None
        return (self.completed_at - self.submitted_at).total_seconds()
