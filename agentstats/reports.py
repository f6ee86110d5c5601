"""
Report readers for recorded prompt data.

Aggregates and formats what the hooks recorded; nothing here writes.
"""

from dataclasses import dataclass
from datetime import datetime

from agentstats.persistence.models import Project, parse_datetime
from agentstats.persistence.repository import StatsRepository

IN_FLIGHT = "-"


def format_duration(seconds: float) -> str:
    """
    Format a duration as "1h 2m 5s", "2m 5s" or "45s".

    Fractions are truncated. Zero or negative durations (clock skew) show as "0s".
    """
    if seconds <= 0:
        return "0s"
    total = int(seconds)
    hours, remainder = divmod(total, 3600)
    minutes, secs = divmod(remainder, 60)

    if hours > 0:
        return f"{hours}h {minutes}m {secs}s"
    if minutes > 0:
        return f"{minutes}m {secs}s"
    return f"{secs}s"


def truncate(text: str, max_len: int = 60) -> str:
    """Cut text to max_len characters, marking the cut with '...'."""
    if len(text) <= max_len:
        return text
    return text[: max(max_len - 3, 0)] + "..."


def format_local_time(value: datetime) -> str:
    """Render a stored (UTC) timestamp in local time."""
    return value.astimezone().strftime("%Y-%m-%d %H:%M:%S")


@dataclass
class ProjectStats:
    """Working-time totals for one project."""

    project: Project
    total_prompts: int = 0
    completed_prompts: int = 0
    total_seconds: float = 0.0
    first_date: str = ""
    last_date: str = ""

    @property
    def average_seconds(self) -> float | None:
        """Mean duration of completed prompts, None when nothing completed."""
        if self.completed_prompts == 0:
            return None
        return self.total_seconds / self.completed_prompts

    @property
    def period(self) -> str:
        if not self.first_date or not self.last_date:
            return ""
        if self.first_date == self.last_date:
            return self.first_date
        return f"{self.first_date} to {self.last_date}"


@dataclass
class HistoryRow:
    """One line of the prompt history table."""

    number: int
    submitted_at: str
    duration: str
    prompt_text: str


def _local_date(value: str | None) -> str:
    parsed = parse_datetime(value)
    if parsed is None:
        return ""
    return parsed.astimezone().strftime("%Y-%m-%d")


def load_stats(repo: StatsRepository, project: Project) -> ProjectStats:
    """Aggregate prompt counts and AI working time for a project."""
    row = repo.get_project_stats(project.id)
    return ProjectStats(
        project=project,
        total_prompts=row["total_prompts"],
        completed_prompts=row["completed_prompts"],
        total_seconds=row["total_seconds"],
        first_date=_local_date(row["first_submitted_at"]),
        last_date=_local_date(row["last_submitted_at"]),
    )


def load_history(
    repo: StatsRepository, project: Project, limit: int = 50, text_width: int = 60
) -> list[HistoryRow]:
    """Most recent prompts of a project, newest first, numbered from 1."""
    rows = []
    for number, prompt in enumerate(repo.get_prompt_history(project.id, limit), 1):
        duration = prompt.duration_seconds
        text = " ".join((prompt.prompt_text or "").split())
        rows.append(
            HistoryRow(
                number=number,
                submitted_at=format_local_time(prompt.submitted_at),
                duration=IN_FLIGHT if duration is None else format_duration(duration),
                prompt_text=truncate(text, text_width),
            )
        )
    return rows
