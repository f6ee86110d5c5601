"""
Prompt Lifecycle Recorder

Correlates prompt-start and prompt-end hook events into one prompt row
per conversational turn.

State per prompt:
    (absent) --prompt-start--> OPEN --prompt-end--> COMPLETED

A prompt-end with no open prompt in its session is a silent no-op: the
agent fires its stop hook whether or not a start was recorded.
Nothing is kept in memory between invocations; the latest open prompt is
found by query each time.
"""

import logging
import sqlite3

from agentstats.exceptions import RecordError, StoreError
from agentstats.hooks.events import HookEvent
from agentstats.integrations.git_ops import GitOps
from agentstats.persistence.models import Prompt, Session, utc_now
from agentstats.persistence.repository import StatsRepository
from agentstats.tracking.resolver import ProjectResolver

logger = logging.getLogger(__name__)


class PromptRecorder:
    """Opens and closes prompt rows for hook events."""

    def __init__(self, repo: StatsRepository, git: GitOps | None = None):
        self.repo = repo
        self.git = git or GitOps()
        self.resolver = ProjectResolver(repo, self.git)

    def record_prompt_start(self, event: HookEvent) -> Prompt:
        """
        Open a new prompt for the event's session.

        Resolves (or creates) the project, creates the session if it is
        new, captures the HEAD hash and inserts the prompt. The session and
        prompt inserts share one transaction.

        Returns:
            The inserted prompt

        Raises:
            HookInputError: If session_id or cwd is missing
            RecordError: If any storage step fails
        """
        event.validate()

        try:
            project = self.resolver.resolve(event.cwd)
        except StoreError as e:
            raise RecordError(
                "Failed to resolve project",
                step="resolve_project",
                session_id=event.session_id,
                error=str(e),
            ) from e

        hash_start = self.git.head_commit_hash(event.cwd)

        prompt = Prompt(
            session_id=event.session_id,
            project_id=project.id,
            prompt_text=event.prompt_text or None,
            git_hash_start=hash_start or None,
            agent_type=event.agent_type,
        )
        session = Session(
            id=event.session_id,
            project_id=project.id,
            agent_type=event.agent_type,
            started_at=prompt.submitted_at,
        )

        try:
            with self.repo.transaction() as cursor:
                self.repo.ensure_session(session, cursor)
                self.repo.insert_prompt(prompt, cursor)
        except sqlite3.Error as e:
            raise RecordError(
                "Failed to record prompt start",
                step="insert_session_and_prompt",
                session_id=event.session_id,
                error=str(e),
            ) from e

        logger.info(
            f"Opened prompt {prompt.id[:8]} in session {event.session_id[:12]} "
            f"(project {project.id[:8]})"
        )
        return prompt

    def record_prompt_end(self, event: HookEvent) -> Prompt | None:
        """
        Complete the most recently submitted open prompt of the session.

        Returns:
            The completed prompt, or None when the session had no open prompt

        Raises:
            HookInputError: If session_id or cwd is missing
            RecordError: If the update fails
        """
        event.validate()

        hash_end = self.git.head_commit_hash(event.cwd)

        try:
            prompt_id = self.repo.close_latest_open_prompt(
                event.session_id,
                completed_at=utc_now(),
                git_hash_end=hash_end or None,
            )
            if prompt_id is None:
                logger.debug(f"No open prompt in session {event.session_id[:12]}, nothing to close")
                return None
            prompt = self.repo.get_prompt(prompt_id)
        except sqlite3.Error as e:
            raise RecordError(
                "Failed to record prompt end",
                step="close_prompt",
                session_id=event.session_id,
                error=str(e),
            ) from e

        logger.info(f"Closed prompt {prompt_id[:8]} in session {event.session_id[:12]}")
        return prompt


def record_prompt_start(
    repo: StatsRepository, event: HookEvent, git: GitOps | None = None
) -> Prompt:
    """Shortcut for PromptRecorder(repo, git).record_prompt_start(event)."""
    return PromptRecorder(repo, git).record_prompt_start(event)


def record_prompt_end(
    repo: StatsRepository, event: HookEvent, git: GitOps | None = None
) -> Prompt | None:
    """Shortcut for PromptRecorder(repo, git).record_prompt_end(event)."""
    return PromptRecorder(repo, git).record_prompt_end(event)
