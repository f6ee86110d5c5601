"""
agentstats CLI - Hook Handling

Runs one hook invocation: parse stdin, record the event, log the outcome.
A hook must never fail the agent that called it, so every error ends up
in the hook log and on stderr instead of in the exit status.
"""

import logging
import sys
import time
from pathlib import Path
from typing import TextIO

from rich.console import Console
from rich.markup import escape

from agentstats.config import load_config
from agentstats.exceptions import AgentStatsError
from agentstats.hooks import EventType, parser_for_agent
from agentstats.integrations.git_ops import GitOps
from agentstats.logging import HookLogEntry, hook_logger, now_iso
from agentstats.persistence.repository import StatsRepository
from agentstats.tracking.recorder import PromptRecorder

logger = logging.getLogger(__name__)
err_console = Console(stderr=True)


def _write_log(entry: HookLogEntry) -> None:
    try:
        if entry.success:
            hook_logger.info(entry.to_json())
        else:
            hook_logger.error(entry.to_json())
    except OSError as e:
        # Log directory not writable; stderr is all that is left
        err_console.print(f"agentstats: cannot write hook log: {escape(str(e))}")


def run_hook(
    event_type: EventType,
    agent: str | None = None,
    db_path: str | Path | None = None,
    stream: TextIO | None = None,
) -> bool:
    """
    Record one hook event read from stream (stdin by default).

    Returns:
        True if the event was recorded (a prompt-end with nothing to close counts)
    """
    stream = stream or sys.stdin
    started = time.monotonic()
    entry = HookLogEntry(timestamp=now_iso(), event_type=event_type.value, agent_type=agent or "")

    try:
        config = load_config()
        agent_type = agent or config.default_agent
        entry.agent_type = agent_type

        event = parser_for_agent(agent_type).parse(stream, event_type)
        entry.session_id = event.session_id
        entry.cwd = event.cwd

        git = GitOps(timeout=config.git_timeout_seconds)
        with StatsRepository(
            db_path or config.db_path, busy_timeout=config.busy_timeout_seconds
        ) as repo:
            recorder = PromptRecorder(repo, git)
            if event_type == EventType.PROMPT_START:
                prompt = recorder.record_prompt_start(event)
            else:
                prompt = recorder.record_prompt_end(event)

        if prompt is not None:
            entry.project_id = prompt.project_id
            entry.prompt_id = prompt.id
        entry.success = True

    except AgentStatsError as e:
        entry.error = str(e)
        entry.error_type = type(e).__name__
        err_console.print(f"agentstats hook error: {escape(str(e))}")
    except Exception as e:
        logger.exception("Unexpected hook failure")
        entry.error = str(e)
        entry.error_type = type(e).__name__
        err_console.print(f"agentstats hook error: {escape(str(e))}")
    finally:
        entry.latency_ms = int((time.monotonic() - started) * 1000)
        _write_log(entry)

    return entry.success
