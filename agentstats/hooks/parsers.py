"""
Hook payload parsers.

Each supported agent gets a HookParser that turns the JSON its hooks
write to stdin into a HookEvent. Register new agents in PARSERS.
"""

import json
import logging
from typing import Any, TextIO

from agentstats.exceptions import HookInputError, UnknownAgentError
from agentstats.hooks.events import EventType, HookEvent

logger = logging.getLogger(__name__)


class HookParser:
    """Base class for agent-specific hook payload parsers."""

    agent_type: str = ""

    def parse(self, stream: TextIO, event_type: EventType) -> HookEvent:
        raise NotImplementedError

    def _load_payload(self, stream: TextIO) -> dict[str, Any]:
        raw = stream.read()
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as e:
            raise HookInputError(
                f"Invalid {self.agent_type} hook payload",
                {"error": str(e)},
            )
        if not isinstance(payload, dict):
            raise HookInputError(
                f"Expected a JSON object in {self.agent_type} hook payload",
                {"type": type(payload).__name__},
            )
        return payload


class ClaudeCodeParser(HookParser):
    """
    Parser for Claude Code hooks.

    Payload fields:
        session_id, cwd, hook_event_name, prompt (UserPromptSubmit only),
        transcript_path, permission_mode
    """

    agent_type = "claude-code"

    def parse(self, stream: TextIO, event_type: EventType) -> HookEvent:
        payload = self._load_payload(stream)

        session_id = payload.get("session_id") or ""
        cwd = payload.get("cwd") or ""
        if not session_id:
            raise HookInputError("Missing session_id in hook payload")
        if not cwd:
            raise HookInputError("Missing cwd in hook payload")

        prompt = payload.get("prompt") or ""
        if not isinstance(prompt, str):
            prompt = str(prompt)

        logger.debug(
            f"Parsed {payload.get('hook_event_name', '?')} for session {str(session_id)[:12]}"
        )
        return HookEvent(
            session_id=str(session_id),
            cwd=str(cwd),
            prompt_text=prompt,
            agent_type=self.agent_type,
            event_type=event_type,
        )


PARSERS: dict[str, type[HookParser]] = {
    ClaudeCodeParser.agent_type: ClaudeCodeParser,
}


def parser_for_agent(agent_type: str) -> HookParser:
    """
    Get the parser for an agent type. An empty name means Claude Code.

    Raises:
        UnknownAgentError: If no parser is registered for agent_type
    """
    parser_cls = PARSERS.get(agent_type or ClaudeCodeParser.agent_type)
    if parser_cls is None:
        raise UnknownAgentError(agent_type, sorted(PARSERS))
    return parser_cls()
