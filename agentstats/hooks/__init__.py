"""
Hook event source.

Agents call `agentstats hook prompt-start|prompt-end` with a JSON payload
on stdin; this package normalizes that payload into a HookEvent.
"""

from agentstats.hooks.events import EventType, HookEvent
from agentstats.hooks.parsers import (
    PARSERS,
    ClaudeCodeParser,
    HookParser,
    parser_for_agent,
)

__all__ = [
    "EventType",
    "HookEvent",
    "HookParser",
    "ClaudeCodeParser",
    "PARSERS",
    "parser_for_agent",
]
