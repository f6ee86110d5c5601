"""
agentstats CLI components.

Split into focused modules:
- hook.py: one hook invocation (parse, record, log)
- display.py: rich rendering for reports
- typer_commands.py: CLI entry points (hook, stats, history)
"""

from agentstats.cli.hook import run_hook
from agentstats.cli.typer_commands import app, history, run, stats

__all__ = [
    "app",
    "run",
    "run_hook",
    "stats",
    "history",
]
