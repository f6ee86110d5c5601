"""
agentstats CLI - Typer Commands

Entry points:
  agentstats hook prompt-start|prompt-end   (called by agent hooks)
  agentstats stats                           (working-time summary)
  agentstats history                         (recent prompts)
"""

import logging
import os

import typer
from rich.console import Console
from rich.markup import escape

from agentstats.cli.display import show_history, show_project_not_found, show_stats
from agentstats.cli.hook import run_hook
from agentstats.config import AgentStatsConfig, load_config
from agentstats.exceptions import AgentStatsError
from agentstats.hooks import EventType
from agentstats.integrations.git_ops import GitOps
from agentstats.persistence.repository import StatsRepository
from agentstats.reports import load_history, load_stats
from agentstats.tracking.resolver import ProjectResolver

logger = logging.getLogger(__name__)
console = Console()

app = typer.Typer(
    name="agentstats",
    help="Track AI coding agent working time and prompt history.",
    add_completion=False,
    no_args_is_help=True,
)

hook_app = typer.Typer(
    help="Receive hook events from AI coding agents (always exits 0).",
    add_completion=False,
    no_args_is_help=True,
)
app.add_typer(hook_app, name="hook")


AGENT_OPTION = typer.Option(None, "--agent", help="Agent type (default: claude-code)")
DB_OPTION = typer.Option(None, "--db", help="Path to database (default: XDG data dir)")
PROJECT_OPTION = typer.Option(
    None, "--project", "-p", help="Project directory (default: current directory)"
)


@hook_app.command("prompt-start")
def prompt_start(agent: str = AGENT_OPTION, db: str = DB_OPTION) -> None:
    """Record the start of a prompt (UserPromptSubmit event)."""
    run_hook(EventType.PROMPT_START, agent=agent, db_path=db)


@hook_app.command("prompt-end")
def prompt_end(agent: str = AGENT_OPTION, db: str = DB_OPTION) -> None:
    """Record the end of a prompt (Stop event)."""
    run_hook(EventType.PROMPT_END, agent=agent, db_path=db)


def _open_repository(config: AgentStatsConfig, db: str | None) -> StatsRepository:
    return StatsRepository(db or config.db_path, busy_timeout=config.busy_timeout_seconds)


@app.command()
def stats(project: str = PROJECT_OPTION, db: str = DB_OPTION) -> None:
    """Show AI working time statistics for a project."""
    directory = project or os.getcwd()
    try:
        config = load_config()
        with _open_repository(config, db) as repo:
            resolver = ProjectResolver(repo, GitOps(timeout=config.git_timeout_seconds))
            found = resolver.find(directory)
            if found is None:
                show_project_not_found(directory)
                return
            show_stats(load_stats(repo, found))

    except AgentStatsError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)


@app.command()
def history(
    project: str = PROJECT_OPTION,
    db: str = DB_OPTION,
    limit: int = typer.Option(None, "--limit", "-n", help="Number of prompts to show"),
) -> None:
    """Show recent prompt history for a project."""
    directory = project or os.getcwd()
    try:
        config = load_config()
        with _open_repository(config, db) as repo:
            resolver = ProjectResolver(repo, GitOps(timeout=config.git_timeout_seconds))
            found = resolver.find(directory)
            if found is None:
                show_project_not_found(directory)
                return
            show_history(load_history(repo, found, limit=limit or config.history_limit))

    except AgentStatsError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)


def run() -> None:
    """Entry point wrapper that invokes the Typer app."""
    app()


if __name__ == "__main__":
    run()
