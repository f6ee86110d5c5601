"""
agentstats CLI - Report Display

Rich rendering for the stats and history commands.
"""

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from agentstats.reports import HistoryRow, ProjectStats, format_duration

console = Console()


def show_project_not_found(directory: str) -> None:
    """Tell the user nothing has been recorded for a directory yet."""
    console.print(f"No project found for [cyan]{escape(directory)}[/cyan]")
    console.print("[dim]Run an AI agent in this directory first to start tracking.[/dim]")


def show_stats(stats: ProjectStats) -> None:
    """Display working-time statistics for a project."""
    project = stats.project

    name = f"[bold]{escape(project.short_name)}[/bold]"
    if project.display_origin:
        name += f" [dim]({escape(project.display_origin)})[/dim]"

    console.print(f"Project:               {name}")
    if project.git_origin:
        console.print(f"Git origin:            {escape(project.git_origin)}")
    console.print(f"Total prompts:         {stats.total_prompts}")
    console.print(f"Total AI working time: [green]{format_duration(stats.total_seconds)}[/green]")

    if stats.average_seconds is not None:
        console.print(f"Average per prompt:    {format_duration(stats.average_seconds)}")

    if stats.period:
        console.print(f"Time period:           {stats.period}")


def show_history(rows: list[HistoryRow]) -> None:
    """Display the prompt history table."""
    if not rows:
        console.print("[dim]No prompts recorded yet.[/dim]")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Time", style="cyan", no_wrap=True)
    table.add_column("Duration", no_wrap=True)
    table.add_column("Prompt")

    for row in rows:
        duration = row.duration if row.duration != "-" else "[yellow]-[/yellow]"
        table.add_row(
            str(row.number),
            row.submitted_at,
            duration,
            escape(row.prompt_text),
        )

    console.print(table)
