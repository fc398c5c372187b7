"""Rich output formatting helpers for the unitylauncher CLI.

Installed-version coloring:
    installed = green, missing = bold red, favorites marked with a gold star
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from datetime import datetime

import click
from rich.console import Console
from rich.table import Table
from rich.text import Text

from unitylauncher.discovery.editors import EditorRegistry
from unitylauncher.plugin import ResultEntry

console = Console()
err_console = Console(stderr=True)


def entries_to_json(entries: Iterable[ResultEntry]) -> list[dict]:
    """Convert result entries to JSON-serializable dicts."""
    return [
        {
            "name": e.project.name,
            "path": str(e.project.path),
            "required_version": e.project.required_version,
            "is_favorite": e.project.is_favorite,
            "is_version_installed": e.project.is_version_installed,
            "last_modified": e.project.last_modified.isoformat(timespec="seconds"),
            "score": e.score,
        }
        for e in entries
    ]


def editors_to_json(registry: EditorRegistry) -> list[dict]:
    return [
        {"version": e.version, "path": str(e.launch_path)}
        for e in sorted(registry, key=lambda e: e.version)
    ]


def print_json(data: object) -> None:
    click.echo(json.dumps(data, indent=2))


def print_projects(entries: list[ResultEntry], now: datetime | None = None) -> None:
    """Print a ranked table of projects.

    Args:
        entries: Result entries, already ranked.
        now: Reference time for the "modified" column.
    """
    if not entries:
        console.print("[dim]No Unity projects found.[/dim]")
        return

    now = now or datetime.now()
    table = Table(title="Unity Projects", show_header=True, header_style="bold")
    table.add_column("", width=1)
    table.add_column("Project", style="bold")
    table.add_column("Version")
    table.add_column("Modified", justify="right", style="dim")
    table.add_column("Score", justify="right")
    table.add_column("Path", style="dim", overflow="fold")

    for entry in entries:
        project = entry.project
        star = Text("★", style="yellow") if project.is_favorite else Text("")
        version_style = "green" if project.is_version_installed else "bold red"
        days = max(0, (now - project.last_modified).days)
        table.add_row(
            star,
            project.name,
            Text(project.required_version, style=version_style),
            "today" if days == 0 else f"{days}d ago",
            str(entry.score),
            str(project.path),
        )
    console.print(table)

    missing = sum(1 for e in entries if not e.project.is_version_installed)
    parts = [f"[bold]{len(entries)}[/bold] project(s)"]
    if missing:
        parts.append(f"[red]{missing} need an editor that is not installed[/red]")
    console.print(" | ".join(parts))


def print_editors(registry: EditorRegistry) -> None:
    """Print the installed editors table."""
    if len(registry) == 0:
        console.print("[dim]No Unity editors found.[/dim]")
        return
    table = Table(title="Unity Editors", show_header=True, header_style="bold")
    table.add_column("Version", style="bold green")
    table.add_column("Executable", style="dim", overflow="fold")
    for editor in sorted(registry, key=lambda e: e.version):
        table.add_row(editor.version, str(editor.launch_path))
    console.print(table)


def print_warnings(messages: list[str]) -> None:
    """Print collected warnings to stderr."""
    for message in messages:
        err_console.print(f"[yellow]warning:[/yellow] {message}", highlight=False)
