"""``unitylauncher open QUERY`` — Open the best matching project.

Launches the editor version the project needs, or the Unity Hub when
that version is not installed. The editor is started detached.

Exit Codes:
    0 — A project matched (launch problems are reported as warnings).
    1 — No project matched QUERY.
"""

from __future__ import annotations

import sys

import click

from unitylauncher.cli.output import console, print_warnings
from unitylauncher.config import LauncherConfig
from unitylauncher.notify import CollectingWarningChannel
from unitylauncher.plugin import UnityProjectsPlugin


@click.command("open")
@click.argument("query")
@click.pass_obj
def open_command(config: LauncherConfig, query: str) -> None:
    """Open the Unity project that best matches QUERY."""
    warnings = CollectingWarningChannel()
    plugin = UnityProjectsPlugin(config, warnings=warnings)
    plugin.reload()
    entries = plugin.query(query)
    if not entries:
        print_warnings(warnings.drain())
        click.echo(f"No Unity project matches {query!r}.")
        sys.exit(1)

    best = entries[0]
    console.print(
        f"Opening [bold]{best.title}[/bold] "
        f"([dim]{best.project.required_version}[/dim])",
        highlight=False,
    )
    plugin.activate(best)
    print_warnings(warnings.drain())
