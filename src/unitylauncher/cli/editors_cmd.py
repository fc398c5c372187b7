"""``unitylauncher editors`` — List installed Unity editors.

Exit Codes:
    0 — Always (informational command).
"""

from __future__ import annotations

import click

from unitylauncher.cli.output import editors_to_json, print_editors, print_json, print_warnings
from unitylauncher.config import LauncherConfig
from unitylauncher.notify import CollectingWarningChannel
from unitylauncher.plugin import UnityProjectsPlugin


@click.command("editors")
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format: text (default) or json.",
)
@click.pass_obj
def editors_command(config: LauncherConfig, output_format: str) -> None:
    """List the Unity editor versions installed through the Hub."""
    warnings = CollectingWarningChannel()
    plugin = UnityProjectsPlugin(config, warnings=warnings)
    plugin.reload()
    registry = plugin.snapshot.editors

    if output_format == "json":
        print_json(editors_to_json(registry))
    else:
        print_editors(registry)
    print_warnings(warnings.drain())
