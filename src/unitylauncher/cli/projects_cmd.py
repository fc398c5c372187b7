"""``unitylauncher projects [QUERY]`` — List ranked Unity projects.

Exit Codes:
    0 — At least one project listed.
    1 — A query was given and nothing matched it.
"""

from __future__ import annotations

import sys

import click

from unitylauncher.cli.output import entries_to_json, print_json, print_projects, print_warnings
from unitylauncher.config import LauncherConfig
from unitylauncher.notify import CollectingWarningChannel
from unitylauncher.plugin import UnityProjectsPlugin


@click.command("projects")
@click.argument("query", required=False, default="")
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format: text (default) or json.",
)
@click.option("--limit", type=click.IntRange(min=1), default=None, help="Show at most N projects.")
@click.pass_obj
def projects_command(
    config: LauncherConfig,
    query: str,
    output_format: str,
    limit: int | None,
) -> None:
    """List local Unity projects, best match first.

    With QUERY, only projects whose name fuzzy-matches it are shown.
    Favorites and recently modified projects rank higher.
    """
    warnings = CollectingWarningChannel()
    plugin = UnityProjectsPlugin(config, warnings=warnings)
    plugin.reload()
    entries = plugin.query(query)
    if limit is not None:
        entries = entries[:limit]

    if output_format == "json":
        print_json(entries_to_json(entries))
    else:
        print_projects(entries)
    print_warnings(warnings.drain())

    if query and not entries:
        sys.exit(1)
