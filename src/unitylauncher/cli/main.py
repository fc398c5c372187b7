"""unitylauncher CLI: search and open local Unity projects.

Entry point for the ``unitylauncher`` command-line tool. Registers all
subcommands under a single Click group.

Commands:
    projects — List indexed projects, ranked for an optional query.
    editors  — List installed Unity editors.
    open     — Open the best match for a query in the right editor.

Usage::

    unitylauncher projects
    unitylauncher projects tower --format json
    unitylauncher editors
    unitylauncher open tower
    unitylauncher --config ~/unity.yaml -v projects
"""

from __future__ import annotations

import logging
import sys

import click
from rich.logging import RichHandler

from unitylauncher import __version__
from unitylauncher.cli.editors_cmd import editors_command
from unitylauncher.cli.open_cmd import open_command
from unitylauncher.cli.output import err_console
from unitylauncher.cli.projects_cmd import projects_command
from unitylauncher.config import load_config
from unitylauncher.exceptions import ConfigError


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=verbose)],
        force=True,
    )


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--config", "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="YAML settings file (default: ~/.config/unitylauncher/config.yaml).",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Show debug logging.")
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, verbose: bool) -> None:
    """unitylauncher: find local Unity projects and open them in the right editor.

    Projects come from the Unity Hub projects folder, Hub favorites and
    the Editor's recently-used list. Each one is matched against the
    editors installed through the Hub.
    """
    _configure_logging(verbose)
    try:
        ctx.obj = load_config(config_path)
    except ConfigError as exc:
        click.echo(f"Configuration error: {exc}", err=True)
        sys.exit(2)


# Register all subcommands
cli.add_command(projects_command)
cli.add_command(editors_command)
cli.add_command(open_command)
