"""CLI entry point for gims.

This module provides the main CLI application that combines all commands
and subcommands into a single unified interface.
"""

from typing import Optional

import typer

from gims import __version__
from gims.cli.commit import commit_command
from gims.cli.config import config_app
from gims.cli.suggest import suggest_command
from gims.cli.tool import tool_command

# Main application
app = typer.Typer(
    name="gims",
    help="gims: Git Made Simple, with AI commit messages",
    add_completion=False,
    no_args_is_help=True,
)

# Add subcommand groups
app.add_typer(config_app, name="config")

# Add individual commands
app.command("suggest")(suggest_command)
app.command("sg", hidden=True)(suggest_command)
app.command("commit")(commit_command)
app.command("local", hidden=True)(commit_command)
app.command("tool")(tool_command)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"gims {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """AI-powered git commit messages."""
