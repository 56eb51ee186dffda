"""CLI command for committing with a generated message."""

import asyncio
from typing import Optional

import typer

from gims.cli.utils import (
    LOCAL_HEURISTIC_WARNING,
    build_options,
    open_repository_with_changes,
    setup_logging,
)
from gims.config import load_config
from gims.generator import CommitMessageGenerator
from gims.git import GitError
from gims.global_config import GlobalConfigError


def commit_command(
    yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Bypass confirmation prompt and commit immediately",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        "-n",
        help="Show the message without committing",
    ),
    amend: bool = typer.Option(
        False,
        "--amend",
        help="Amend the last commit instead of creating a new one",
    ),
    all_changes: bool = typer.Option(
        False,
        "--all",
        "-a",
        help="Stage all changes before generating",
    ),
    provider: Optional[str] = typer.Option(
        None,
        "--provider",
        help="AI provider: auto, gemini, openai, groq, none",
    ),
    model: Optional[str] = typer.Option(
        None,
        "--model",
        help="Model identifier for the provider",
    ),
    conventional: bool = typer.Option(
        False,
        "--conventional",
        "-c",
        help="Format messages using Conventional Commits",
    ),
    body: bool = typer.Option(
        False,
        "--body",
        "-b",
        help="Generate a commit body in addition to the subject",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show provider attempts and failures",
    ),
) -> None:
    """Generate a message for the staged changes and commit them.

    Messages from the local heuristic need confirmation unless --yes is given.
    """
    setup_logging(verbose)
    try:
        config = load_config()
    except GlobalConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    options = build_options(config, provider, model, conventional, body, verbose)
    repo = open_repository_with_changes(stage_all=all_changes)

    result = asyncio.run(CommitMessageGenerator(config).generate(repo, options))
    message = result.message.render()

    typer.echo("=" * 60)
    typer.echo(message)
    typer.echo("=" * 60)

    if dry_run:
        typer.echo("[dry-run] Would commit with the message above.")
        return

    if result.used_local:
        typer.echo(LOCAL_HEURISTIC_WARNING, err=True)
        if not yes:
            confirm = typer.prompt(
                "Proceed with this commit? [Y/n]",
                default="y",
                show_default=False,
            )
            if confirm.strip().lower() not in ("y", "yes", ""):
                typer.echo("Commit cancelled.", err=True)
                raise typer.Exit(0)

    try:
        commit_hash = repo.commit(message, amend=amend)
    except GitError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"✓ Committed {commit_hash[:8]}")
