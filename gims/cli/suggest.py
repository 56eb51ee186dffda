"""CLI command for suggesting commit messages."""

import asyncio
import json
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
from gims.global_config import GlobalConfigError


def suggest_command(
    multiple: bool = typer.Option(
        False,
        "--multiple",
        "-m",
        help="Suggest several messages in different styles",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        "-j",
        help="Print the result as JSON",
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
    """Suggest a commit message for the staged changes."""
    setup_logging(verbose)
    try:
        config = load_config()
    except GlobalConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    options = build_options(config, provider, model, conventional, body, verbose)
    repo = open_repository_with_changes(stage_all=all_changes)
    generator = CommitMessageGenerator(config)

    if multiple:
        suggestions = asyncio.run(generator.suggest(repo, options, count=3))
        if json_output:
            typer.echo(json.dumps({"suggestions": suggestions}))
            return

        typer.echo("Suggested commit messages:")
        typer.echo("")
        for i, suggestion in enumerate(suggestions, 1):
            typer.echo(f"{i}. {suggestion}")
        return

    result = asyncio.run(generator.generate(repo, options))

    if json_output:
        out = {"message": result.message.render(), "usedLocalHeuristics": result.used_local}
        typer.echo(json.dumps(out))
        return

    if result.used_local:
        typer.echo(LOCAL_HEURISTIC_WARNING, err=True)

    typer.echo(result.message.render())
