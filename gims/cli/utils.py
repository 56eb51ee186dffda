"""Shared helpers for CLI commands."""

import sys
from typing import Optional

import typer
from loguru import logger

from gims.config import PROVIDER_AUTO, PROVIDER_NONE, GimsConfig, LLMProvider
from gims.git import GitError, GitRepository, NoStagedChangesError, get_repo_root
from gims.models import GenerationOptions

VALID_PROVIDERS = [PROVIDER_AUTO] + [p.value for p in LLMProvider] + [PROVIDER_NONE]

LOCAL_HEURISTIC_WARNING = "⚠ No AI provider available - using local heuristics"


def setup_logging(verbose: bool = False) -> None:
    """Send log output to stderr; debug detail only when verbose."""
    logger.remove()  # Remove default handler
    logger.add(
        sys.stderr,
        level="DEBUG" if verbose else "INFO",
        format="<level>{level: <8}</level> | <level>{message}</level>",
        colorize=True,
    )


def build_options(
    config: GimsConfig,
    provider: Optional[str] = None,
    model: Optional[str] = None,
    conventional: bool = False,
    body: bool = False,
    verbose: bool = False,
) -> GenerationOptions:
    """Merge command-line flags over the configured defaults.

    Exits with status 1 if the provider name is not recognized.
    """
    provider = (provider or config.provider).lower()
    if provider not in VALID_PROVIDERS:
        typer.echo(f"Invalid provider: {provider}", err=True)
        typer.echo(f"Valid providers: {', '.join(VALID_PROVIDERS)}", err=True)
        raise typer.Exit(1)

    return GenerationOptions(
        provider=provider,
        model=model or config.model,
        conventional=conventional or config.conventional,
        body=body,
        temperature=config.temperature,
        max_tokens=config.max_tokens,
        verbose=verbose,
    )


def open_repository_with_changes(stage_all: bool = False) -> GitRepository:
    """Open the current repository and make sure something is staged.

    Exits with status 1 outside a repository or when nothing is staged.
    """
    try:
        repo = GitRepository(get_repo_root())
        if stage_all:
            repo.stage_all()
        if not repo.diff().strip():
            raise NoStagedChangesError(
                "No staged changes found. Stage your changes first with: git add <files> "
                "(or pass --all)"
            )
    except NoStagedChangesError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(1)
    except GitError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    return repo
