"""CLI command for agents that call gims as a tool.

Prints JSON only, so the output can be handed straight back to a
function-calling model.
"""

import asyncio
import json
from typing import Optional

import typer

from gims.cli.utils import setup_logging
from gims.config import load_config
from gims.generator import CommitMessageGenerator
from gims.git import GitError, GitRepository, get_repo_root
from gims.global_config import GlobalConfigError
from gims.tools import ToolError, call_tool, list_tools


def tool_command(
    name: Optional[str] = typer.Argument(
        None,
        help="Tool to call, e.g. generate_commit_message",
    ),
    arguments: str = typer.Argument(
        "{}",
        help="Tool arguments as a JSON object",
    ),
    list_only: bool = typer.Option(
        False,
        "--list",
        "-l",
        help="Print the available tools and their input schemas",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show provider attempts and failures",
    ),
) -> None:
    """Call a gims tool with JSON arguments and print the JSON result."""
    setup_logging(verbose)

    if list_only or name is None:
        typer.echo(json.dumps({"tools": list_tools()}, indent=2))
        return

    try:
        parsed = json.loads(arguments)
    except json.JSONDecodeError as e:
        typer.echo(json.dumps({"error": f"Arguments are not valid JSON: {e}"}))
        raise typer.Exit(1)

    try:
        config = load_config()
        repo = GitRepository(get_repo_root())
        result = asyncio.run(call_tool(name, parsed, repo, CommitMessageGenerator(config)))
    except (ToolError, GitError, GlobalConfigError) as e:
        typer.echo(json.dumps({"error": str(e)}))
        raise typer.Exit(1)

    typer.echo(json.dumps(result))
    if "error" in result:
        raise typer.Exit(1)
