"""Tool-call interface for agents and editor integrations.

Exposes commit message generation as a named tool with a JSON input
schema, the shape function-calling APIs and MCP clients list and invoke.

Contains:
- GenerateCommitMessageArgs: Validated arguments of generate_commit_message
- ToolError: Unknown tool or invalid arguments
- list_tools: Tool definitions (name, description, input schema)
- call_tool: Run a tool by name and return its JSON-ready result
"""

import asyncio
from typing import Any, Optional

from loguru import logger
from pydantic import BaseModel, Field, ValidationError

from gims.generator import CommitMessageGenerator
from gims.git.repository import ChangeSetSource
from gims.models import GenerationOptions

GENERATE_COMMIT_MESSAGE = "generate_commit_message"

NO_STAGED_CHANGES = "No staged changes to generate message for."


class ToolError(Exception):
    """Raised for an unknown tool name or arguments that fail validation."""

    pass


class GenerateCommitMessageArgs(BaseModel):
    """Arguments accepted by the generate_commit_message tool.

    Unset values fall back to the generator's configuration.
    """

    conventional: Optional[bool] = Field(
        default=None, description="Use Conventional Commits format for the subject"
    )
    body: bool = Field(default=False, description="Add an explanatory body after the subject")
    provider: Optional[str] = Field(
        default=None, description="AI provider: auto, gemini, openai, groq, none"
    )
    model: Optional[str] = Field(default=None, description="Model identifier for the provider")


def _options_for(
    args: GenerateCommitMessageArgs, generator: CommitMessageGenerator
) -> GenerationOptions:
    config = generator.config
    return GenerationOptions(
        provider=args.provider or config.provider,
        model=args.model or config.model,
        conventional=config.conventional if args.conventional is None else args.conventional,
        body=args.body,
        temperature=config.temperature,
        max_tokens=config.max_tokens,
    )


async def generate_commit_message_tool(
    args: GenerateCommitMessageArgs,
    source: ChangeSetSource,
    generator: CommitMessageGenerator,
) -> dict[str, Any]:
    """Generate a message for the staged changes of `source`.

    Returns:
        {"message", "usedLocalHeuristics", "original_diff_size"}, or
        {"error"} when nothing is staged.
    """
    diff = await asyncio.to_thread(source.diff)
    if not diff.strip():
        return {"error": NO_STAGED_CHANGES}

    result = await generator.generate(source, _options_for(args, generator))
    return {
        "message": result.message.render(),
        "usedLocalHeuristics": result.used_local,
        "original_diff_size": len(diff),
    }


# Tool name -> (description, arguments model, handler)
_TOOLS = {
    GENERATE_COMMIT_MESSAGE: (
        "Generate a high-quality commit message based on currently staged changes.",
        GenerateCommitMessageArgs,
        generate_commit_message_tool,
    ),
}


def list_tools() -> list[dict[str, Any]]:
    """Return every tool as {"name", "description", "inputSchema"}."""
    return [
        {
            "name": name,
            "description": description,
            "inputSchema": args_model.model_json_schema(),
        }
        for name, (description, args_model, _) in _TOOLS.items()
    ]


async def call_tool(
    name: str,
    arguments: Optional[dict[str, Any]],
    source: ChangeSetSource,
    generator: Optional[CommitMessageGenerator] = None,
) -> dict[str, Any]:
    """Validate arguments and run the named tool against a change set.

    Args:
        name: Tool name from list_tools().
        arguments: Raw JSON arguments from the client (None means none).
        source: The change set to describe.
        generator: Generator to use; a default one is built when omitted.

    Raises:
        ToolError: If the tool is unknown or the arguments are invalid.
    """
    if name not in _TOOLS:
        raise ToolError(f"Unknown tool: {name}")

    _, args_model, handler = _TOOLS[name]
    try:
        args = args_model.model_validate(arguments or {})
    except ValidationError as e:
        raise ToolError(f"Invalid arguments for {name}: {e}") from e

    logger.debug(f"Calling tool {name} with {args.model_dump(exclude_none=True)}")
    return await handler(args, source, generator or CommitMessageGenerator())
