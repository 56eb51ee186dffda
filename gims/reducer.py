"""Content reduction for oversized change sets.

Turns a change set into prompt content that fits a token budget, trying
progressively lossier views:

1. full: the raw diff
2. summary: one "<path>: +<insertions> -<deletions>" line per file
3. status: categorized path lists (Added/Modified/Deleted/Renamed)
4. truncated: the status listing cut to the budget

If a repository view cannot be obtained, the content degrades to a fixed
fallback sentence. Nothing in this module raises to the caller.
"""

import asyncio
import math

from loguru import logger

from gims.config import DEFAULT_TOKEN_BUDGET
from gims.git.models import DiffSummary, WorkingTreeStatus
from gims.git.repository import ChangeSetSource
from gims.models import ReducedContent, ReductionStrategy

CHARS_PER_TOKEN = 4

# Characters kept free for the prompt framing when truncating
TRUNCATION_RESERVE_CHARS = 1000

TRUNCATION_MARKER = "\n\n[... content truncated due to size ...]"

FALLBACK_CONTENT = "Large changes across multiple files"

# Entries shown per status category
STATUS_CATEGORY_LIMIT = 10

# Above this many files the status listing reports how many were left out
STATUS_TOTAL_LIMIT = 30


def estimate_tokens(text: str) -> int:
    """Estimate the token count of text (about 4 characters per token)."""
    return math.ceil(len(text) / CHARS_PER_TOKEN)


def exceeds_budget(text: str, token_budget: int) -> bool:
    """Check whether text is estimated to exceed the token budget."""
    return estimate_tokens(text) > token_budget


def format_diff_summary(summary: DiffSummary) -> str:
    """Render a diff summary as one line per changed file."""
    return "\n".join(
        f"{stat.path}: +{stat.insertions} -{stat.deletions}" for stat in summary.files
    )


def _format_category(label: str, paths: list[str]) -> str:
    shown = paths[:STATUS_CATEGORY_LIMIT]
    line = f"{label} ({len(paths)}): {', '.join(shown)}"
    if len(paths) > STATUS_CATEGORY_LIMIT:
        line += f" (+{len(paths) - STATUS_CATEGORY_LIMIT} more)"
    return line


def format_status(status: WorkingTreeStatus) -> str:
    """Render a working tree status as categorized, capped path lists.

    Args:
        status: The working tree status.

    Returns:
        One line per non-empty category, plus a count of unlisted files when
        the change touches more than STATUS_TOTAL_LIMIT files.
    """
    categories = [
        ("Added", status.created),
        ("Modified", status.modified),
        ("Deleted", status.deleted),
        ("Renamed", [r.render() for r in status.renamed]),
    ]

    lines = []
    listed = 0
    for label, paths in categories:
        if paths:
            lines.append(_format_category(label, paths))
            listed += min(len(paths), STATUS_CATEGORY_LIMIT)

    total = len(status.files)
    if total > STATUS_TOTAL_LIMIT and total > listed:
        lines.append(f"... and {total - listed} more files")

    return "\n".join(lines)


def truncate_content(content: str, token_budget: int) -> str:
    """Hard-truncate content to the budget and append the truncation marker."""
    limit = max(token_budget * CHARS_PER_TOKEN - TRUNCATION_RESERVE_CHARS, 0)
    return content[:limit] + TRUNCATION_MARKER


async def reduce_content(
    diff: str,
    source: ChangeSetSource,
    token_budget: int = DEFAULT_TOKEN_BUDGET,
) -> ReducedContent:
    """Reduce a change set to content that fits the token budget.

    Args:
        diff: The raw diff text.
        source: Provides the cheaper summary and status views on demand.
        token_budget: Maximum estimated tokens for the content.

    Returns:
        The reduced content and the strategy that produced it.
    """
    if not exceeds_budget(diff, token_budget):
        return ReducedContent(content=diff, strategy=ReductionStrategy.FULL)

    logger.debug(
        f"Diff is ~{estimate_tokens(diff)} tokens (budget {token_budget}), using file summary"
    )
    try:
        summary = await asyncio.to_thread(source.diff_summary)
    except Exception as e:
        logger.debug(f"Could not get diff summary: {e}")
        return ReducedContent(content=FALLBACK_CONTENT, strategy=ReductionStrategy.FALLBACK)

    if not summary.changed:
        return ReducedContent(content=FALLBACK_CONTENT, strategy=ReductionStrategy.FALLBACK)

    logger.debug(
        f"Summary covers {summary.changed} files (+{summary.insertions} -{summary.deletions})"
    )
    content = format_diff_summary(summary)
    if not exceeds_budget(content, token_budget):
        return ReducedContent(content=content, strategy=ReductionStrategy.SUMMARY)

    logger.debug("File summary still over budget, using status listing")
    try:
        status = await asyncio.to_thread(source.status)
    except Exception as e:
        logger.debug(f"Could not get status: {e}")
        return ReducedContent(content=FALLBACK_CONTENT, strategy=ReductionStrategy.FALLBACK)

    if status.is_clean:
        return ReducedContent(content=FALLBACK_CONTENT, strategy=ReductionStrategy.FALLBACK)

    content = format_status(status)
    if not exceeds_budget(content, token_budget):
        return ReducedContent(content=content, strategy=ReductionStrategy.STATUS)

    logger.debug("Status listing still over budget, truncating")
    return ReducedContent(
        content=truncate_content(content, token_budget),
        strategy=ReductionStrategy.TRUNCATED,
    )
