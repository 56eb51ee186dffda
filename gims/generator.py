"""Commit message generation pipeline.

Wires the stages together for one request:

    change set -> cache lookup -> content reducer -> prompt builder
        -> provider dispatcher -> normalizer -> cache store

Generation is total: for any input a CommitMessage comes back, never an
exception. Failures degrade to lower-quality messages instead.
"""

import asyncio
from typing import Optional, Union

from loguru import logger

from gims.cache import ResponseCache, compute_fingerprint
from gims.config import GimsConfig
from gims.formatters import normalize_message
from gims.git.repository import ChangeSetSource, DiffTextChangeSet
from gims.llm.dispatcher import ABSOLUTE_FALLBACK_MESSAGE, dispatch
from gims.llm.local import LOCAL_PROVIDER_NAME
from gims.llm.prompts import build_prompt
from gims.models import (
    CommitMessage,
    GenerationOptions,
    GenerationResult,
    ReductionStrategy,
)
from gims.reducer import exceeds_budget, reduce_content

# Used when even the reduced prompt does not fit the token budget
OVERSIZED_CHANGE_MESSAGE = "Update project files"

SUGGESTION_VARIANTS = [
    {"conventional": False},
    {"conventional": True},
    {"conventional": True, "body": True},
]


def _as_source(source: Union[str, ChangeSetSource]) -> ChangeSetSource:
    if isinstance(source, str):
        return DiffTextChangeSet(source)
    return source


def _local_result(
    subject: str, strategy: Optional[ReductionStrategy] = None
) -> GenerationResult:
    return GenerationResult(
        message=CommitMessage(subject=subject),
        used_local=True,
        provider=LOCAL_PROVIDER_NAME,
        strategy=strategy,
    )


class CommitMessageGenerator:
    """Generates commit messages for one gims invocation.

    Holds the resolved configuration and the response cache shared by all
    requests made through this instance.

    Args:
        config: Resolved configuration. Defaults to built-in settings with no
            credentials (local heuristics only).
        cache: Response cache. Built from the config when omitted.
    """

    def __init__(
        self,
        config: Optional[GimsConfig] = None,
        cache: Optional[ResponseCache] = None,
    ):
        self.config = config or GimsConfig()
        if cache is None:
            cache = ResponseCache(
                max_entries=self.config.cache_max_entries,
                ttl_seconds=self.config.cache_ttl_seconds,
                enabled=self.config.cache_enabled,
            )
        self.cache = cache

    async def generate(
        self,
        source: Union[str, ChangeSetSource],
        options: Optional[GenerationOptions] = None,
    ) -> GenerationResult:
        """Generate a commit message for a change set.

        Args:
            source: Diff text, or a source providing diff/summary/status views.
            options: Generation options (defaults when omitted).

        Returns:
            The message and whether it came from the local heuristic.
        """
        options = options or GenerationOptions()
        try:
            return await self._generate(_as_source(source), options)
        except Exception as e:
            logger.warning(f"Commit message generation failed: {e}")
            return _local_result(ABSOLUTE_FALLBACK_MESSAGE)

    async def _generate(
        self, source: ChangeSetSource, options: GenerationOptions
    ) -> GenerationResult:
        try:
            diff = await asyncio.to_thread(source.diff)
        except Exception as e:
            logger.debug(f"Could not read diff: {e}")
            diff = ""

        fingerprint = compute_fingerprint(diff, options)
        cached = self.cache.get(fingerprint)
        if cached is not None:
            if options.verbose:
                logger.info("Using cached result")
            return GenerationResult(
                message=cached.message,
                used_local=cached.used_local,
                cached=True,
            )

        budget = self.config.token_budget
        reduced = await reduce_content(diff, source, budget)
        prompt = build_prompt(reduced.content, reduced.strategy, options)

        if exceeds_budget(prompt, budget):
            logger.warning("Changes are too large to describe, using a default message")
            return _local_result(OVERSIZED_CHANGE_MESSAGE, reduced.strategy)

        provider_result = await dispatch(prompt, diff, options, self.config)
        message = normalize_message(provider_result.text, options)

        self.cache.put(fingerprint, message, provider_result.used_local)

        return GenerationResult(
            message=message,
            used_local=provider_result.used_local,
            provider=provider_result.provider,
            strategy=reduced.strategy,
        )

    async def suggest(
        self,
        source: Union[str, ChangeSetSource],
        options: Optional[GenerationOptions] = None,
        count: int = 3,
    ) -> list[str]:
        """Generate distinct subjects in several styles.

        Tries up to `count` style variants (plain, conventional,
        conventional with body) and returns their deduplicated subjects.

        Returns:
            At least one subject.
        """
        options = options or GenerationOptions()
        source = _as_source(source)
        suggestions: list[str] = []

        for update in SUGGESTION_VARIANTS[: max(count, 0)]:
            variant = options.model_copy(update=update)
            try:
                result = await self.generate(source, variant)
            except Exception as e:
                logger.debug(f"Suggestion variant {update} failed: {e}")
                continue

            subject = result.message.subject
            if subject and subject not in suggestions:
                suggestions.append(subject)

        if not suggestions:
            suggestions.append(ABSOLUTE_FALLBACK_MESSAGE)

        return suggestions


async def generate_commit_message(
    source: Union[str, ChangeSetSource],
    options: Optional[GenerationOptions] = None,
    config: Optional[GimsConfig] = None,
    cache: Optional[ResponseCache] = None,
) -> GenerationResult:
    """Generate a commit message for a change set.

    This is the main entry point for programmatic use.
    """
    return await CommitMessageGenerator(config, cache).generate(source, options)


async def generate_multiple_suggestions(
    source: Union[str, ChangeSetSource],
    options: Optional[GenerationOptions] = None,
    count: int = 3,
    config: Optional[GimsConfig] = None,
    cache: Optional[ResponseCache] = None,
) -> list[str]:
    """Generate up to `count` distinct commit subjects in different styles."""
    return await CommitMessageGenerator(config, cache).suggest(source, options, count)
