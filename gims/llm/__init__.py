"""LLM provider module for gims.

This module provides a unified interface to the supported remote providers.
Provider credentials come from the GimsConfig passed in by the caller.
"""

from typing import Optional

from gims.config import GimsConfig, LLMProvider
from gims.llm.base import (
    BaseLLMProvider,
    EmptyResponseError,
    LLMError,
    MissingAPIKeyError,
)


def get_provider(
    provider: LLMProvider,
    config: GimsConfig,
    model: Optional[str] = None,
) -> BaseLLMProvider:
    """Get an LLM provider instance.

    Args:
        provider: The provider to use.
        config: Resolved configuration holding credentials.
        model: Default model for the instance (provider default if omitted).

    Returns:
        An instance of the appropriate LLM provider.

    Raises:
        MissingAPIKeyError: If the provider has no API key configured.
        ValueError: If the provider is not supported.
    """
    api_key = config.get_api_key(provider) if isinstance(provider, LLMProvider) else None

    if provider == LLMProvider.GEMINI:
        from gims.llm.google_provider import GeminiProvider

        return GeminiProvider(api_key, model=model)

    elif provider == LLMProvider.OPENAI:
        from gims.llm.openai_provider import OpenAIProvider

        return OpenAIProvider(api_key, model=model)

    elif provider == LLMProvider.GROQ:
        from gims.llm.groq_provider import GroqProvider

        return GroqProvider(api_key, model=model, base_url=config.groq_base_url)

    else:
        raise ValueError(f"Unsupported provider: {provider}")


__all__ = [
    "BaseLLMProvider",
    "EmptyResponseError",
    "LLMError",
    "MissingAPIKeyError",
    "get_provider",
]
