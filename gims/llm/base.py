"""Base class shared by the remote LLM providers."""

from abc import ABC, abstractmethod
from typing import Optional

from gims.config import (
    DEFAULT_MAX_TOKENS,
    DEFAULT_MODELS,
    DEFAULT_TEMPERATURE,
    LLMProvider,
    get_api_key_env_var,
)
from gims.llm.exceptions import EmptyResponseError, LLMError, MissingAPIKeyError


class BaseLLMProvider(ABC):
    """Abstract base class for remote LLM providers.

    Every provider exposes the same capability: turn a prompt into completion
    text, or raise an LLMError.
    """

    provider: LLMProvider

    def __init__(self, api_key: Optional[str], model: Optional[str] = None):
        """Initialize the provider.

        Args:
            api_key: The API key for the provider.
            model: Default model for this instance. Falls back to the
                provider's built-in default.

        Raises:
            MissingAPIKeyError: If no API key is given.
        """
        if not api_key:
            raise MissingAPIKeyError(
                f"{self.name} API key not found. Set it using:\n"
                f"  1. Environment variable: export {self.api_key_env_var}=your_key_here\n"
                f"  2. Run: gims config set-key {self.name}"
            )
        self.api_key = api_key
        self.model = model or DEFAULT_MODELS[self.provider]

    @property
    def name(self) -> str:
        return self.provider.value

    @property
    def api_key_env_var(self) -> str:
        return get_api_key_env_var(self.provider)

    def resolve_model(self, model: Optional[str] = None) -> str:
        """Return the per-call model override, or this instance's model."""
        return model or self.model

    @staticmethod
    def clean_response(raw_response: Optional[str]) -> str:
        """Strip a completion and reject empty output.

        Raises:
            EmptyResponseError: If the completion is empty or whitespace.
        """
        text = (raw_response or "").strip()
        if not text:
            raise EmptyResponseError("LLM returned an empty response")
        return text

    @abstractmethod
    async def generate(
        self,
        prompt: str,
        model: Optional[str] = None,
        temperature: float = DEFAULT_TEMPERATURE,
        max_tokens: int = DEFAULT_MAX_TOKENS,
    ) -> str:
        """Generate a completion for the prompt.

        Args:
            prompt: The full instruction string.
            model: Model identifier override for this call.
            temperature: Sampling temperature.
            max_tokens: Maximum output tokens.

        Returns:
            The stripped completion text.

        Raises:
            LLMError: For any failure (network, auth, rate limit, malformed
                or empty response).
        """
        pass


__all__ = [
    "BaseLLMProvider",
    "EmptyResponseError",
    "LLMError",
    "MissingAPIKeyError",
]
