"""Groq provider implementation."""

from typing import Optional

from groq import AsyncGroq

from gims.config import DEFAULT_MAX_TOKENS, DEFAULT_TEMPERATURE, LLMProvider
from gims.llm.base import BaseLLMProvider, LLMError

# AsyncGroq appends this path itself; GROQ_BASE_URL values often include it
_OPENAI_COMPAT_PATH = "/openai/v1"


def sdk_base_url(base_url: str) -> str:
    """Reduce a Groq endpoint to the root the SDK expects.

    Both "https://api.groq.com" and the OpenAI-style
    "https://api.groq.com/openai/v1" are accepted.
    """
    root = base_url.rstrip("/")
    if root.endswith(_OPENAI_COMPAT_PATH):
        root = root[: -len(_OPENAI_COMPAT_PATH)]
    return root


class GroqProvider(BaseLLMProvider):
    """Groq LLM provider (fast inference for open-source models)."""

    provider = LLMProvider.GROQ

    def __init__(
        self,
        api_key: Optional[str],
        model: Optional[str] = None,
        base_url: Optional[str] = None,
    ):
        """Initialize the Groq provider.

        Args:
            api_key: The Groq API key.
            model: The model to use. Defaults to groq/compound.
            base_url: API base URL override (GROQ_BASE_URL), with or without
                the trailing /openai/v1.
        """
        super().__init__(api_key, model=model)
        self.base_url = base_url

    def _client_kwargs(self) -> dict:
        kwargs = {"api_key": self.api_key}
        if self.base_url:
            kwargs["base_url"] = sdk_base_url(self.base_url)
        return kwargs

    async def generate(
        self,
        prompt: str,
        model: Optional[str] = None,
        temperature: float = DEFAULT_TEMPERATURE,
        max_tokens: int = DEFAULT_MAX_TOKENS,
    ) -> str:
        """Generate a completion using Groq.

        Raises:
            LLMError: If the API call fails or the response is malformed.
        """
        model = self.resolve_model(model)

        try:
            # Groq's API is OpenAI-compatible
            async with AsyncGroq(**self._client_kwargs()) as client:
                response = await client.chat.completions.create(
                    model=model,
                    max_tokens=max_tokens,
                    temperature=temperature,
                    messages=[{"role": "user", "content": prompt}],
                )
            raw_response = response.choices[0].message.content
        except Exception as e:
            raise LLMError(f"Groq API call failed: {e}") from e

        return self.clean_response(raw_response)
