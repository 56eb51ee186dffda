"""Google Gemini provider implementation."""

from typing import Optional

from google import genai
from google.genai import types

from gims.config import DEFAULT_MAX_TOKENS, DEFAULT_TEMPERATURE, LLMProvider
from gims.llm.base import BaseLLMProvider, LLMError

# Models that have built-in "thinking" which consumes output tokens
# even without explicit thinking config
THINKING_MODELS = [
    "gemini-2.5-flash",
    "gemini-2.5-pro",
    "gemini-2.0-flash-thinking",
    "gemini-3",
]

# Multiplier for max_output_tokens on thinking models
THINKING_TOKEN_MULTIPLIER = 3


class GeminiProvider(BaseLLMProvider):
    """Google Gemini LLM provider."""

    provider = LLMProvider.GEMINI

    def __init__(self, api_key: Optional[str], model: Optional[str] = None):
        super().__init__(api_key, model=model)
        self._client: Optional[genai.Client] = None

    @property
    def client(self) -> genai.Client:
        """The SDK client, created on first use and shared by later calls."""
        if self._client is None:
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    def _is_thinking_model(self, model: str) -> bool:
        """Check if a model spends output tokens on internal reasoning."""
        return any(thinking_model in model.lower() for thinking_model in THINKING_MODELS)

    async def generate(
        self,
        prompt: str,
        model: Optional[str] = None,
        temperature: float = DEFAULT_TEMPERATURE,
        max_tokens: int = DEFAULT_MAX_TOKENS,
    ) -> str:
        """Generate a completion using Google Gemini.

        Raises:
            LLMError: If the API call fails, is blocked, or returns nothing.
        """
        model = self.resolve_model(model)

        effective_max_tokens = max_tokens
        if self._is_thinking_model(model):
            effective_max_tokens = max_tokens * THINKING_TOKEN_MULTIPLIER

        try:
            response = await self.client.aio.models.generate_content(
                model=model,
                contents=prompt,
                config=types.GenerateContentConfig(
                    max_output_tokens=effective_max_tokens,
                    temperature=temperature,
                ),
            )
        except Exception as e:
            raise LLMError(f"Google Gemini API call failed: {e}") from e

        try:
            if not response.candidates:
                raise LLMError("Google Gemini returned no candidates in response")

            candidate = response.candidates[0]
            if hasattr(candidate, "finish_reason"):
                finish_reason = str(candidate.finish_reason)
                if "SAFETY" in finish_reason:
                    raise LLMError(
                        f"Google Gemini blocked response due to safety filters: {finish_reason}"
                    )

            raw_response = response.text

        except LLMError:
            raise
        except Exception as e:
            raise LLMError(f"Google Gemini returned a malformed response: {e}") from e

        return self.clean_response(raw_response)
