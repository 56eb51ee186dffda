"""OpenAI GPT provider implementation."""

from typing import Optional

from openai import AsyncOpenAI

from gims.config import DEFAULT_MAX_TOKENS, DEFAULT_TEMPERATURE, LLMProvider
from gims.llm.base import BaseLLMProvider, LLMError

# Reasoning models reject a custom temperature and the legacy max_tokens field
REASONING_MODEL_PREFIXES = ("gpt-5", "o1", "o3", "o4")


class OpenAIProvider(BaseLLMProvider):
    """OpenAI GPT LLM provider."""

    provider = LLMProvider.OPENAI

    def _request_params(self, model: str, temperature: float, max_tokens: int) -> dict:
        """Build model-specific generation parameters."""
        if model.lower().startswith(REASONING_MODEL_PREFIXES):
            return {"max_completion_tokens": max_tokens}
        return {"max_tokens": max_tokens, "temperature": temperature}

    async def generate(
        self,
        prompt: str,
        model: Optional[str] = None,
        temperature: float = DEFAULT_TEMPERATURE,
        max_tokens: int = DEFAULT_MAX_TOKENS,
    ) -> str:
        """Generate a completion using OpenAI chat completions.

        Raises:
            LLMError: If the API call fails or the response is malformed.
        """
        model = self.resolve_model(model)

        try:
            async with AsyncOpenAI(api_key=self.api_key) as client:
                response = await client.chat.completions.create(
                    model=model,
                    messages=[{"role": "user", "content": prompt}],
                    **self._request_params(model, temperature, max_tokens),
                )
            raw_response = response.choices[0].message.content
        except Exception as e:
            raise LLMError(f"OpenAI API call failed: {e}") from e

        return self.clean_response(raw_response)
