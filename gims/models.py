"""Data models for the commit message generation pipeline.

Contains:
- ReductionStrategy: Which tier of the content reducer produced the prompt content
- GenerationOptions: Per-request style and provider options
- ReducedContent: Output of the content reducer
- ProviderResult: Raw completion text and the backend that produced it
- CommitMessage: Normalized subject and optional body
- GenerationResult: What the generator hands back to callers
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, field_validator

from gims.config import DEFAULT_MAX_TOKENS, DEFAULT_PROVIDER, DEFAULT_TEMPERATURE


class ReductionStrategy(str, Enum):
    """Tier of the content reducer that produced the prompt content."""

    FULL = "full"
    SUMMARY = "summary"
    STATUS = "status"
    TRUNCATED = "truncated"
    FALLBACK = "fallback"


class GenerationOptions(BaseModel):
    """Options for one commit message generation request.

    Attributes:
        provider: "auto", "none", or a provider name (gemini, openai, groq).
        model: Model identifier override for the chosen provider.
        conventional: Use a type-prefixed (Conventional Commits) subject.
        body: Request a subject followed by an explanatory body.
        temperature: Sampling temperature passed to remote backends.
        max_tokens: Maximum output tokens passed to remote backends.
        verbose: Log backend failures as warnings instead of debug messages.
    """

    provider: str = DEFAULT_PROVIDER
    model: Optional[str] = None
    conventional: bool = False
    body: bool = False
    temperature: float = DEFAULT_TEMPERATURE
    max_tokens: int = DEFAULT_MAX_TOKENS
    verbose: bool = False

    @field_validator("provider")
    @classmethod
    def normalize_provider(cls, v: str) -> str:
        """Lowercase the provider name; empty means auto."""
        v = (v or "").strip().lower()
        return v or DEFAULT_PROVIDER

    @field_validator("model")
    @classmethod
    def empty_model_is_none(cls, v: Optional[str]) -> Optional[str]:
        """Treat an empty model string as no override."""
        if v is None or not v.strip():
            return None
        return v.strip()


class ReducedContent(BaseModel):
    """Bounded-size change content and the tier that produced it."""

    content: str
    strategy: ReductionStrategy


class ProviderResult(BaseModel):
    """Raw completion returned by a backend."""

    text: str
    provider: str
    used_local: bool = False


class CommitMessage(BaseModel):
    """A normalized commit message."""

    subject: str
    body: Optional[str] = None

    @field_validator("subject")
    @classmethod
    def subject_must_not_be_empty(cls, v: str) -> str:
        """Ensure the subject is a non-empty single line."""
        if not v or not v.strip():
            raise ValueError("Subject cannot be empty")
        if "\n" in v:
            raise ValueError("Subject must be a single line")
        return v

    def render(self) -> str:
        """Render the message as git expects it: subject, blank line, body."""
        if self.body:
            return f"{self.subject}\n\n{self.body}"
        return self.subject


class GenerationResult(BaseModel):
    """Result of a generation request."""

    message: CommitMessage
    used_local: bool
    provider: Optional[str] = None
    strategy: Optional[ReductionStrategy] = None
    cached: bool = False
