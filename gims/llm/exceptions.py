"""LLM-related exception classes.

Contains all exception classes for LLM operations:
- LLMError: Base exception for LLM-related errors
- MissingAPIKeyError: Raised when API key is not set
- EmptyResponseError: Raised when a backend returns no usable text
"""


class LLMError(Exception):
    """Base exception for LLM-related errors."""

    pass


class MissingAPIKeyError(LLMError):
    """Raised when the required API key is not set."""

    pass


class EmptyResponseError(LLMError):
    """Raised when the LLM returns an empty completion."""

    pass
