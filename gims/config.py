"""Configuration for gims.

Settings are resolved once per invocation by ``load_config()`` and passed
explicitly through the generation pipeline as a ``GimsConfig``. Sources, in
increasing priority:

1. Built-in defaults (below)
2. ~/.gims/config.yaml
3. GIMS_* environment variables (a local .env file is loaded first)

API keys come from the provider environment variables, falling back to
~/.gims/credentials.
"""

import os
from enum import Enum
from typing import Mapping, Optional

from pydantic import BaseModel, Field, ValidationError

from gims import global_config
from gims.global_config import GlobalConfigError


class LLMProvider(Enum):
    """Supported remote LLM providers."""

    GEMINI = "gemini"
    OPENAI = "openai"
    GROQ = "groq"


# Order used by provider "auto" (fastest/cheapest first)
PROVIDER_PREFERENCE = [
    LLMProvider.GEMINI,
    LLMProvider.OPENAI,
    LLMProvider.GROQ,
]

# Provider preference values that are not a backend name
PROVIDER_AUTO = "auto"
PROVIDER_NONE = "none"


# ============================================================
# DEFAULT FALLBACK VALUES
# ============================================================

DEFAULT_PROVIDER = PROVIDER_AUTO
DEFAULT_MAX_TOKENS = 200
DEFAULT_TEMPERATURE = 0.3
DEFAULT_TOKEN_BUDGET = 100_000
DEFAULT_REQUEST_TIMEOUT = 30.0
DEFAULT_CACHE_MAX_ENTRIES = 100
DEFAULT_CACHE_TTL_SECONDS = 3600.0

DEFAULT_MODELS = {
    LLMProvider.GEMINI: "gemini-3-flash-preview",
    LLMProvider.OPENAI: "gpt-5.2-2025-12-11",
    LLMProvider.GROQ: "groq/compound",
}


# ============================================================
# API KEY ENVIRONMENT VARIABLES
# ============================================================

API_KEY_ENV_VARS = {
    LLMProvider.GEMINI: "GEMINI_API_KEY",
    LLMProvider.OPENAI: "OPENAI_API_KEY",
    LLMProvider.GROQ: "GROQ_API_KEY",
}

GROQ_BASE_URL_ENV_VAR = "GROQ_BASE_URL"


def get_api_key_env_var(provider: LLMProvider) -> str:
    """Get the environment variable name for the API key.

    Args:
        provider: The LLM provider.

    Returns:
        The environment variable name.
    """
    return API_KEY_ENV_VARS[provider]


class GimsConfig(BaseModel):
    """Resolved settings for one gims invocation."""

    provider: str = DEFAULT_PROVIDER
    model: Optional[str] = None
    conventional: bool = False
    temperature: float = DEFAULT_TEMPERATURE
    max_tokens: int = DEFAULT_MAX_TOKENS
    token_budget: int = DEFAULT_TOKEN_BUDGET
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    cache_enabled: bool = True
    cache_max_entries: int = DEFAULT_CACHE_MAX_ENTRIES
    cache_ttl_seconds: float = DEFAULT_CACHE_TTL_SECONDS
    groq_base_url: Optional[str] = None
    # Maps API key env var name -> key
    credentials: dict[str, str] = Field(default_factory=dict)

    def get_api_key(self, provider: LLMProvider) -> Optional[str]:
        """Return the configured API key for a provider, if any."""
        return self.credentials.get(get_api_key_env_var(provider)) or None

    def has_credential(self, provider: LLMProvider) -> bool:
        """Check whether a provider has an API key configured."""
        return self.get_api_key(provider) is not None

    def configured_providers(self) -> list[LLMProvider]:
        """Return providers with credentials, in preference order."""
        return [p for p in PROVIDER_PREFERENCE if self.has_credential(p)]


def _parse_int(value: Optional[str]) -> Optional[int]:
    if value is None or value.strip() == "":
        return None
    try:
        return int(value)
    except ValueError:
        return None


def _parse_float(value: Optional[str]) -> Optional[float]:
    if value is None or value.strip() == "":
        return None
    try:
        return float(value)
    except ValueError:
        return None


def _resolve_credentials(
    environ: Mapping[str, str], stored: Mapping[str, str]
) -> dict[str, str]:
    """Resolve API keys: environment variable first, then credentials file."""
    credentials = {}
    for env_var in API_KEY_ENV_VARS.values():
        value = environ.get(env_var) or stored.get(env_var)
        if value:
            credentials[env_var] = value
    return credentials


def build_config(
    environ: Mapping[str, str],
    file_config: Optional[dict] = None,
    stored_credentials: Optional[Mapping[str, str]] = None,
) -> GimsConfig:
    """Build a GimsConfig from explicit sources.

    Args:
        environ: Environment mapping (usually os.environ).
        file_config: Parsed ~/.gims/config.yaml contents.
        stored_credentials: Parsed ~/.gims/credentials contents.

    Returns:
        The merged configuration.

    Raises:
        GlobalConfigError: If a config file value has the wrong type.
    """
    file_config = file_config or {}
    values = {}

    # Config file values (only keys GimsConfig knows about)
    for key in GimsConfig.model_fields:
        if key == "credentials":
            continue
        if key in file_config and file_config[key] is not None:
            values[key] = file_config[key]

    # Environment overrides
    if environ.get("GIMS_PROVIDER"):
        values["provider"] = environ["GIMS_PROVIDER"].strip().lower()
    if environ.get("GIMS_MODEL"):
        values["model"] = environ["GIMS_MODEL"].strip()
    if "GIMS_CONVENTIONAL" in environ:
        values["conventional"] = environ["GIMS_CONVENTIONAL"] == "1"
    if "GIMS_CACHE" in environ:
        values["cache_enabled"] = environ["GIMS_CACHE"] != "0"

    token_budget = _parse_int(environ.get("GIMS_MAX_DIFF_SIZE"))
    if token_budget:
        values["token_budget"] = token_budget

    timeout = _parse_float(environ.get("GIMS_TIMEOUT"))
    if timeout:
        values["request_timeout"] = timeout

    if environ.get(GROQ_BASE_URL_ENV_VAR):
        values["groq_base_url"] = environ[GROQ_BASE_URL_ENV_VAR]

    values["credentials"] = _resolve_credentials(environ, stored_credentials or {})

    try:
        return GimsConfig(**values)
    except ValidationError as e:
        fields = ", ".join(str(err["loc"][0]) for err in e.errors() if err["loc"])
        raise GlobalConfigError(f"Invalid configuration value for {fields}: {e}") from e


def load_config() -> GimsConfig:
    """Load configuration from the environment and ~/.gims/.

    This should be called once by the CLI (or any embedding program) before
    generating messages.
    """
    from dotenv import load_dotenv

    # Load environment variables from .env file
    load_dotenv()

    return build_config(
        os.environ,
        file_config=global_config.load_global_config(),
        stored_credentials=global_config.load_credentials(),
    )
