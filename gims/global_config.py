"""User-level settings stored in ~/.gims/.

Two files live there:
- config.yaml: preferences (provider, model, conventional, budgets, cache)
- credentials: one KEY=value line per provider API key, readable by the
  owner only

Everything here is plain file I/O; merging these values with the
environment happens in gims.config.build_config().
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


class GlobalConfigError(Exception):
    """Raised when ~/.gims/ files cannot be read, written or parsed."""
    pass


_CONFIG_DIR = Path.home() / ".gims"

_CREDENTIALS_HEADER = (
    "# gims API credentials\n"
    "# One PROVIDER_API_KEY=value per line. Environment variables take precedence.\n"
)

# Keys accepted by `gims config set`, with the type each value is parsed as
SETTABLE_KEYS = {
    "provider": str,
    "model": str,
    "conventional": bool,
    "temperature": float,
    "max_tokens": int,
    "token_budget": int,
    "request_timeout": float,
    "cache_enabled": bool,
}

_TRUE_VALUES = ("1", "true", "yes", "on")


def get_global_config_dir() -> Path:
    """Return the ~/.gims directory (it may not exist yet)."""
    return _CONFIG_DIR


def ensure_global_config_dir() -> Path:
    """Create ~/.gims if needed and return it."""
    config_dir = get_global_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def get_config_file_path() -> Path:
    return get_global_config_dir() / "config.yaml"


def get_credentials_file_path() -> Path:
    return get_global_config_dir() / "credentials"


def load_global_config() -> Dict[str, Any]:
    """Read ~/.gims/config.yaml.

    Returns:
        The stored settings; an empty dict when the file is absent or empty.

    Raises:
        GlobalConfigError: If the YAML is invalid or is not a mapping.
    """
    path = get_config_file_path()
    if not path.exists():
        return {}

    try:
        data = yaml.safe_load(path.read_text())
    except (OSError, yaml.YAMLError) as e:
        raise GlobalConfigError(f"Failed to load config from {path}: {e}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise GlobalConfigError(f"Config file {path} must contain a mapping")
    return data


def save_global_config(config: Dict[str, Any]) -> None:
    """Write settings to ~/.gims/config.yaml, replacing its contents."""
    ensure_global_config_dir()
    path = get_config_file_path()

    try:
        path.write_text(yaml.safe_dump(config, default_flow_style=False, sort_keys=False))
    except OSError as e:
        raise GlobalConfigError(f"Failed to save config to {path}: {e}")


def _parse_credentials(text: str) -> Dict[str, str]:
    credentials = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        credentials[key.strip()] = value.strip()
    return credentials


def _render_credentials(credentials: Dict[str, str]) -> str:
    lines = [f"{key}={value}" for key, value in credentials.items()]
    return _CREDENTIALS_HEADER + "\n" + "\n".join(lines) + "\n"


def load_credentials() -> Dict[str, str]:
    """Read ~/.gims/credentials.

    Returns:
        API keys keyed by their environment variable name
        (e.g. {"GEMINI_API_KEY": "..."}); empty when the file is absent.
    """
    path = get_credentials_file_path()
    if not path.exists():
        return {}

    try:
        return _parse_credentials(path.read_text())
    except OSError as e:
        raise GlobalConfigError(f"Failed to load credentials from {path}: {e}")


def save_credential(provider_key: str, api_key: str) -> None:
    """Store one API key, keeping the others already in the file.

    The file is created with mode 0600 so the keys are never readable by
    other users, even briefly.

    Args:
        provider_key: Environment variable name, e.g. "GROQ_API_KEY".
        api_key: The key to store.
    """
    ensure_global_config_dir()
    path = get_credentials_file_path()

    credentials = load_credentials()
    credentials[provider_key] = api_key

    try:
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w") as f:
            f.write(_render_credentials(credentials))
        # O_CREAT's mode does not apply to a file that already existed
        os.chmod(path, 0o600)
    except OSError as e:
        raise GlobalConfigError(f"Failed to save credential: {e}")


def get_credential(provider_key: str) -> Optional[str]:
    """Return one stored API key, or None."""
    return load_credentials().get(provider_key)


def parse_config_value(key: str, raw_value: str) -> Any:
    """Convert a command-line string into the type stored for a config key.

    Booleans accept 1/true/yes/on (anything else is False).

    Raises:
        GlobalConfigError: If the key is unknown or the value is invalid.
    """
    expected = SETTABLE_KEYS.get(key)
    if expected is None:
        raise GlobalConfigError(
            f"Invalid config key: {key}. Valid keys: {', '.join(SETTABLE_KEYS)}"
        )

    raw_value = raw_value.strip()
    if expected is bool:
        return raw_value.lower() in _TRUE_VALUES
    if expected is str:
        return raw_value

    try:
        return expected(raw_value)
    except ValueError:
        raise GlobalConfigError(f"Invalid {expected.__name__} value for {key}: {raw_value}")


def set_config_value(key: str, raw_value: str) -> Any:
    """Parse a value and persist it in config.yaml.

    Returns:
        The parsed value that was stored.
    """
    value = parse_config_value(key, raw_value)
    config = load_global_config()
    config[key] = value
    save_global_config(config)
    return value


def is_configured() -> bool:
    """Check whether ~/.gims/config.yaml exists."""
    return get_config_file_path().exists()
