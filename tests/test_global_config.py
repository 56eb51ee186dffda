"""Tests for gims.global_config module."""

import stat
from pathlib import Path

import pytest
import yaml

from gims.global_config import (
    GlobalConfigError,
    ensure_global_config_dir,
    get_config_file_path,
    get_credential,
    get_credentials_file_path,
    get_global_config_dir,
    is_configured,
    load_credentials,
    load_global_config,
    parse_config_value,
    save_credential,
    save_global_config,
    set_config_value,
)


@pytest.fixture
def config_dir(mocker, temp_dir):
    """Point the global config directory at a temporary location."""
    mock_dir = temp_dir / ".gims"
    mocker.patch("gims.global_config._CONFIG_DIR", mock_dir)
    return mock_dir


class TestGlobalConfigDir:
    """Tests for global config directory functions."""

    def test_get_global_config_dir_returns_path(self):
        """Test that get_global_config_dir returns a Path."""
        result = get_global_config_dir()
        assert isinstance(result, Path)
        assert ".gims" in str(result)

    def test_ensure_global_config_dir_creates_directory(self, config_dir):
        """Test that ensure_global_config_dir creates the directory."""
        result = ensure_global_config_dir()

        assert config_dir.exists()
        assert result == config_dir

    def test_file_paths(self, config_dir):
        """Test config and credentials file names."""
        assert get_config_file_path() == config_dir / "config.yaml"
        assert get_credentials_file_path() == config_dir / "credentials"


class TestLoadSaveGlobalConfig:
    """Tests for config.yaml loading and saving."""

    def test_missing_file_returns_empty(self, config_dir):
        """Test that a missing config file yields an empty dict."""
        assert load_global_config() == {}
        assert is_configured() is False

    def test_round_trip(self, config_dir):
        """Test that saved config is loaded back."""
        save_global_config({"provider": "groq", "conventional": True})

        assert is_configured() is True
        assert load_global_config() == {"provider": "groq", "conventional": True}

    def test_invalid_yaml_raises(self, config_dir):
        """Test that unparseable YAML raises GlobalConfigError."""
        config_dir.mkdir(parents=True)
        (config_dir / "config.yaml").write_text("provider: [unclosed")

        with pytest.raises(GlobalConfigError):
            load_global_config()

    def test_non_mapping_raises(self, config_dir):
        """Test that a YAML list is rejected."""
        config_dir.mkdir(parents=True)
        (config_dir / "config.yaml").write_text("- gemini\n- openai\n")

        with pytest.raises(GlobalConfigError, match="mapping"):
            load_global_config()


class TestCredentials:
    """Tests for the credentials file."""

    def test_missing_file_returns_empty(self, config_dir):
        """Test that a missing credentials file yields an empty dict."""
        assert load_credentials() == {}
        assert get_credential("GEMINI_API_KEY") is None

    def test_save_and_load_credential(self, config_dir):
        """Test saving a credential and reading it back."""
        save_credential("GEMINI_API_KEY", "abc123")

        assert get_credential("GEMINI_API_KEY") == "abc123"

    def test_save_updates_existing_key(self, config_dir):
        """Test that saving again replaces the value and keeps other keys."""
        save_credential("GEMINI_API_KEY", "old")
        save_credential("OPENAI_API_KEY", "openai")
        save_credential("GEMINI_API_KEY", "new")

        assert load_credentials() == {"GEMINI_API_KEY": "new", "OPENAI_API_KEY": "openai"}

    def test_credentials_file_is_private(self, config_dir):
        """Test that the credentials file is readable by the owner only."""
        save_credential("GROQ_API_KEY", "secret")

        mode = stat.S_IMODE(get_credentials_file_path().stat().st_mode)
        assert mode == stat.S_IRUSR | stat.S_IWUSR

    def test_comments_and_blank_lines_ignored(self, config_dir):
        """Test parsing skips comments and blank lines."""
        config_dir.mkdir(parents=True)
        (config_dir / "credentials").write_text(
            "# comment\n\nOPENAI_API_KEY = sk-test \nnot a pair\n"
        )

        assert load_credentials() == {"OPENAI_API_KEY": "sk-test"}


class TestConfigValues:
    """Tests for parsing and setting individual config values."""

    def test_parse_bool(self):
        """Test boolean parsing."""
        assert parse_config_value("conventional", "true") is True
        assert parse_config_value("conventional", "1") is True
        assert parse_config_value("conventional", "off") is False

    def test_parse_numbers(self):
        """Test int and float parsing."""
        assert parse_config_value("max_tokens", "300") == 300
        assert parse_config_value("temperature", "0.7") == 0.7

    def test_parse_string_is_stripped(self):
        """Test string values are stripped."""
        assert parse_config_value("provider", " openai ") == "openai"

    def test_invalid_key_raises(self):
        """Test that unknown keys are rejected."""
        with pytest.raises(GlobalConfigError, match="Invalid config key"):
            parse_config_value("colour", "blue")

    def test_invalid_number_raises(self):
        """Test that a bad number is rejected."""
        with pytest.raises(GlobalConfigError, match="Invalid int"):
            parse_config_value("max_tokens", "lots")

    def test_set_config_value_persists(self, config_dir):
        """Test that set_config_value writes the parsed value."""
        stored = set_config_value("token_budget", "5000")

        assert stored == 5000
        with open(config_dir / "config.yaml") as f:
            assert yaml.safe_load(f) == {"token_budget": 5000}
