"""Tests for gims.llm.dispatcher module."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

from gims.config import GimsConfig, LLMProvider
from gims.llm.dispatcher import (
    ABSOLUTE_FALLBACK_MESSAGE,
    build_provider_chain,
    dispatch,
)
from gims.llm.exceptions import LLMError
from gims.models import GenerationOptions


def _fake_provider(text=None, error=None):
    provider = MagicMock()
    provider.generate = AsyncMock(return_value=text, side_effect=error)
    return provider


def _patch_providers(mocker, providers):
    """Route get_provider to fake providers keyed by LLMProvider."""
    return mocker.patch(
        "gims.llm.dispatcher.get_provider",
        side_effect=lambda provider, config: providers[provider],
    )


class TestBuildProviderChain:
    """Tests for build_provider_chain function."""

    def test_auto_uses_configured_in_preference_order(self):
        """Test auto lists configured providers then local."""
        config = GimsConfig(credentials={"GROQ_API_KEY": "g", "GEMINI_API_KEY": "x"})

        assert build_provider_chain("auto", config) == ["gemini", "groq", "local"]

    def test_auto_without_credentials(self, no_credentials_config):
        """Test auto with nothing configured is local only."""
        assert build_provider_chain("auto", no_credentials_config) == ["local"]

    def test_none_is_local_only(self, all_credentials_config):
        """Test provider none skips remote backends."""
        assert build_provider_chain("none", all_credentials_config) == ["local"]

    def test_named_provider_with_credential(self, all_credentials_config):
        """Test a named provider is tried alone before local."""
        assert build_provider_chain("openai", all_credentials_config) == ["openai", "local"]

    def test_named_provider_without_credential(self, no_credentials_config):
        """Test a named provider without a key falls to local."""
        assert build_provider_chain("groq", no_credentials_config) == ["local"]

    def test_unknown_provider(self, all_credentials_config):
        """Test unknown names fall to local."""
        assert build_provider_chain("anthropic", all_credentials_config) == ["local"]

    def test_case_insensitive(self, all_credentials_config):
        """Test provider names are matched case-insensitively."""
        assert build_provider_chain("Gemini", all_credentials_config) == ["gemini", "local"]


class TestDispatch:
    """Tests for dispatch function."""

    def test_first_provider_succeeds(self, mocker, all_credentials_config, sample_diff):
        """Test the first backend's result is returned."""
        gemini = _fake_provider("Add hello module")
        openai = _fake_provider("unused")
        _patch_providers(mocker, {LLMProvider.GEMINI: gemini, LLMProvider.OPENAI: openai})

        result = asyncio.run(
            dispatch("prompt", sample_diff, GenerationOptions(), all_credentials_config)
        )

        assert result.text == "Add hello module"
        assert result.provider == "gemini"
        assert result.used_local is False
        openai.generate.assert_not_called()

    def test_falls_through_to_second_provider(self, mocker, sample_diff):
        """Test a failing backend is skipped and the next one used once."""
        config = GimsConfig(credentials={"GEMINI_API_KEY": "x", "OPENAI_API_KEY": "y"})
        gemini = _fake_provider(error=LLMError("Google Gemini API call failed: 503"))
        openai = _fake_provider("Add hello module")
        _patch_providers(mocker, {LLMProvider.GEMINI: gemini, LLMProvider.OPENAI: openai})

        result = asyncio.run(dispatch("prompt", sample_diff, GenerationOptions(), config))

        assert result.text == "Add hello module"
        assert result.provider == "openai"
        assert result.used_local is False
        assert gemini.generate.call_count == 1
        assert openai.generate.call_count == 1

    def test_all_remote_fail_uses_local(self, mocker, all_credentials_config, new_file_diff):
        """Test the local heuristic after every remote backend fails."""
        failing = _fake_provider(error=LLMError("down"))
        _patch_providers(mocker, {p: failing for p in LLMProvider})

        result = asyncio.run(
            dispatch(
                "prompt",
                new_file_diff,
                GenerationOptions(conventional=True),
                all_credentials_config,
            )
        )

        assert result.used_local is True
        assert result.provider == "local"
        assert result.text == "feat: add app.js"
        assert failing.generate.call_count == 3

    def test_no_credentials_uses_local(self, mocker, no_credentials_config, new_file_diff):
        """Test that no remote backend is built without credentials."""
        mock_get = mocker.patch("gims.llm.dispatcher.get_provider")

        result = asyncio.run(
            dispatch("prompt", new_file_diff, GenerationOptions(), no_credentials_config)
        )

        assert result.used_local is True
        assert result.text == "Add app.js"
        mock_get.assert_not_called()

    def test_timeout_moves_to_next_backend(self, mocker, new_file_diff):
        """Test a slow backend is abandoned after the request timeout."""
        config = GimsConfig(credentials={"GEMINI_API_KEY": "x"}, request_timeout=0.01)

        async def slow(*args, **kwargs):
            await asyncio.sleep(1)
            return "too late"

        gemini = MagicMock()
        gemini.generate = slow
        _patch_providers(mocker, {LLMProvider.GEMINI: gemini})

        result = asyncio.run(dispatch("prompt", new_file_diff, GenerationOptions(), config))

        assert result.used_local is True

    def test_provider_construction_error_moves_on(self, mocker, new_file_diff):
        """Test errors building a provider are treated as failures."""
        config = GimsConfig(credentials={"GEMINI_API_KEY": "x"})
        mocker.patch("gims.llm.dispatcher.get_provider", side_effect=ValueError("bad"))

        result = asyncio.run(dispatch("prompt", new_file_diff, GenerationOptions(), config))

        assert result.used_local is True

    def test_options_forwarded(self, mocker, all_credentials_config):
        """Test model, temperature and max tokens reach the backend."""
        groq = _fake_provider("Fix bug")
        _patch_providers(mocker, {LLMProvider.GROQ: groq})
        options = GenerationOptions(
            provider="groq", model="llama-3.3-70b-versatile", temperature=0.1, max_tokens=64
        )

        asyncio.run(dispatch("the prompt", "", options, all_credentials_config))

        groq.generate.assert_called_once_with(
            "the prompt", model="llama-3.3-70b-versatile", temperature=0.1, max_tokens=64
        )

    def test_local_failure_gives_absolute_fallback(self, mocker, no_credentials_config):
        """Test the fixed message when even the heuristic fails."""
        mocker.patch(
            "gims.llm.dispatcher.generate_local_message", side_effect=RuntimeError("boom")
        )

        result = asyncio.run(
            dispatch("prompt", "", GenerationOptions(), no_credentials_config)
        )

        assert result.text == ABSOLUTE_FALLBACK_MESSAGE
        assert result.used_local is True
