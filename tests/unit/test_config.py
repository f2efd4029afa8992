"""Tests for environment-driven settings."""

import logging
from unittest.mock import patch

import pytest
from careerguide.config import (
    AVAILABLE_MODELS,
    DEFAULT_MODEL,
    DEFAULT_PROVIDER,
    PROVIDER_ENDPOINTS,
    Settings,
    configure_logging,
)


class TestFromEnv:
    """Test reading settings from a mapping of variables."""

    def test_defaults(self):
        settings = Settings.from_env({})
        assert settings.provider == DEFAULT_PROVIDER == "groq"
        assert settings.model == DEFAULT_MODEL
        assert settings.endpoint is None
        assert settings.api_keys == {}
        assert settings.timeout == 25.0
        assert settings.log_level == "INFO"

    def test_overrides(self):
        settings = Settings.from_env(
            {
                "AI_PROVIDER": " OpenRouter ",
                "AI_MODEL": "meta-llama/llama-4-scout:free",
                "AI_ENDPOINT": "http://localhost:9000/v1",
                "AI_TIMEOUT": "10",
                "AI_TEMPERATURE": "0.2",
                "AI_MAX_TOKENS": "300",
                "LOG_LEVEL": "debug",
            }
        )
        assert settings.provider == "openrouter"
        assert settings.model == "meta-llama/llama-4-scout:free"
        assert settings.base_url == "http://localhost:9000/v1"
        assert settings.timeout == 10.0
        assert settings.temperature == 0.2
        assert settings.max_tokens == 300
        assert settings.log_level == "DEBUG"

    def test_api_keys_collected_and_stripped(self):
        settings = Settings.from_env(
            {"GROQ_API_KEY": " gsk-1 ", "OPENAI_API_KEY": "   ", "OPENROUTER_API_KEY": "sk-or"}
        )
        assert settings.api_keys == {"groq": "gsk-1", "openrouter": "sk-or"}

    def test_generic_key_for_custom_provider(self):
        settings = Settings.from_env(
            {
                "AI_PROVIDER": "together",
                "AI_ENDPOINT": "https://api.together.xyz/v1",
                "AI_API_KEY": " tg-key ",
            }
        )
        assert settings.api_key == "tg-key"
        assert settings.base_url == "https://api.together.xyz/v1"

    def test_generic_key_ignored_for_known_provider(self):
        settings = Settings.from_env({"AI_PROVIDER": "groq", "AI_API_KEY": "other"})
        assert settings.api_key == ""

    def test_empty_endpoint_means_default(self):
        settings = Settings.from_env({"AI_ENDPOINT": ""})
        assert settings.endpoint is None
        assert settings.base_url == PROVIDER_ENDPOINTS["groq"]

    def test_explicit_mapping_skips_dotenv(self):
        with patch("careerguide.config.load_dotenv") as load:
            Settings.from_env({})
        load.assert_not_called()

    def test_process_environment_loads_dotenv(self, no_provider_env, monkeypatch):
        monkeypatch.setenv("GROQ_API_KEY", "gsk-env")
        with patch("careerguide.config.load_dotenv") as load:
            settings = Settings.from_env()
        load.assert_called_once()
        assert settings.api_key == "gsk-env"

    def test_dotenv_can_be_disabled(self, no_provider_env):
        with patch("careerguide.config.load_dotenv") as load:
            Settings.from_env(dotenv=False)
        load.assert_not_called()

    def test_invalid_number(self):
        with pytest.raises(ValueError):
            Settings.from_env({"AI_TIMEOUT": "soon"})


class TestDerivedValues:
    def test_api_key_for_active_provider(self):
        settings = Settings(provider="openai", api_keys={"groq": "g", "openai": "o"})
        assert settings.api_key == "o"

    def test_missing_api_key(self):
        assert Settings().api_key == ""

    def test_unknown_provider_has_no_endpoint(self):
        assert Settings(provider="acme").base_url == ""

    def test_completion_options(self):
        options = Settings(timeout=7.5, temperature=0.1, max_tokens=50).completion_options()
        assert (options.timeout, options.temperature, options.max_tokens) == (7.5, 0.1, 50)

    def test_every_provider_has_models(self):
        assert set(AVAILABLE_MODELS) == set(PROVIDER_ENDPOINTS)


def test_configure_logging():
    with patch("careerguide.config.logging.basicConfig") as basic_config:
        configure_logging("warning")
    assert basic_config.call_args.kwargs["level"] == logging.WARNING
