"""Unit tests for config."""

import os
from unittest.mock import patch

import pytest

from infocanvas.core.config import (
    DEFAULT_GEMINI_MODEL,
    DEFAULT_IMAGE_SIZE,
    DEFAULT_OPENROUTER_BASE_URL,
    DEFAULT_OPENROUTER_MODEL,
    DEFAULT_PROVIDER,
    Config,
    get_config,
    set_config,
)
from infocanvas.utils.exceptions import ConfigurationError

_ENV_KEYS = (
    "GEMINI_API_KEY",
    "OPENROUTER_API_KEY",
    "OPENROUTER_BASE_URL",
    "INFOCANVAS_PROVIDER",
    "INFOCANVAS_IMAGE_MODEL",
    "INFOCANVAS_IMAGE_SIZE",
    "INFOCANVAS_ASPECT_RATIO",
    "INFOCANVAS_TIMEOUT",
    "INFOCANVAS_DEBUG_API",
)


def _clean_env(**overrides: str) -> dict[str, str]:
    env = {k: v for k, v in os.environ.items() if k not in _ENV_KEYS}
    env.update(overrides)
    return env


@pytest.mark.unit
class TestConfig:
    def test_defaults(self):
        c = Config()
        assert c.provider == DEFAULT_PROVIDER
        assert c.image_size == DEFAULT_IMAGE_SIZE
        assert c.default_aspect_ratio == "9:16"
        assert c.generation_timeout > 0
        assert c.debug_api is False

    def test_validate_accepts_missing_api_key(self):
        Config(gemini_api_key="").validate()

    def test_repr_does_not_contain_api_keys(self):
        c = Config(gemini_api_key="g-secret", openrouter_api_key="sk-secret")
        r = repr(c)
        assert "g-secret" not in r
        assert "sk-secret" not in r

    def test_validate_raises_on_unknown_provider(self):
        with pytest.raises(ConfigurationError) as exc_info:
            Config(provider="dalle").validate()
        assert "provider" in str(exc_info.value).lower()

    def test_validate_raises_on_unknown_aspect_ratio(self):
        with pytest.raises(ConfigurationError) as exc_info:
            Config(default_aspect_ratio="3:2").validate()
        assert "3:2" in str(exc_info.value)

    def test_validate_raises_on_unknown_image_size(self):
        with pytest.raises(ConfigurationError):
            Config(image_size="8K").validate()

    def test_validate_raises_on_non_positive_timeout(self):
        with pytest.raises(ConfigurationError) as exc_info:
            Config(generation_timeout=0).validate()
        assert "generation_timeout" in str(exc_info.value)


@pytest.mark.unit
class TestConfigFromEnv:
    def test_from_env_uses_env_vars(self):
        env = _clean_env(
            GEMINI_API_KEY="g-from-env",
            OPENROUTER_API_KEY="sk-from-env",
            INFOCANVAS_PROVIDER=" OpenRouter ",
            INFOCANVAS_IMAGE_MODEL="custom/model",
            INFOCANVAS_IMAGE_SIZE="2K",
            INFOCANVAS_ASPECT_RATIO="16:9",
            INFOCANVAS_TIMEOUT="60",
            INFOCANVAS_DEBUG_API="yes",
        )
        with patch.dict(os.environ, env, clear=True):
            c = Config.from_env()
        assert c.gemini_api_key == "g-from-env"
        assert c.openrouter_api_key == "sk-from-env"
        assert c.provider == "openrouter"
        assert c.image_model == "custom/model"
        assert c.image_size == "2K"
        assert c.default_aspect_ratio == "16:9"
        assert c.generation_timeout == 60
        assert c.debug_api is True

    def test_from_env_defaults(self):
        with patch.dict(os.environ, _clean_env(), clear=True):
            c = Config.from_env()
        assert c.gemini_api_key == ""
        assert c.provider == DEFAULT_PROVIDER
        assert c.openrouter_base_url == DEFAULT_OPENROUTER_BASE_URL
        assert c.generation_timeout == 180
        assert c.debug_api is False

    def test_from_env_bad_timeout_raises(self):
        with patch.dict(os.environ, _clean_env(INFOCANVAS_TIMEOUT="soon"), clear=True):
            with pytest.raises(ConfigurationError) as exc_info:
                Config.from_env()
        assert "INFOCANVAS_TIMEOUT" in str(exc_info.value)


@pytest.mark.unit
class TestApiKeys:
    def test_api_key_for_configured_provider(self):
        c = Config(gemini_api_key=" g-key ", openrouter_api_key="sk-key")
        assert c.api_key_for() == "g-key"
        assert c.api_key_for("openrouter") == "sk-key"
        assert c.api_key_for("unknown") == ""

    def test_blank_key_is_absent(self):
        assert Config(gemini_api_key="   ").api_key_for() == ""

    def test_set_api_key_empty_raises(self):
        c = Config(gemini_api_key="g-ok")
        with pytest.raises(ConfigurationError):
            c.set_api_key("  ")
        assert c.gemini_api_key == "g-ok"

    def test_set_api_key_for_provider(self):
        c = Config(provider="openrouter")
        c.set_api_key("sk-new")
        assert c.openrouter_api_key == "sk-new"
        c.set_api_key("g-new", provider="gemini")
        assert c.gemini_api_key == "g-new"

    def test_set_api_key_unknown_provider_raises(self):
        with pytest.raises(ConfigurationError):
            Config().set_api_key("key", provider="dalle")


@pytest.mark.unit
class TestModelFor:
    def test_provider_defaults(self):
        c = Config()
        assert c.model_for() == DEFAULT_GEMINI_MODEL
        assert c.model_for("openrouter") == DEFAULT_OPENROUTER_MODEL

    def test_override_wins(self):
        c = Config(image_model="my-model")
        assert c.model_for("gemini") == "my-model"
        assert c.model_for("openrouter") == "my-model"


@pytest.mark.unit
class TestGlobalConfig:
    def test_set_then_get(self):
        c = Config(gemini_api_key="g-global")
        set_config(c)
        try:
            assert get_config() is c
        finally:
            set_config(None)  # type: ignore[arg-type]
