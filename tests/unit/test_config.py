"""Unit tests for config."""

import os
from unittest.mock import patch

import pytest

from gemimg.core.config import (
    DEFAULT_API_BASE_URL,
    DEFAULT_IMAGE_MODEL,
    AuthConfig,
    Config,
    get_config,
    set_config,
)
from gemimg.utils.exceptions import ConfigurationError

_ENV_KEYS = (
    "GEMINI_API_KEY",
    "GEMINI_IMAGE_MODEL",
    "GEMIMG_API_BASE_URL",
    "GEMIMG_REQUEST_TIMEOUT",
    "GEMIMG_DEBUG_API",
)


def _clean_env(**values: str) -> dict[str, str]:
    env = {k: v for k, v in os.environ.items() if k not in _ENV_KEYS}
    env.update(values)
    return env


@pytest.mark.unit
class TestConfig:
    def test_validate_raises_when_no_api_key(self):
        c = Config(gemini_api_key="")
        with pytest.raises(ConfigurationError) as exc_info:
            c.validate()
        assert "GEMINI_API_KEY" in str(exc_info.value)

    def test_validate_raises_on_non_positive_timeout(self):
        c = Config(gemini_api_key="k", request_timeout=0)
        with pytest.raises(ConfigurationError):
            c.validate()

    def test_validate_sets_validated(self):
        c = Config(gemini_api_key="k")
        c.validate()
        assert c.is_valid() is True

    def test_repr_does_not_contain_api_key(self):
        c = Config(gemini_api_key="super-secret")
        assert "super-secret" not in repr(c)
        assert "super-secret" not in repr(c.auth_config())

    def test_auth_config(self):
        auth = Config(gemini_api_key="k", default_image_model=" custom ").auth_config()
        assert auth == AuthConfig(api_key="k", model="custom")

    def test_auth_config_is_frozen(self):
        auth = Config(gemini_api_key="k").auth_config()
        with pytest.raises(AttributeError):
            auth.model = "other"  # type: ignore[misc]

    def test_from_env_uses_env_vars(self):
        env = _clean_env(
            GEMINI_API_KEY="from-env",
            GEMINI_IMAGE_MODEL="  gemini-2.5-flash-image  ",
            GEMIMG_API_BASE_URL="https://proxy.example/v1beta",
            GEMIMG_REQUEST_TIMEOUT="90",
            GEMIMG_DEBUG_API="true",
        )
        with patch.dict(os.environ, env, clear=True):
            c = Config.from_env()
        assert c.gemini_api_key == "from-env"
        assert c.default_image_model == "gemini-2.5-flash-image"
        assert c.api_base_url == "https://proxy.example/v1beta"
        assert c.request_timeout == 90.0
        assert c.debug_api is True

    def test_from_env_defaults(self):
        with patch.dict(os.environ, _clean_env(), clear=True):
            c = Config.from_env()
        assert c.gemini_api_key == ""
        assert c.default_image_model == DEFAULT_IMAGE_MODEL
        assert c.api_base_url == DEFAULT_API_BASE_URL
        assert c.request_timeout is None
        assert c.debug_api is False

    def test_from_env_blank_model_uses_default(self):
        with patch.dict(os.environ, _clean_env(GEMINI_IMAGE_MODEL="   "), clear=True):
            assert Config.from_env().default_image_model == DEFAULT_IMAGE_MODEL

    def test_from_env_bad_timeout_raises(self):
        with patch.dict(os.environ, _clean_env(GEMIMG_REQUEST_TIMEOUT="soon"), clear=True):
            with pytest.raises(ConfigurationError):
                Config.from_env()

    def test_set_api_key_resets_validation(self):
        c = Config(gemini_api_key="k")
        c.validate()
        c.set_api_key("other")
        assert c.gemini_api_key == "other"
        assert c.is_valid() is False

    def test_set_api_key_empty_raises(self):
        with pytest.raises(ConfigurationError):
            Config().set_api_key("  ")

    def test_set_image_model(self):
        c = Config()
        c.set_image_model("gemini-2.5-flash-image")
        assert c.default_image_model == "gemini-2.5-flash-image"
        with pytest.raises(ConfigurationError):
            c.set_image_model("")


@pytest.mark.unit
class TestGlobalConfig:
    def test_set_then_get(self):
        original = get_config()
        try:
            mine = Config(gemini_api_key="k")
            set_config(mine)
            assert get_config() is mine
        finally:
            set_config(original)
