"""
Configuration management for gemimg.

Resolves the Gemini API key, the default image model and transport settings
from the environment (and a local .env file).
"""

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from gemimg.logging_config import get_logger
from gemimg.utils.exceptions import ConfigurationError

logger = get_logger(__name__)

# Load environment variables from .env file
load_dotenv()

DEFAULT_API_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_IMAGE_MODEL = "gemini-3-pro-image-preview"


@dataclass(frozen=True)
class AuthConfig:
    """Credentials and default model bound to a client for its whole lifetime."""

    api_key: str = field(repr=False)
    model: str


@dataclass
class Config:
    """Configuration for gemimg."""

    # gemini_api_key excluded from repr to avoid leaking secrets
    gemini_api_key: str = field(default="", repr=False)
    api_base_url: str = DEFAULT_API_BASE_URL
    default_image_model: str = DEFAULT_IMAGE_MODEL

    # Seconds; None leaves requests without a timeout
    request_timeout: float | None = None

    # Debug: log request/response bodies with image data truncated
    debug_api: bool = False

    _validated: bool = field(default=False, repr=False)

    @classmethod
    def from_env(cls) -> "Config":
        """
        Create a Config instance from environment variables.

        Environment variables:
            GEMINI_API_KEY: Required for every API call
            GEMINI_IMAGE_MODEL: Optional default image model (trimmed)
            GEMIMG_API_BASE_URL: Optional API base URL
            GEMIMG_REQUEST_TIMEOUT: Optional request timeout in seconds
            GEMIMG_DEBUG_API: Log raw request/response bodies when 1/true/yes

        Returns:
            Config instance populated from environment

        Raises:
            ConfigurationError: If GEMIMG_REQUEST_TIMEOUT is not a number
        """
        raw_timeout = os.getenv("GEMIMG_REQUEST_TIMEOUT", "").strip()
        timeout: float | None = None
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError as e:
                raise ConfigurationError(
                    f"GEMIMG_REQUEST_TIMEOUT must be a number of seconds, got {raw_timeout!r}."
                ) from e

        debug_api = os.getenv("GEMIMG_DEBUG_API", "").strip().lower() in ("1", "true", "yes")
        model = os.getenv("GEMINI_IMAGE_MODEL", "").strip() or DEFAULT_IMAGE_MODEL
        base_url = os.getenv("GEMIMG_API_BASE_URL", "").strip() or DEFAULT_API_BASE_URL

        return cls(
            gemini_api_key=os.getenv("GEMINI_API_KEY", ""),
            api_base_url=base_url,
            default_image_model=model,
            request_timeout=timeout,
            debug_api=debug_api,
        )

    def validate(self) -> None:
        """
        Validate the configuration.

        Raises:
            ConfigurationError: If configuration is invalid
        """
        logger.debug("Validating config")

        if not self.gemini_api_key:
            raise ConfigurationError("Missing GEMINI_API_KEY in environment.")
        if not self.default_image_model.strip():
            raise ConfigurationError("Default image model cannot be empty.")
        if not self.api_base_url.strip():
            raise ConfigurationError("API base URL cannot be empty.")
        if self.request_timeout is not None and self.request_timeout <= 0:
            raise ConfigurationError(
                f"request_timeout must be positive, got {self.request_timeout}."
            )

        self._validated = True

    def is_valid(self) -> bool:
        """Return True if validate() has been called successfully."""
        return self._validated

    def auth_config(self) -> AuthConfig:
        """
        Validate and return the immutable credentials for a client.

        Raises:
            ConfigurationError: If configuration is invalid
        """
        self.validate()
        return AuthConfig(api_key=self.gemini_api_key, model=self.default_image_model.strip())

    def set_api_key(self, api_key: str) -> None:
        """
        Set the Gemini API key.

        Raises:
            ConfigurationError: If API key is empty
        """
        if not api_key or not api_key.strip():
            raise ConfigurationError("API key cannot be empty")

        self.gemini_api_key = api_key.strip()
        self._validated = False

    def set_image_model(self, model: str) -> None:
        """
        Set the default image generation model.

        Raises:
            ConfigurationError: If model is empty
        """
        if not model or not model.strip():
            raise ConfigurationError("Model ID cannot be empty")

        self.default_image_model = model.strip()


# Global configuration instance
_global_config: Config | None = None


def get_config() -> Config:
    """
    Get the global configuration instance.

    Returns:
        The global Config instance
    """
    global _global_config
    if _global_config is None:
        _global_config = Config.from_env()
    return _global_config


def set_config(config: Config) -> None:
    """
    Set the global configuration instance.

    Args:
        config: The Config instance to use globally
    """
    global _global_config
    _global_config = config
