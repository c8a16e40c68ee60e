"""
gemimg - Gemini image generation client

A thin client for the Gemini image generation REST API: text-to-image
generation, image editing and multi-reference composition, plus model
discovery.

Library usage:
- Build a client with create_client(config) or create_client() to use the
  shared config from the environment (GEMINI_API_KEY, GEMINI_IMAGE_MODEL).
- Per-call settings go in GenerationOptions; the client itself is read-only.
- Logging: control verbosity with set_verbosity(0|1|2) or configure_logging(verbose_level, quiet).
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("gemimg")
except PackageNotFoundError:
    # Package is not installed (e.g., running from source in development)
    __version__ = "0.0.0.dev"

from gemimg.core.config import (
    DEFAULT_API_BASE_URL,
    DEFAULT_IMAGE_MODEL,
    AuthConfig,
    Config,
    get_config,
    set_config,
)
from gemimg.core.image_gen import MAX_REFERENCE_IMAGES, ImageGenClient, create_client
from gemimg.core.models import GeminiModelInfo
from gemimg.core.options import (
    ASPECT_RATIOS,
    IMAGE_SIZES,
    OUTPUT_MIME_TYPES,
    GenerationOptions,
)
from gemimg.core.request import build_request_body, resolve_model
from gemimg.core.response import GeneratedImageData, GeneratedImageResult, extract_image
from gemimg.logging_config import configure_logging, set_verbosity
from gemimg.utils.exceptions import (
    APIError,
    ConfigurationError,
    GemimgError,
    InputNotFoundError,
    InvalidArgumentError,
    NetworkError,
    NoImageReturnedError,
    RequestTimeoutError,
)

__all__ = [
    "APIError",
    "ASPECT_RATIOS",
    "AuthConfig",
    "Config",
    "ConfigurationError",
    "DEFAULT_API_BASE_URL",
    "DEFAULT_IMAGE_MODEL",
    "GeminiModelInfo",
    "GemimgError",
    "GeneratedImageData",
    "GeneratedImageResult",
    "GenerationOptions",
    "IMAGE_SIZES",
    "ImageGenClient",
    "InputNotFoundError",
    "InvalidArgumentError",
    "MAX_REFERENCE_IMAGES",
    "NetworkError",
    "NoImageReturnedError",
    "OUTPUT_MIME_TYPES",
    "RequestTimeoutError",
    "build_request_body",
    "configure_logging",
    "create_client",
    "extract_image",
    "get_config",
    "resolve_model",
    "set_config",
    "set_verbosity",
]
