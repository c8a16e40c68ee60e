"""
Model discovery via the Gemini models endpoint.

Only the first page is fetched; a continuation token in the response is
ignored.
"""

from dataclasses import dataclass, field
from typing import Any

from gemimg.core import api
from gemimg.core.config import DEFAULT_API_BASE_URL, AuthConfig
from gemimg.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class GeminiModelInfo:
    """Summary of one model returned by the models endpoint."""

    name: str
    display_name: str | None = None
    description: str | None = None
    version: str | None = None
    supported_generation_methods: list[str] = field(default_factory=list)
    input_token_limit: int | None = None
    output_token_limit: int | None = None

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> "GeminiModelInfo":
        return cls(
            name=raw.get("name") or "",
            display_name=raw.get("displayName"),
            description=raw.get("description"),
            version=raw.get("version"),
            supported_generation_methods=list(raw.get("supportedGenerationMethods") or []),
            input_token_limit=raw.get("inputTokenLimit"),
            output_token_limit=raw.get("outputTokenLimit"),
        )

    def is_image_model(self) -> bool:
        """True if 'image' appears in the name, display name or description."""
        haystack = f"{self.name} {self.display_name or ''} {self.description or ''}".lower()
        return "image" in haystack


def filter_image_models(models: list[GeminiModelInfo]) -> list[GeminiModelInfo]:
    return [m for m in models if m.is_image_model()]


def list_models(
    auth: AuthConfig,
    page_size: int | None = None,
    image_only: bool = False,
    *,
    base_url: str = DEFAULT_API_BASE_URL,
    timeout: float | None = None,
    debug: bool = False,
) -> list[GeminiModelInfo]:
    """
    List models available to the API key.

    Args:
        auth: Credentials
        page_size: Optional maximum number of models in the single page fetched
        image_only: Keep only models that look image-related

    Returns:
        Model summaries in server order

    Raises:
        APIError: On a non-success status
    """
    data = api.fetch_models(auth, page_size, base_url=base_url, timeout=timeout, debug=debug)
    if data.get("nextPageToken"):
        logger.debug("Models response has more pages; only the first page is returned")

    models = [GeminiModelInfo.from_api(m) for m in data.get("models") or [] if isinstance(m, dict)]
    if image_only:
        models = filter_image_models(models)
    logger.info("Listed %d model(s) image_only=%s", len(models), image_only)
    return models
