"""
Image generation via the Gemini generateContent API.

ImageGenClient exposes generate (to memory or disk), edit and multi-reference
composition on top of one request builder and one response extractor, plus
model discovery.
"""

import time
from collections.abc import Sequence
from pathlib import Path

from gemimg.core import api
from gemimg.core.config import DEFAULT_API_BASE_URL, AuthConfig, Config, get_config
from gemimg.core.models import GeminiModelInfo, list_models
from gemimg.core.options import GenerationOptions
from gemimg.core.reference import ReferenceImage, load_reference_image, load_reference_images
from gemimg.core.request import build_request_body, resolve_model
from gemimg.core.response import GeneratedImageData, GeneratedImageResult, extract_image
from gemimg.logging_config import get_logger, log_prompts
from gemimg.utils.exceptions import InvalidArgumentError

logger = get_logger(__name__)

MAX_REFERENCE_IMAGES = 14

# Max prompt length for logging (large so prompts are effectively never truncated)
_PROMPT_LOG_MAX = 50_000


def _write_image(image: GeneratedImageData, output_path: str | Path) -> GeneratedImageResult:
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(image.image_bytes)
    logger.info("Wrote image path=%s mime_type=%s", path, image.mime_type)
    return GeneratedImageResult(
        output_path=str(output_path),
        mime_type=image.mime_type,
        model=image.model,
        prompt=image.prompt,
        text_response=image.text_response,
    )


class ImageGenClient:
    """Client bound to one API key and default model.

    The client holds no mutable state; per-call model overrides go through
    ``GenerationOptions.model``. One instance can be shared between threads.
    """

    def __init__(
        self,
        auth: AuthConfig,
        *,
        base_url: str = DEFAULT_API_BASE_URL,
        timeout: float | None = None,
        debug_api: bool = False,
    ) -> None:
        self._auth = auth
        self._base_url = base_url
        self._timeout = timeout
        self._debug_api = debug_api

    @property
    def model(self) -> str:
        """The default image model used when no override is given."""
        return self._auth.model

    def list_models(
        self, page_size: int | None = None, image_only: bool = False
    ) -> list[GeminiModelInfo]:
        """List models available to this API key (first page only)."""
        return list_models(
            self._auth,
            page_size,
            image_only,
            base_url=self._base_url,
            timeout=self._timeout,
            debug=self._debug_api,
        )

    def _generate(
        self,
        prompt: str,
        references: Sequence[ReferenceImage],
        options: GenerationOptions,
    ) -> GeneratedImageData:
        model = resolve_model(self._auth, options)
        body = build_request_body(prompt, references, options)

        logger.info("Generating image model=%s references=%d", model, len(references))
        if log_prompts():
            truncated = (
                prompt if len(prompt) <= _PROMPT_LOG_MAX else prompt[:_PROMPT_LOG_MAX] + "..."
            )
            logger.info("Prompt (used): %s", truncated)

        start_time = time.time()
        data = api.generate_content(
            self._auth,
            model,
            body,
            base_url=self._base_url,
            timeout=self._timeout,
            debug=self._debug_api,
        )
        image = extract_image(data, model, prompt)
        logger.info("Generated in %.1fs model=%s", time.time() - start_time, model)
        return image

    def generate_image_data(
        self, prompt: str, options: GenerationOptions | None = None
    ) -> GeneratedImageData:
        """
        Generate an image from a text prompt and return it in memory.

        Raises:
            APIError: If the API returns a non-success status
            NoImageReturnedError: If the response holds no image
            NetworkError: If the connection fails
            RequestTimeoutError: If the configured timeout elapses
        """
        return self._generate(prompt, (), options or GenerationOptions())

    def generate_image(
        self,
        prompt: str,
        output_path: str | Path,
        options: GenerationOptions | None = None,
    ) -> GeneratedImageResult:
        """Generate an image from a text prompt and write it to output_path."""
        image = self.generate_image_data(prompt, options)
        return _write_image(image, output_path)

    def edit_image_data(
        self,
        input_path: str | Path,
        prompt: str,
        options: GenerationOptions | None = None,
    ) -> GeneratedImageData:
        """
        Edit an existing image with a text instruction and return the result in memory.

        The input MIME type is options.input_mime_type, else detected from the
        file, else image/png.

        Raises:
            InputNotFoundError: If input_path does not exist (no request is sent)
            APIError: If the API returns a non-success status
            NoImageReturnedError: If the response holds no image
        """
        options = options or GenerationOptions()
        reference = load_reference_image(input_path, options.input_mime_type)
        return self._generate(prompt, [reference], options)

    def edit_image(
        self,
        input_path: str | Path,
        prompt: str,
        output_path: str | Path,
        options: GenerationOptions | None = None,
    ) -> GeneratedImageResult:
        """Edit an existing image with a text instruction and write the result."""
        image = self.edit_image_data(input_path, prompt, options)
        return _write_image(image, output_path)

    def generate_from_references_data(
        self,
        input_paths: Sequence[str | Path],
        prompt: str,
        options: GenerationOptions | None = None,
    ) -> GeneratedImageData:
        """
        Create an image from 1 to 14 reference images plus a text instruction.

        References are sent after the prompt in the order given. The result is
        returned in memory.

        Raises:
            InvalidArgumentError: If input_paths is empty or has more than 14 entries
            InputNotFoundError: If any reference does not exist (no request is sent)
            APIError: If the API returns a non-success status
            NoImageReturnedError: If the response holds no image
        """
        if not input_paths:
            raise InvalidArgumentError("input_paths cannot be empty.", field="input_paths")
        if len(input_paths) > MAX_REFERENCE_IMAGES:
            raise InvalidArgumentError(
                f"Maximum {MAX_REFERENCE_IMAGES} reference images are supported, "
                f"got {len(input_paths)}.",
                field="input_paths",
            )

        options = options or GenerationOptions()
        references = load_reference_images(list(input_paths), options.input_mime_type)
        return self._generate(prompt, references, options)

    def generate_from_references(
        self,
        input_paths: Sequence[str | Path],
        prompt: str,
        output_path: str | Path,
        options: GenerationOptions | None = None,
    ) -> GeneratedImageResult:
        """Create an image from reference images plus a text instruction and write it."""
        image = self.generate_from_references_data(input_paths, prompt, options)
        return _write_image(image, output_path)


def create_client(config: Config | None = None) -> ImageGenClient:
    """
    Create a client from a Config (or the shared config from get_config()).

    Raises:
        ConfigurationError: If the API key is missing or config is invalid
    """
    config = config or get_config()
    return ImageGenClient(
        config.auth_config(),
        base_url=config.api_base_url,
        timeout=config.request_timeout,
        debug_api=config.debug_api,
    )
