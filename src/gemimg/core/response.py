"""
Extraction of generated images from generateContent responses.
"""

import base64
import binascii
import io
import json
from dataclasses import dataclass
from typing import Any

from PIL import Image

from gemimg.utils.exceptions import NoImageReturnedError


@dataclass(frozen=True)
class GeneratedImageData:
    """In-memory result: the image is kept as the base64 payload the API returned."""

    mime_type: str
    base64_data: str
    model: str
    prompt: str
    text_response: str | None = None

    @property
    def image_bytes(self) -> bytes:
        """Decoded image bytes."""
        return base64.b64decode(self.base64_data)

    def to_image(self) -> Image.Image:
        """Decode the payload into a PIL Image."""
        image = Image.open(io.BytesIO(self.image_bytes))
        image.load()
        return image


@dataclass(frozen=True)
class GeneratedImageResult:
    """Disk result: the image bytes were written to ``output_path``."""

    output_path: str
    mime_type: str
    model: str
    prompt: str
    text_response: str | None = None


def _first_candidate_parts(data: dict[str, Any]) -> list[dict[str, Any]]:
    # Any level with the wrong JSON type counts as missing
    candidates = data.get("candidates")
    if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
        return []
    content = candidates[0].get("content")
    if not isinstance(content, dict):
        return []
    parts = content.get("parts")
    if not isinstance(parts, list):
        return []
    return [p for p in parts if isinstance(p, dict)]


def extract_image(data: dict[str, Any], model: str, prompt: str) -> GeneratedImageData:
    """
    Pull the generated image and optional text out of the first candidate.

    The image comes from the first part with non-empty inline data; the text
    from the first part whose text is non-blank. Both scans run independently
    over the same parts.

    Raises:
        NoImageReturnedError: If no part carries image data, it lacks a MIME type,
            or the payload is not valid base64
    """
    parts = _first_candidate_parts(data)

    image_part = next(
        (p for p in parts if isinstance(p.get("inlineData"), dict) and p["inlineData"].get("data")),
        None,
    )
    text_part = next(
        (p for p in parts if isinstance(p.get("text"), str) and p["text"].strip()),
        None,
    )

    inline = image_part["inlineData"] if image_part is not None else {}
    if not inline.get("data") or not inline.get("mimeType"):
        raise NoImageReturnedError(
            f"No image returned by Gemini model {model}. Raw response: {json.dumps(data)}",
            model=model,
            response=data,
        )

    try:
        base64.b64decode(inline["data"], validate=True)
    except (binascii.Error, ValueError, TypeError) as e:
        raise NoImageReturnedError(
            f"Gemini model {model} returned image data that is not valid base64.",
            model=model,
            response=data,
        ) from e

    return GeneratedImageData(
        mime_type=inline["mimeType"],
        base64_data=inline["data"],
        model=model,
        prompt=prompt,
        text_response=text_part["text"] if text_part is not None else None,
    )
