"""
Request body construction for the generateContent endpoint.

Generate, edit and reference composition all share one body shape; they only
differ in how many inline image parts follow the prompt.
"""

from collections.abc import Sequence
from typing import Any

from gemimg.core.config import AuthConfig
from gemimg.core.options import GenerationOptions
from gemimg.core.reference import ReferenceImage, encode_base64

Reference = ReferenceImage | tuple[bytes, str]


def resolve_model(auth: AuthConfig, options: GenerationOptions | None = None) -> str:
    """Return the per-call model override if set and non-blank, else the client's default."""
    if options is not None and options.model and options.model.strip():
        return options.model.strip()
    return auth.model


def _inline_part(reference: Reference) -> dict[str, Any]:
    if isinstance(reference, ReferenceImage):
        data, mime_type = reference.data, reference.mime_type
    else:
        data, mime_type = reference
    return {"inlineData": {"mimeType": mime_type, "data": encode_base64(data)}}


def build_generation_config(options: GenerationOptions) -> dict[str, Any]:
    """Build the generationConfig object; unset options are omitted, never null."""
    modalities = ["IMAGE"] if options.include_text is False else ["IMAGE", "TEXT"]
    image_config: dict[str, Any] = {}
    if options.aspect_ratio:
        image_config["aspectRatio"] = options.aspect_ratio
    if options.image_size:
        image_config["imageSize"] = options.image_size

    cfg: dict[str, Any] = {
        "responseModalities": modalities,
        "imageConfig": image_config,
    }
    if options.mime_type:
        cfg["responseMimeType"] = options.mime_type
    return cfg


def build_request_body(
    prompt: str,
    references: Sequence[Reference] = (),
    options: GenerationOptions | None = None,
) -> dict[str, Any]:
    """
    Build the JSON body for a generateContent call.

    Args:
        prompt: Text instruction; sent as the first part
        references: Input images as ReferenceImage or (bytes, mime_type) pairs,
            appended after the prompt in the given order
        options: Generation options (defaults apply when None)

    Returns:
        Request body dict, ready to be sent as JSON
    """
    options = options or GenerationOptions()
    parts: list[dict[str, Any]] = [{"text": prompt}]
    parts.extend(_inline_part(ref) for ref in references)

    body: dict[str, Any] = {
        "contents": [{"parts": parts}],
        "generationConfig": build_generation_config(options),
    }
    if options.enable_search_grounding:
        body["tools"] = [{"google_search": {}}]
    return body
