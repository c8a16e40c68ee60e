"""
Reference image handling for gemimg.

Loads local input images for edit and reference composition requests and
determines the MIME type each one is sent with. Files are sent as-is; no
resizing or re-encoding takes place.
"""

import base64
from dataclasses import dataclass, field
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from gemimg.logging_config import get_logger
from gemimg.utils.exceptions import InputNotFoundError

logger = get_logger(__name__)

DEFAULT_INPUT_MIME_TYPE = "image/png"

_SUFFIX_MIME_TYPES = {
    "PNG": "image/png",
    "JPG": "image/jpeg",
    "JPEG": "image/jpeg",
    "WEBP": "image/webp",
    "GIF": "image/gif",
    "BMP": "image/bmp",
    "HEIC": "image/heic",
    "HEIF": "image/heif",
}


@dataclass(frozen=True)
class ReferenceImage:
    """A local input image ready to be embedded as an inline data part."""

    path: str
    data: bytes = field(repr=False)
    mime_type: str

    def to_base64(self) -> str:
        return encode_base64(self.data)


def _infer_mime_from_magic(data: bytes) -> str | None:
    """Infer MIME type from magic bytes. Returns e.g. 'image/png' or None."""
    if len(data) < 12:
        return None
    if data[:8] == b"\x89PNG\r\n\x1a\n":
        return "image/png"
    if data[:2] == b"\xff\xd8":
        return "image/jpeg"
    if data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "image/webp"
    if data[:6] in (b"GIF87a", b"GIF89a"):
        return "image/gif"
    # BMP reserved header fields are always zero
    if data[:2] == b"BM" and data[6:10] == b"\x00\x00\x00\x00":
        return "image/bmp"
    if data[4:12] in (b"ftypheic", b"ftypheix"):
        return "image/heic"
    if data[4:12] == b"ftypmif1":
        return "image/heif"
    return None


def _mime_from_suffix(path: Path) -> str | None:
    return _SUFFIX_MIME_TYPES.get(path.suffix.upper().lstrip("."))


def _mime_from_pillow(path: Path) -> str | None:
    """Ask Pillow to identify the file; None when it is not a readable image."""
    try:
        with Image.open(path) as image:
            fmt = image.format
    except (UnidentifiedImageError, OSError):
        return None
    if not fmt:
        return None
    return Image.MIME.get(fmt)


def detect_mime_type(path: str | Path, data: bytes | None = None) -> str | None:
    """
    Detect the MIME type of an image file.

    Checks magic bytes first, then the file suffix, then lets Pillow identify
    the file.

    Args:
        path: Path to the image file
        data: File contents if already read (avoids a second read)

    Returns:
        MIME type string, or None if it cannot be determined
    """
    p = Path(path)
    if data is None:
        data = p.read_bytes()
    return _infer_mime_from_magic(data) or _mime_from_suffix(p) or _mime_from_pillow(p)


def load_reference_image(path: str | Path, mime_type: str | None = None) -> ReferenceImage:
    """
    Read a local input image for submission to the API.

    Args:
        path: Path to the image file
        mime_type: Optional MIME override; when unset the type is detected,
            falling back to image/png

    Returns:
        ReferenceImage with raw bytes and resolved MIME type

    Raises:
        InputNotFoundError: If the file does not exist
    """
    p = Path(path)
    if not p.is_file():
        raise InputNotFoundError(f"Input image not found: {p}", path=str(p))

    data = p.read_bytes()
    resolved = mime_type or detect_mime_type(p, data) or DEFAULT_INPUT_MIME_TYPE
    logger.debug("Loaded input image path=%s bytes=%d mime_type=%s", p, len(data), resolved)
    return ReferenceImage(path=str(p), data=data, mime_type=resolved)


def load_reference_images(
    paths: list[str | Path] | tuple[str | Path, ...], mime_type: str | None = None
) -> list[ReferenceImage]:
    """
    Read several input images, preserving the given order.

    Raises:
        InputNotFoundError: On the first path that does not exist
    """
    return [load_reference_image(p, mime_type) for p in paths]


def encode_base64(data: bytes) -> str:
    """Encode raw bytes as a base64 string for an inline data part."""
    return base64.b64encode(data).decode("ascii")


def extension_for_mime_type(mime_type: str) -> str:
    """Return a file extension (without dot) for an image MIME type, e.g. 'image/jpeg' -> 'jpg'."""
    if not mime_type or not mime_type.strip().lower().startswith("image/"):
        return "png"
    subtype = mime_type.split("/", 1)[1].lower().split(";")[0].strip()
    if subtype == "jpeg":
        return "jpg"
    return subtype or "png"
