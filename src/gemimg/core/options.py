"""
Generation options shared by generate, edit and reference composition.

Every field is optional; an unset field is left out of the request so the
server default applies.
"""

from dataclasses import dataclass

from gemimg.utils.exceptions import InvalidArgumentError

ASPECT_RATIOS = ("1:1", "2:3", "3:2", "3:4", "4:3", "4:5", "5:4", "9:16", "16:9", "21:9")
IMAGE_SIZES = ("1K", "2K", "4K")
OUTPUT_MIME_TYPES = ("image/png", "image/jpeg", "image/webp")


@dataclass(frozen=True)
class GenerationOptions:
    """Per-call options for image generation requests.

    ``input_mime_type`` only applies to edit and reference composition, where it
    overrides the detected MIME type of every input file.
    """

    model: str | None = None
    aspect_ratio: str | None = None
    image_size: str | None = None
    include_text: bool = True
    enable_search_grounding: bool = False
    mime_type: str | None = None
    input_mime_type: str | None = None

    def __post_init__(self) -> None:
        if self.aspect_ratio is not None and self.aspect_ratio not in ASPECT_RATIOS:
            raise InvalidArgumentError(
                f"Unsupported aspect ratio: {self.aspect_ratio}. "
                f"Supported: {', '.join(ASPECT_RATIOS)}",
                field="aspect_ratio",
            )
        if self.image_size is not None and self.image_size not in IMAGE_SIZES:
            raise InvalidArgumentError(
                f"Unsupported image size: {self.image_size}. "
                f"Supported: {', '.join(IMAGE_SIZES)}",
                field="image_size",
            )
        if self.mime_type is not None and self.mime_type not in OUTPUT_MIME_TYPES:
            raise InvalidArgumentError(
                f"Unsupported output MIME type: {self.mime_type}. "
                f"Supported: {', '.join(OUTPUT_MIME_TYPES)}",
                field="mime_type",
            )
