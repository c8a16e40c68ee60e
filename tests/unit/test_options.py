"""Unit tests for GenerationOptions validation."""

import pytest

from gemimg.core.options import ASPECT_RATIOS, IMAGE_SIZES, GenerationOptions
from gemimg.utils.exceptions import InvalidArgumentError


@pytest.mark.unit
class TestGenerationOptions:
    def test_defaults(self):
        o = GenerationOptions()
        assert o.model is None
        assert o.aspect_ratio is None
        assert o.image_size is None
        assert o.include_text is True
        assert o.enable_search_grounding is False
        assert o.mime_type is None
        assert o.input_mime_type is None

    def test_all_aspect_ratios_accepted(self):
        assert len(ASPECT_RATIOS) == 10
        for ratio in ASPECT_RATIOS:
            assert GenerationOptions(aspect_ratio=ratio).aspect_ratio == ratio

    def test_all_image_sizes_accepted(self):
        for size in IMAGE_SIZES:
            GenerationOptions(image_size=size)

    def test_bad_aspect_ratio_raises(self):
        with pytest.raises(InvalidArgumentError) as exc_info:
            GenerationOptions(aspect_ratio="7:3")
        assert exc_info.value.field == "aspect_ratio"

    def test_bad_image_size_raises(self):
        with pytest.raises(InvalidArgumentError) as exc_info:
            GenerationOptions(image_size="8K")
        assert exc_info.value.field == "image_size"

    def test_bad_mime_type_raises(self):
        with pytest.raises(InvalidArgumentError) as exc_info:
            GenerationOptions(mime_type="image/gif")
        assert exc_info.value.field == "mime_type"

    def test_input_mime_type_is_free_form(self):
        assert GenerationOptions(input_mime_type="image/heic").input_mime_type == "image/heic"
