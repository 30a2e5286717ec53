"""Unit tests for batch configuration."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from rembg_batch.domain.value_objects.config import BatchConfig, RemovalOptions
from rembg_batch.exceptions import ConfigurationError


class TestBatchConfig:
    """Tests for BatchConfig."""

    def test_default_values(self):
        config = BatchConfig(api_key="k", input_dir="in", output_dir="out")
        assert config.extensions == frozenset({"png", "jpg", "jpeg"})
        assert config.create_output_dir is True
        assert config.max_concurrency is None
        assert config.input_dir == Path("in")
        assert config.options == RemovalOptions()

    def test_extensions_normalized(self):
        config = BatchConfig(extensions=[".PNG", "Jpg", " webp "])
        assert config.extensions == frozenset({"png", "jpg", "webp"})

    def test_single_extension_string(self):
        config = BatchConfig(extensions="gif")
        assert config.extensions == frozenset({"gif"})

    def test_empty_extensions_accept_nothing(self):
        config = BatchConfig(extensions=[])
        assert config.extensions == frozenset()
        assert not config.accepts("a.png")

    def test_max_concurrency_must_be_positive(self):
        with pytest.raises(ValidationError):
            BatchConfig(max_concurrency=0)

    def test_blank_values_treated_as_missing(self):
        config = BatchConfig(api_key=None, input_dir="  ", output_dir="")
        assert config.api_key == ""
        assert config.input_dir is None
        assert config.output_dir is None

    def test_check_required_passes(self):
        BatchConfig(api_key="k", input_dir="in", output_dir="out").check_required()

    @pytest.mark.parametrize("missing", ["api_key", "input_dir", "output_dir"])
    def test_check_required_reports_field(self, missing):
        values = {"api_key": "k", "input_dir": "in", "output_dir": "out", missing: ""}
        with pytest.raises(ConfigurationError) as exc_info:
            BatchConfig(**values).check_required()
        assert exc_info.value.config_key == missing

    def test_accepts(self):
        config = BatchConfig()
        assert config.accepts("a.png")
        assert config.accepts("B.JPEG")
        assert not config.accepts("c.txt")
        assert not config.accepts("png")
        assert not config.accepts(".png")

    def test_frozen(self):
        config = BatchConfig(api_key="k")
        with pytest.raises(ValidationError):
            config.api_key = "other"


class TestRemovalOptions:
    """Tests for RemovalOptions."""

    def test_default_form_fields(self):
        assert RemovalOptions().to_form_fields() == {
            "format": "png",
            "exact_resize": "false",
            "mask": "false",
            "angle": "0",
            "expand": "true",
        }

    def test_bg_color_normalized(self):
        assert RemovalOptions(bg_color="FFFFFF80").bg_color == "#FFFFFF80"
        assert RemovalOptions(bg_color="#000000").bg_color == "#000000"
        assert RemovalOptions(bg_color="").bg_color is None

    def test_invalid_bg_color(self):
        with pytest.raises(ValidationError):
            RemovalOptions(bg_color="red")

    def test_invalid_size(self):
        with pytest.raises(ValidationError):
            RemovalOptions(width=0)

    def test_angle_range(self):
        with pytest.raises(ValidationError):
            RemovalOptions(angle=720)
