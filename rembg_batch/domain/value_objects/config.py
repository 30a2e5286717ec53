"""Configuration value objects with validation."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

from ...config import API_CONFIG, DEFAULT_EXTENSIONS
from ...exceptions import ConfigurationError

_HEX_COLOR = re.compile(r"^#?(?:[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")


def _form_bool(value: bool) -> str:
    return "true" if value else "false"


class RemovalOptions(BaseModel):
    """Request parameters forwarded to the background removal service."""

    model_config = {"frozen": True}

    width: int | None = Field(default=None, ge=1)
    height: int | None = Field(default=None, ge=1)
    exact_resize: bool = False
    mask: bool = False  # Return the alpha mask instead of the cut-out
    bg_color: str | None = None
    angle: int = Field(default=0, ge=-360, le=360)
    expand: bool = True  # Pad rotated images instead of cropping them

    @field_validator('bg_color')
    @classmethod
    def validate_bg_color(cls, v: str | None) -> str | None:
        """Accept RGB or RGBA hex colours, with or without leading '#'."""
        if v is None or not v.strip():
            return None
        v = v.strip()
        if not _HEX_COLOR.match(v):
            raise ValueError(f"bg_color must be a hex colour like #ffffff or #ffffffff, got {v!r}")
        return v if v.startswith("#") else f"#{v}"

    def to_form_fields(self) -> dict[str, str]:
        """Render options as multipart form fields."""
        fields = {
            "format": API_CONFIG.output_format,
            "exact_resize": _form_bool(self.exact_resize),
            "mask": _form_bool(self.mask),
            "angle": str(self.angle),
            "expand": _form_bool(self.expand),
        }
        if self.width is not None:
            fields["w"] = str(self.width)
        if self.height is not None:
            fields["h"] = str(self.height)
        if self.bg_color is not None:
            fields["bg_color"] = self.bg_color
        return fields


class BatchConfig(BaseModel):
    """Settings for one batch run.

    Required values (api_key, input_dir, output_dir) may be left empty at
    construction time; ``check_required`` reports them as ConfigurationError
    before the batch touches the filesystem.
    """

    model_config = {"frozen": True}

    api_key: str = ""
    input_dir: Path | None = None
    output_dir: Path | None = None
    extensions: frozenset[str] = DEFAULT_EXTENSIONS
    create_output_dir: bool = True
    max_concurrency: int | None = Field(default=None, ge=1)
    options: RemovalOptions = Field(default_factory=RemovalOptions)

    @field_validator('api_key', mode='before')
    @classmethod
    def normalize_api_key(cls, v: Any) -> Any:
        if v is None:
            return ""
        return v.strip() if isinstance(v, str) else v

    @field_validator('input_dir', 'output_dir', mode='before')
    @classmethod
    def empty_path_is_missing(cls, v: Any) -> Any:
        # Path("") would silently become the current directory
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator('extensions', mode='before')
    @classmethod
    def normalize_extensions(cls, v: Any) -> frozenset[str]:
        """Lowercase extensions and strip the leading dot."""
        if isinstance(v, str):
            v = [v]
        return frozenset(
            ext.strip().lower().lstrip('.') for ext in v if ext and ext.strip().lstrip('.')
        )

    def check_required(self) -> None:
        """Raise ConfigurationError if a required value is missing."""
        if not self.api_key:
            raise ConfigurationError("Missing API key", config_key="api_key")
        if self.input_dir is None:
            raise ConfigurationError("Missing input directory", config_key="input_dir")
        if self.output_dir is None:
            raise ConfigurationError("Missing output directory", config_key="output_dir")

    def accepts(self, file_name: str) -> bool:
        """Check whether a file name has one of the configured extensions."""
        return Path(file_name).suffix.lower().lstrip('.') in self.extensions


__all__ = [
    'BatchConfig',
    'RemovalOptions',
]
