"""Configuration and constants for the rembg batch tool."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ApiConfig:
    """Settings for the remote background removal service."""
    url: str = "https://api.rembg.com/rmbg"
    api_key_header: str = "x-api-key"
    image_field: str = "image"
    output_format: str = "png"  # Results are always written as PNG


API_CONFIG = ApiConfig()


# File handling
DEFAULT_EXTENSIONS: frozenset[str] = frozenset({"png", "jpg", "jpeg"})
OUTPUT_SUFFIX = ".png"
TEMP_FILE_PREFIX = "rembg_"


# Environment
ENV_FILE = ".env"
API_KEY_ENV_KEYS: tuple[str, ...] = ("REMBG_API_KEY", "API_KEY")
KEYRING_SERVICE = "rembg_batch"
KEYRING_USERNAME = "api_key"


# Logging
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"
DEFAULT_LOG_FILE = "rembg_batch.log"
