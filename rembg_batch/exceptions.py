"""Custom exceptions for the rembg batch tool."""

from pathlib import Path
from typing import Optional


class RembgBatchError(Exception):
    """Base exception for all application errors.

    Attributes:
        message: Human-readable error description
        error_code: Optional error code for programmatic handling
    """

    def __init__(self, message: str, error_code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code

    def __str__(self) -> str:
        if self.error_code:
            return f"[{self.error_code}] {self.message}"
        return self.message


class ConfigurationError(RembgBatchError):
    """Missing or invalid batch configuration.

    Attributes:
        config_key: The configuration key that caused the error (if applicable)
    """

    def __init__(self, message: str, config_key: Optional[str] = None):
        super().__init__(message, error_code="CONFIG_ERROR")
        self.config_key = config_key


# Short name used throughout the public API
ConfigError = ConfigurationError


class InputNotFoundError(RembgBatchError):
    """Input directory does not exist or cannot be accessed.

    Attributes:
        path: The directory that was checked
    """

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message, error_code="INPUT_NOT_FOUND")
        self.path = path


class OutputNotFoundError(RembgBatchError):
    """Output directory does not exist and could not or may not be created.

    Attributes:
        path: The directory that was checked
    """

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message, error_code="OUTPUT_NOT_FOUND")
        self.path = path


class ProcessingError(RembgBatchError):
    """Processing of a single image failed.

    Attributes:
        image_path: Path to the image being processed when error occurred
    """

    def __init__(self, message: str, image_path: Optional[Path] = None):
        super().__init__(message, error_code="PROCESSING_ERROR")
        self.image_path = image_path

    def __str__(self) -> str:
        if self.image_path:
            return f"{super().__str__()} (image: {self.image_path})"
        return super().__str__()


class ApiError(RembgBatchError):
    """Remote service answered with an error status.

    Attributes:
        status_code: HTTP status returned by the service
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message, error_code="API_ERROR")
        self.status_code = status_code
