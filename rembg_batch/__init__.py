"""rembg batch - remove image backgrounds for a whole folder via the rembg API."""

__version__ = "1.0.0"

from .adapters.rembg_api import RembgApiClient
from .application.ports import BackgroundRemover, ErrorEvent, ProgressEvent, RemovalOutput
from .application.services import BatchProcessor, ImageProcessor
from .batch import batch_remove_background
from .domain import BatchConfig, BatchSummary, FileTask, ProcessResult, RemovalOptions
from .exceptions import (
    RembgBatchError,
    ConfigurationError,
    ConfigError,
    InputNotFoundError,
    OutputNotFoundError,
    ProcessingError,
    ApiError,
)
from .utils.env import load_api_key, save_api_key, setup_logging

__all__ = [
    '__version__',
    'batch_remove_background',
    'BatchProcessor',
    'ImageProcessor',
    'RembgApiClient',
    'BackgroundRemover',
    'RemovalOutput',
    'BatchConfig',
    'RemovalOptions',
    'FileTask',
    'ProcessResult',
    'BatchSummary',
    'ProgressEvent',
    'ErrorEvent',
    'load_api_key',
    'save_api_key',
    'setup_logging',
    # Exceptions
    'RembgBatchError',
    'ConfigurationError',
    'ConfigError',
    'InputNotFoundError',
    'OutputNotFoundError',
    'ProcessingError',
    'ApiError',
]
