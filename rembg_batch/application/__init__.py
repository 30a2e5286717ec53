"""Application layer - use cases and orchestration."""

from .services.batch_processor import BatchProcessor
from .services.image_processor import ImageProcessor

__all__ = ['BatchProcessor', 'ImageProcessor']
