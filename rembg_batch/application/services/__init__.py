"""Application services - orchestrate use cases."""

from .batch_processor import BatchProcessor
from .image_processor import ImageProcessor

__all__ = ['BatchProcessor', 'ImageProcessor']
