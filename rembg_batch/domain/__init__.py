"""Domain layer - batch entities and settings, no I/O."""

from .entities.task import BatchSummary, FileTask, ProcessResult
from .value_objects.config import BatchConfig, RemovalOptions

__all__ = [
    # Entities
    'FileTask',
    'ProcessResult',
    'BatchSummary',
    # Value Objects
    'BatchConfig',
    'RemovalOptions',
]
