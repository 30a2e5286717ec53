"""Ports - interfaces for external dependencies (Dependency Inversion)."""

from .background_remover import BackgroundRemover, RemovalOutput
from .event_publisher import (
    BatchEvent,
    ErrorEvent,
    EventPublisher,
    ProgressEvent,
    SimpleEventPublisher,
)

__all__ = [
    'BackgroundRemover',
    'RemovalOutput',
    'BatchEvent',
    'ErrorEvent',
    'EventPublisher',
    'ProgressEvent',
    'SimpleEventPublisher',
]
