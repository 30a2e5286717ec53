"""Event Publisher port - interface for publishing batch events."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Protocol, Union, runtime_checkable

from ...exceptions import ProcessingError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ProgressEvent:
    """Emitted when a file is dispatched."""
    current: int  # 1-based
    total: int
    file: str
    percent: int  # 0 to 100

    @classmethod
    def at(cls, current: int, total: int, file: str) -> ProgressEvent:
        # Half-up rounding, 1/8 is 13%
        percent = int(current * 100 / total + 0.5)
        return cls(current=current, total=total, file=file, percent=percent)


@dataclass(frozen=True, slots=True)
class ErrorEvent:
    """Emitted when a file fails."""
    file: str
    input_path: Path
    error: ProcessingError


BatchEvent = Union[ProgressEvent, ErrorEvent]


@runtime_checkable
class EventPublisher(Protocol):
    """Port for publishing batch events."""

    def publish(self, event: BatchEvent) -> None:
        """Publish an event."""
        ...

    def subscribe(self, callback: Callable[[BatchEvent], None]) -> None:
        """Subscribe to events."""
        ...


class SimpleEventPublisher:
    """Simple synchronous event publisher."""

    def __init__(self):
        self._subscribers: list[Callable[[BatchEvent], None]] = []

    def publish(self, event: BatchEvent) -> None:
        for callback in self._subscribers:
            try:
                callback(event)
            except Exception:
                logger.exception(f"Event subscriber failed on {type(event).__name__}")

    def subscribe(self, callback: Callable[[BatchEvent], None]) -> None:
        self._subscribers.append(callback)
