"""Background Remover port - interface for the remote removal service."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Protocol, runtime_checkable

from ...domain.value_objects.config import RemovalOptions


def _noop() -> None:
    pass


@dataclass(frozen=True, slots=True)
class RemovalOutput:
    """Temporary result of a removal call.

    The file at ``output_path`` belongs to the remover until ``cleanup``
    is called.
    """
    output_path: Path
    cleanup: Callable[[], None] = _noop


@runtime_checkable
class BackgroundRemover(Protocol):
    """Port for background removal services.

    Implementations: rembg API client, test doubles.
    """

    async def remove_background(
        self,
        api_key: str,
        input_path: Path,
        options: RemovalOptions | None = None
    ) -> RemovalOutput:
        """Remove the background of one image.

        Args:
            api_key: Service credential
            input_path: Image to process
            options: Request parameters (None for service defaults)

        Returns:
            Location of the temporary result and its cleanup handle
        """
        ...
