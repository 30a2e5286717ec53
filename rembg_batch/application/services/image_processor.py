"""Single image processor - one remote call plus the local copy."""

from __future__ import annotations

import asyncio
import logging
import shutil
from pathlib import Path

from PIL import Image as PILImage

from ...domain.value_objects.config import RemovalOptions
from ...exceptions import ProcessingError, RembgBatchError
from ..ports.background_remover import BackgroundRemover, RemovalOutput

logger = logging.getLogger(__name__)

# Modes Pillow can write as PNG without conversion
PNG_MODES = frozenset({"1", "L", "LA", "I", "I;16", "P", "RGB", "RGBA"})


def write_png(source: Path, destination: Path) -> None:
    """Copy an image to destination as PNG.

    PNG input is copied byte-for-byte, other formats are re-encoded.

    Raises:
        OSError: If the source is not a readable image or the write fails
    """
    with PILImage.open(source) as image:
        if image.format != "PNG":
            if image.mode in PNG_MODES:
                image.save(destination, format="PNG")
            else:
                converted = image.convert("RGBA")
                try:
                    converted.save(destination, format="PNG")
                finally:
                    converted.close()
            return
    shutil.copyfile(source, destination)


def _describe(error: Exception) -> str:
    if isinstance(error, RembgBatchError):
        return error.message
    return str(error) or type(error).__name__


class ImageProcessor:
    """Remove the background of a single image and store the result."""

    def __init__(
        self,
        remover: BackgroundRemover,
        options: RemovalOptions | None = None
    ):
        self._remover = remover
        self._options = options or RemovalOptions()

    @property
    def options(self) -> RemovalOptions:
        return self._options

    async def process_one(self, api_key: str, input_path: Path, output_path: Path) -> Path:
        """Process one file.

        Args:
            api_key: Service credential
            input_path: Image to send to the service
            output_path: Where the PNG result is written

        Returns:
            The output path

        Raises:
            ProcessingError: If the remote call or the copy fails
        """
        logger.info(f"Processing {input_path}")

        try:
            removal = await self._remover.remove_background(api_key, input_path, self._options)
        except (RembgBatchError, OSError) as e:
            raise ProcessingError(_describe(e), image_path=input_path) from e

        try:
            await asyncio.to_thread(write_png, removal.output_path, output_path)
        except OSError as e:
            raise ProcessingError(
                f"Could not write {output_path.name}: {_describe(e)}",
                image_path=input_path
            ) from e
        finally:
            self._cleanup(removal)

        logger.info(f"Saved: {output_path}")
        return output_path

    @staticmethod
    def _cleanup(removal: RemovalOutput) -> None:
        try:
            removal.cleanup()
        except OSError as e:
            logger.warning(f"Failed to remove temporary file {removal.output_path}: {e}")
