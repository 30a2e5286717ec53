"""Batch processor for removing backgrounds from a directory of images."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable

from ...domain.entities.task import BatchSummary, FileTask, ProcessResult
from ...domain.value_objects.config import BatchConfig
from ...exceptions import InputNotFoundError, OutputNotFoundError, ProcessingError
from ..ports.background_remover import BackgroundRemover
from ..ports.event_publisher import (
    BatchEvent,
    ErrorEvent,
    EventPublisher,
    ProgressEvent,
    SimpleEventPublisher,
)
from .image_processor import ImageProcessor

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[ProgressEvent], None]
ErrorCallback = Callable[[ProcessingError], None]


def _log_error(error: ProcessingError) -> None:
    logger.error(f"Processing error: {error}")


class BatchProcessor:
    """Process every qualifying image of a directory concurrently."""

    def __init__(
        self,
        remover: BackgroundRemover,
        event_publisher: EventPublisher | None = None
    ):
        self._remover = remover
        self._events = event_publisher or SimpleEventPublisher()

    @staticmethod
    def collect_tasks(config: BatchConfig) -> list[FileTask]:
        """List the qualifying files of the input directory, sorted by name.

        Raises:
            InputNotFoundError: If the input directory cannot be listed
        """
        try:
            names = sorted(
                entry.name for entry in config.input_dir.iterdir()
                if entry.is_file() and config.accepts(entry.name)
            )
        except OSError as e:
            raise InputNotFoundError(
                f"Cannot read input directory {config.input_dir}: {e}",
                path=config.input_dir
            ) from e
        return [FileTask.for_file(name, config.input_dir, config.output_dir) for name in names]

    @staticmethod
    def _check_directories(config: BatchConfig) -> None:
        if not config.input_dir.is_dir():
            raise InputNotFoundError(
                f"Input directory does not exist: {config.input_dir}",
                path=config.input_dir
            )

        if config.output_dir.is_dir():
            return
        if not config.create_output_dir:
            raise OutputNotFoundError(
                f"Output directory does not exist: {config.output_dir}",
                path=config.output_dir
            )
        try:
            config.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise OutputNotFoundError(
                f"Could not create output directory {config.output_dir}: {e}",
                path=config.output_dir
            ) from e
        logger.info(f"Created output directory {config.output_dir}")

    async def run_batch(
        self,
        config: BatchConfig,
        on_progress: ProgressCallback | None = None,
        on_error: ErrorCallback | None = None
    ) -> list[ProcessResult]:
        """Process all qualifying files in config.input_dir.

        Args:
            config: Batch settings
            on_progress: Optional callback, called once per file at dispatch
            on_error: Optional callback, called once per failed file
                (defaults to logging the error)

        Returns:
            One result per qualifying file, in input order

        Raises:
            ConfigurationError: If api_key, input_dir or output_dir is missing
            InputNotFoundError: If the input directory is not accessible
            OutputNotFoundError: If the output directory is missing and may
                not (or could not) be created
        """
        config.check_required()
        self._check_directories(config)

        tasks = self.collect_tasks(config)
        if not tasks:
            logger.info(f"No matching image files found in {config.input_dir}")
            return []

        logger.info(f"Found {len(tasks)} files to process")
        start_time = time.time()

        processor = ImageProcessor(self._remover, config.options)
        limiter = asyncio.Semaphore(config.max_concurrency) if config.max_concurrency else None
        report_error = on_error or _log_error

        running: list[asyncio.Task[ProcessResult]] = []
        try:
            for i, task in enumerate(tasks, 1):
                event = ProgressEvent.at(i, len(tasks), task.file_name)
                if on_progress:
                    on_progress(event)
                self._events.publish(event)

                running.append(asyncio.create_task(
                    self._run_task(processor, config.api_key, task, limiter, report_error)
                ))
        except BaseException:
            for pending in running:
                pending.cancel()
            raise

        results = list(await asyncio.gather(*running))

        summary = BatchSummary.from_results(results, (time.time() - start_time) * 1000)
        logger.info(
            f"Batch complete: {summary.successful}/{summary.total} succeeded "
            f"in {summary.processing_time_ms:.0f} ms"
        )
        return results

    async def _run_task(
        self,
        processor: ImageProcessor,
        api_key: str,
        task: FileTask,
        limiter: asyncio.Semaphore | None,
        report_error: ErrorCallback
    ) -> ProcessResult:
        try:
            if limiter is None:
                await processor.process_one(api_key, task.input_path, task.output_path)
            else:
                async with limiter:
                    await processor.process_one(api_key, task.input_path, task.output_path)
            return ProcessResult.succeeded(task)
        except ProcessingError as e:
            error = e
        except Exception as e:
            logger.exception(f"Unexpected error processing {task.file_name}")
            error = ProcessingError(f"Unexpected: {type(e).__name__}: {e}", image_path=task.input_path)

        try:
            self._events.publish(ErrorEvent(file=task.file_name, input_path=task.input_path, error=error))
        except Exception:
            logger.exception("Error event subscriber failed")
        try:
            report_error(error)
        except Exception:
            logger.exception("Error callback failed")
        return ProcessResult.failed(task, error.message)

    def subscribe_to_events(self, callback: Callable[[BatchEvent], None]) -> None:
        """Subscribe to progress and error events."""
        self._events.subscribe(callback)


__all__ = ['BatchProcessor']
