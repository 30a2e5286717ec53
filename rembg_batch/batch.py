"""Keyword-style entry point for removing backgrounds from a directory."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from pydantic import ValidationError as PydanticValidationError

from .adapters.rembg_api import RembgApiClient
from .application.ports.background_remover import BackgroundRemover
from .application.services.batch_processor import (
    BatchProcessor,
    ErrorCallback,
    ProgressCallback,
)
from .config import DEFAULT_EXTENSIONS
from .domain.entities.task import ProcessResult
from .domain.value_objects.config import BatchConfig, RemovalOptions
from .exceptions import ConfigurationError


async def batch_remove_background(
    api_key: str | None = None,
    input_dir: str | Path | None = None,
    output_dir: str | Path | None = None,
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
    create_output_dir: bool = True,
    on_progress: ProgressCallback | None = None,
    on_error: ErrorCallback | None = None,
    *,
    options: RemovalOptions | None = None,
    max_concurrency: int | None = None,
    timeout: float | None = None,
    remover: BackgroundRemover | None = None,
) -> list[ProcessResult]:
    """Remove the background of every matching image in input_dir.

    Args:
        api_key: rembg API key
        input_dir: Directory with source images
        output_dir: Directory for the PNG results
        extensions: Extensions to process, with or without leading dot
        create_output_dir: Create output_dir if it does not exist
        on_progress: Called once per file as it is dispatched
        on_error: Called once per failed file (default: log it)
        options: Request parameters for the service
        max_concurrency: Cap on simultaneous requests (None for no cap)
        timeout: Per-request timeout in seconds (None for no timeout)
        remover: Service implementation (default: RembgApiClient)

    Returns:
        One ProcessResult per matching file, in input order

    Raises:
        ConfigurationError: On missing or invalid settings
        InputNotFoundError: If input_dir does not exist
        OutputNotFoundError: If output_dir is missing and may not be created
    """
    try:
        config = BatchConfig(
            api_key=api_key,
            input_dir=input_dir,
            output_dir=output_dir,
            extensions=extensions,
            create_output_dir=create_output_dir,
            max_concurrency=max_concurrency,
            options=options or RemovalOptions(),
        )
    except PydanticValidationError as e:
        raise ConfigurationError(f"Invalid batch configuration: {e}") from e

    if remover is not None:
        return await BatchProcessor(remover).run_batch(config, on_progress, on_error)

    async with RembgApiClient(timeout=timeout) as client:
        return await BatchProcessor(client).run_batch(config, on_progress, on_error)
