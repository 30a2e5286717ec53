"""Command-line interface for the rembg batch tool."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from .application.ports.event_publisher import ProgressEvent
from .batch import batch_remove_background
from .config import DEFAULT_EXTENSIONS
from .domain.entities.task import BatchSummary
from .domain.value_objects.config import RemovalOptions
from .exceptions import ProcessingError, RembgBatchError
from .utils.env import load_api_key, save_api_key, setup_logging

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser."""
    parser = argparse.ArgumentParser(
        prog="rembg-batch",
        description="Remove image backgrounds for a whole folder via the rembg API"
    )

    parser.add_argument("input", help="Input folder")
    parser.add_argument("-o", "--output", required=True, help="Output folder")

    parser.add_argument(
        "-k", "--api-key",
        help="rembg API key (default: REMBG_API_KEY / API_KEY, keyring or .env)"
    )

    parser.add_argument(
        "-e", "--extensions",
        nargs="+",
        default=sorted(DEFAULT_EXTENSIONS),
        metavar="EXT",
        help="File extensions to process (default: jpeg jpg png)"
    )

    parser.add_argument(
        "--no-create-output",
        action="store_true",
        help="Fail instead of creating a missing output folder"
    )

    parser.add_argument(
        "--max-concurrency",
        type=int,
        metavar="N",
        help="Maximum simultaneous requests (default: no limit)"
    )

    parser.add_argument(
        "--timeout",
        type=float,
        metavar="SECONDS",
        help="Per-request timeout (default: none)"
    )

    parser.add_argument(
        "--save-key",
        action="store_true",
        help="Store the given --api-key for later runs"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output"
    )

    # Service options
    api_group = parser.add_argument_group("Removal options")
    api_group.add_argument("-W", "--width", type=int, help="Resize result to this width")
    api_group.add_argument("-H", "--height", type=int, help="Resize result to this height")
    api_group.add_argument(
        "--exact-resize",
        action="store_true",
        help="Resize to exactly width x height, ignoring aspect ratio"
    )
    api_group.add_argument(
        "--mask",
        action="store_true",
        help="Return the alpha mask instead of the cut-out"
    )
    api_group.add_argument(
        "--bg-color",
        metavar="HEX",
        help="Fill the background with this colour, e.g. #ffffffff"
    )
    api_group.add_argument(
        "--angle",
        type=int,
        default=0,
        help="Rotate the image by this many degrees (default: 0)"
    )
    api_group.add_argument(
        "--no-expand",
        action="store_true",
        help="Crop rotated images instead of padding them"
    )

    return parser


def _print_progress(event: ProgressEvent) -> None:
    logger.info(f"[{event.current}/{event.total}] {event.percent}% {event.file}")


def _report(summary: BatchSummary) -> None:
    logger.info("=" * 50)
    logger.info(f"Succeeded: {summary.successful}")
    logger.info(f"Failed: {summary.failed}")
    for result in summary.failures:
        logger.error(f"  - {result.file}: {result.error}")


def main(args: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = create_parser()
    parsed = parser.parse_args(args)

    setup_logging(logging.DEBUG if parsed.verbose else logging.INFO)

    api_key = parsed.api_key or load_api_key()
    if not api_key:
        logger.error("No API key found. Pass --api-key or set REMBG_API_KEY.")
        return 1

    if parsed.save_key and parsed.api_key:
        save_api_key(parsed.api_key)

    try:
        options = RemovalOptions(
            width=parsed.width,
            height=parsed.height,
            exact_resize=parsed.exact_resize,
            mask=parsed.mask,
            bg_color=parsed.bg_color,
            angle=parsed.angle,
            expand=not parsed.no_expand,
        )
    except ValueError as e:
        logger.error(f"Invalid removal options: {e}")
        return 1

    def on_error(error: ProcessingError) -> None:
        logger.debug(f"Failure detail: {error}")

    try:
        results = asyncio.run(batch_remove_background(
            api_key=api_key,
            input_dir=Path(parsed.input),
            output_dir=Path(parsed.output),
            extensions=parsed.extensions,
            create_output_dir=not parsed.no_create_output,
            on_progress=_print_progress,
            on_error=on_error,
            options=options,
            max_concurrency=parsed.max_concurrency,
            timeout=parsed.timeout,
        ))
    except RembgBatchError as e:
        logger.error(str(e))
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 1

    if not results:
        logger.warning(f"No image files found in {parsed.input}")
        return 0

    summary = BatchSummary.from_results(results)
    _report(summary)
    return 1 if summary.failed else 0


if __name__ == "__main__":
    sys.exit(main())
