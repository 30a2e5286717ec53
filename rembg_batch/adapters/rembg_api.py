"""rembg API adapter - implements the BackgroundRemover port over HTTP."""

from __future__ import annotations

import asyncio
import logging
import mimetypes
import os
import tempfile
from pathlib import Path
from types import TracebackType

import aiofiles
import aiohttp
from aiohttp import ClientTimeout

from ..application.ports.background_remover import BackgroundRemover, RemovalOutput
from ..config import API_CONFIG, OUTPUT_SUFFIX, TEMP_FILE_PREFIX
from ..domain.value_objects.config import RemovalOptions
from ..exceptions import ApiError

logger = logging.getLogger(__name__)


def _temp_cleanup(path: Path):
    def cleanup() -> None:
        path.unlink(missing_ok=True)
    return cleanup


class RembgApiClient(BackgroundRemover):
    """Client for the rembg background removal API.

    Use as an async context manager so the HTTP session is closed:

        async with RembgApiClient() as client:
            output = await client.remove_background(api_key, path)
    """

    def __init__(
        self,
        api_url: str = API_CONFIG.url,
        timeout: float | None = None,
        temp_dir: Path | None = None
    ):
        self._api_url = api_url
        self._timeout = ClientTimeout(total=timeout)
        self._temp_dir = temp_dir
        self._session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> RembgApiClient:
        self._ensure_session()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        await self.close()

    def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self._timeout)
        return self._session

    async def close(self) -> None:
        if self._session is not None:
            await self._session.close()
            self._session = None

    async def _build_form(self, input_path: Path, options: RemovalOptions) -> aiohttp.FormData:
        async with aiofiles.open(input_path, mode="rb") as image_file:
            image_bytes = await image_file.read()

        content_type = mimetypes.guess_type(input_path.name)[0] or "application/octet-stream"
        form = aiohttp.FormData()
        form.add_field(
            API_CONFIG.image_field,
            image_bytes,
            filename=input_path.name,
            content_type=content_type
        )
        for name, value in options.to_form_fields().items():
            form.add_field(name, value)
        return form

    @staticmethod
    async def _error_message(response: aiohttp.ClientResponse) -> str:
        message = f"rembg API error: HTTP {response.status}"
        try:
            body = await response.text()
        except (aiohttp.ClientError, UnicodeDecodeError):
            return message
        if not body:
            return message
        try:
            data = await response.json(content_type=None)
        except ValueError:
            return f"{message}: {body.strip()[:200]}"
        if isinstance(data, dict):
            detail = data.get("errors") or data.get("error") or data.get("detail") or data.get("message")
            if detail:
                return f"{message}: {detail}"
        return message

    def _write_temp(self, content: bytes) -> Path:
        fd, name = tempfile.mkstemp(prefix=TEMP_FILE_PREFIX, suffix=OUTPUT_SUFFIX, dir=self._temp_dir)
        with os.fdopen(fd, "wb") as f:
            f.write(content)
        return Path(name)

    async def remove_background(
        self,
        api_key: str,
        input_path: Path,
        options: RemovalOptions | None = None
    ) -> RemovalOutput:
        """Upload one image and download the result to a temporary file.

        Raises:
            ApiError: If the service rejects the request or the connection fails
            OSError: If the input cannot be read or the result cannot be stored
        """
        options = options or RemovalOptions()
        form = await self._build_form(Path(input_path), options)
        session = self._ensure_session()

        logger.debug(f"Uploading {input_path} to {self._api_url}")
        try:
            async with session.post(
                self._api_url,
                data=form,
                headers={API_CONFIG.api_key_header: api_key}
            ) as response:
                if response.status >= 300:
                    raise ApiError(await self._error_message(response), status_code=response.status)
                content = await response.read()
        except aiohttp.ClientError as e:
            raise ApiError(f"Request to rembg API failed: {e}") from e
        except asyncio.TimeoutError as e:
            raise ApiError("Request to rembg API timed out") from e

        output_path = await asyncio.to_thread(self._write_temp, content)
        logger.debug(f"Received {len(content)} bytes for {input_path}")
        return RemovalOutput(output_path=output_path, cleanup=_temp_cleanup(output_path))
