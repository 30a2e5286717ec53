"""Shared fixtures for the test suite."""

import asyncio
from pathlib import Path

import pytest
from PIL import Image

from rembg_batch.application.ports.background_remover import RemovalOutput
from rembg_batch.exceptions import ApiError


class FakeRemover:
    """In-memory stand-in for the remote service.

    Writes a small RGBA PNG per call into work_dir. Files listed in
    fail_for raise ApiError, delays (seconds) let tests reorder completion.
    """

    def __init__(self, work_dir: Path, fail_for=(), delays=None, image_format="PNG"):
        self.work_dir = work_dir
        self.fail_for = set(fail_for)
        self.delays = delays or {}
        self.image_format = image_format
        self.calls: list[str] = []
        self.cleaned: list[Path] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def remove_background(self, api_key, input_path, options=None):
        self.calls.append(input_path.name)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delays.get(input_path.name, 0))
            if input_path.name in self.fail_for:
                raise ApiError("service unavailable", status_code=503)
            suffix = ".png" if self.image_format == "PNG" else ".jpg"
            out = self.work_dir / f"tmp_{len(self.calls)}_{input_path.stem}{suffix}"
            mode = "RGBA" if self.image_format == "PNG" else "RGB"
            Image.new(mode, (4, 4), (255, 0, 0)).save(out, format=self.image_format)
            return RemovalOutput(output_path=out, cleanup=lambda: self._cleanup(out))
        finally:
            self.in_flight -= 1

    def _cleanup(self, path: Path) -> None:
        self.cleaned.append(path)
        path.unlink(missing_ok=True)


@pytest.fixture
def input_dir(tmp_path):
    path = tmp_path / "input"
    path.mkdir()
    return path


@pytest.fixture
def output_dir(tmp_path):
    return tmp_path / "output"


@pytest.fixture
def remover(tmp_path):
    work = tmp_path / "work"
    work.mkdir()
    return FakeRemover(work)


def make_files(directory: Path, *names: str) -> None:
    for name in names:
        (directory / name).write_bytes(b"not really an image")
