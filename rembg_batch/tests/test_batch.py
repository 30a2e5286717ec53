"""Tests for the keyword-style batch entry point."""

import asyncio
from unittest.mock import patch

import pytest

from ..batch import batch_remove_background
from ..domain.value_objects.config import RemovalOptions
from ..exceptions import ConfigurationError, InputNotFoundError
from .conftest import make_files


def test_processes_directory(input_dir, output_dir, remover):
    make_files(input_dir, "a.png", "b.jpg", "c.txt")
    progress = []

    results = asyncio.run(batch_remove_background(
        api_key="k",
        input_dir=str(input_dir),
        output_dir=str(output_dir),
        on_progress=progress.append,
        remover=remover,
    ))

    assert [r.file for r in results] == ["a.png", "b.jpg"]
    assert all(r.success for r in results)
    assert [e.current for e in progress] == [1, 2]


def test_missing_api_key(input_dir, output_dir, remover):
    with pytest.raises(ConfigurationError) as exc_info:
        asyncio.run(batch_remove_background(
            api_key=None, input_dir=input_dir, output_dir=output_dir, remover=remover
        ))
    assert exc_info.value.config_key == "api_key"


def test_invalid_settings_become_configuration_error(input_dir, output_dir, remover):
    with pytest.raises(ConfigurationError):
        asyncio.run(batch_remove_background(
            api_key="k", input_dir=input_dir, output_dir=output_dir,
            max_concurrency=0, remover=remover
        ))


def test_missing_input(tmp_path, output_dir, remover):
    with pytest.raises(InputNotFoundError):
        asyncio.run(batch_remove_background(
            api_key="k", input_dir=tmp_path / "absent", output_dir=output_dir, remover=remover
        ))


def test_default_remover_is_api_client(input_dir, output_dir, remover):
    """Without an injected remover the HTTP client is used and closed."""
    make_files(input_dir, "a.png")
    options = RemovalOptions(mask=True)

    with patch("rembg_batch.batch.RembgApiClient") as client_class:
        client = client_class.return_value
        client.__aenter__.return_value = remover
        results = asyncio.run(batch_remove_background(
            api_key="k", input_dir=input_dir, output_dir=output_dir,
            options=options, timeout=30,
        ))

    client_class.assert_called_once_with(timeout=30)
    client.__aexit__.assert_called_once()
    assert results[0].success is True
