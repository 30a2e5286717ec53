"""Environment and utility functions."""

import logging
import os
import sys
from pathlib import Path

import keyring
from dotenv import dotenv_values, set_key
from keyring.errors import KeyringError

from ..config import (
    API_KEY_ENV_KEYS,
    DEFAULT_LOG_FILE,
    ENV_FILE,
    KEYRING_SERVICE,
    KEYRING_USERNAME,
    LOG_DATE_FORMAT,
    LOG_FORMAT,
)

logger = logging.getLogger(__name__)

PLACEHOLDER_KEY = "your_api_key_here"


def setup_logging(level: int = logging.INFO, log_file: str | None = DEFAULT_LOG_FILE) -> None:
    """Set up logging configuration.

    Logs are written to both console (stderr) and a file.

    Args:
        level: Logging level
        log_file: Path to log file (None to disable file logging)
    """
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
            file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
            handlers.append(file_handler)
        except OSError as e:
            # Console-only if the log file cannot be opened
            print(f"Warning: Could not open log file '{log_file}': {e}", file=sys.stderr)

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        handlers=handlers,
        force=True
    )


def _read_key_from_file(env_file: str | Path = ENV_FILE) -> str | None:
    """Read the API key from a .env file, if one is present."""
    env_path = Path(env_file)
    if not env_path.exists():
        return None

    values = dotenv_values(env_path)
    for name in API_KEY_ENV_KEYS:
        key = (values.get(name) or "").strip()
        if key and key != PLACEHOLDER_KEY:
            return key
    return None


def store_key_secure(api_key: str) -> bool:
    """Store the API key in the system keyring.

    Returns:
        True if stored in keyring, False if the keyring is unusable
    """
    try:
        keyring.set_password(KEYRING_SERVICE, KEYRING_USERNAME, api_key)
        return True
    except KeyringError as e:
        logger.debug(f"Keyring unavailable: {e}")
        return False


def retrieve_key_secure() -> str | None:
    """Retrieve the API key from the system keyring."""
    try:
        return keyring.get_password(KEYRING_SERVICE, KEYRING_USERNAME)
    except KeyringError as e:
        logger.debug(f"Keyring unavailable: {e}")
        return None


def load_api_key(env_file: str | Path = ENV_FILE) -> str | None:
    """Load the API key from environment, keyring, or .env file.

    Environment variables are checked in order: REMBG_API_KEY, API_KEY.

    Returns:
        Key string or None if not found
    """
    for name in API_KEY_ENV_KEYS:
        key = os.getenv(name)
        if key and key.strip():
            return key.strip()

    key = retrieve_key_secure()
    if key:
        return key

    return _read_key_from_file(env_file)


def save_api_key(api_key: str, env_file: str | Path = ENV_FILE) -> bool:
    """Save the API key to the keyring, or to a .env file as fallback.

    Args:
        api_key: Key to save
        env_file: .env file used when the keyring is unavailable

    Returns:
        True if stored in keyring, False if written to the .env file

    Raises:
        ValueError: If the key is empty
    """
    if not api_key or not api_key.strip():
        raise ValueError("API key cannot be empty")

    api_key = api_key.strip()

    if store_key_secure(api_key):
        return True

    env_path = Path(env_file)
    if not env_path.exists():
        env_path.write_text(
            "# rembg API key\n"
            "# SECURITY: This file contains sensitive data.\n",
            encoding="utf-8"
        )

    set_key(str(env_path), API_KEY_ENV_KEYS[0], api_key)

    # rw------- where the platform supports it
    try:
        os.chmod(env_path, 0o600)
    except OSError:
        pass

    logger.warning(
        f"API key saved to {env_path.absolute()}. "
        "Note: Key is stored in plaintext. Ensure this file is not committed to version control."
    )
    return False
