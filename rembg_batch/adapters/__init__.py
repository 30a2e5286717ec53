"""Adapters - implementations of application ports."""

from .rembg_api import RembgApiClient

__all__ = ['RembgApiClient']
