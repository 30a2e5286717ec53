"""Value objects - immutable settings."""

from .config import BatchConfig, RemovalOptions

__all__ = ['BatchConfig', 'RemovalOptions']
