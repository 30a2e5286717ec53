"""Domain entities."""

from .task import BatchSummary, FileTask, ProcessResult

__all__ = ['FileTask', 'ProcessResult', 'BatchSummary']
