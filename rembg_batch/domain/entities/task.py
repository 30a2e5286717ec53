"""Per-file task and result entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from ...config import OUTPUT_SUFFIX


@dataclass(frozen=True, slots=True)
class FileTask:
    """One qualifying file of a batch."""
    file_name: str
    input_path: Path
    output_path: Path

    @classmethod
    def for_file(cls, file_name: str, input_dir: Path, output_dir: Path) -> FileTask:
        """Build a task whose output keeps the base name with a .png suffix."""
        return cls(
            file_name=file_name,
            input_path=input_dir / file_name,
            output_path=output_dir / f"{Path(file_name).stem}{OUTPUT_SUFFIX}"
        )


@dataclass(frozen=True, slots=True)
class ProcessResult:
    """Outcome of processing one file."""
    file: str
    success: bool
    input_path: Path
    output_path: Path | None = None
    error: str | None = None

    @classmethod
    def succeeded(cls, task: FileTask) -> ProcessResult:
        """Create a success result."""
        return cls(
            file=task.file_name,
            success=True,
            input_path=task.input_path,
            output_path=task.output_path
        )

    @classmethod
    def failed(cls, task: FileTask, error: str) -> ProcessResult:
        """Create a failure result."""
        return cls(
            file=task.file_name,
            success=False,
            input_path=task.input_path,
            error=error
        )

    def to_dict(self) -> dict[str, object]:
        data: dict[str, object] = {
            "file": self.file,
            "success": self.success,
            "inputPath": str(self.input_path),
        }
        if self.output_path is not None:
            data["outputPath"] = str(self.output_path)
        if self.error is not None:
            data["error"] = self.error
        return data


@dataclass
class BatchSummary:
    """Aggregate counts for a finished batch."""
    total: int
    successful: int
    failed: int
    processing_time_ms: float = 0.0
    failures: list[ProcessResult] = field(default_factory=list)

    @property
    def success_rate(self) -> float:
        """Calculate success rate."""
        if self.total == 0:
            return 0.0
        return self.successful / self.total

    @classmethod
    def from_results(
        cls,
        results: list[ProcessResult],
        processing_time_ms: float = 0.0
    ) -> BatchSummary:
        failures = [r for r in results if not r.success]
        return cls(
            total=len(results),
            successful=len(results) - len(failures),
            failed=len(failures),
            processing_time_ms=processing_time_ms,
            failures=failures
        )
