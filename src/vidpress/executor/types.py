"""Executor data types and result classes."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from vidpress.core.formatting import format_megabytes


@dataclass(frozen=True)
class CompressStats:
    """Result of a compress operation."""

    input_path: Path
    output_path: Path
    original_size: int
    compressed_size: int

    @property
    def reduction_percent(self) -> float:
        """Size reduction, (1 - new/old) * 100. 0.0 for an empty input."""
        if self.original_size == 0:
            return 0.0
        return (1 - self.compressed_size / self.original_size) * 100

    def summary(self) -> str:
        """One-line size report."""
        return (
            f"Original: {format_megabytes(self.original_size)}, "
            f"Compressed: {format_megabytes(self.compressed_size)}, "
            f"Reduction: {self.reduction_percent:.2f}%"
        )


@dataclass
class MergePlan:
    """Work owned by one merge call.

    The scratch directory and everything in it (segments, manifest) is
    removed when the call returns.
    """

    input_dir: Path
    output_path: Path
    files: list[str]
    width: int
    height: int
    ratio: float
    scratch_dir: Path
    segments: list[Path] = field(default_factory=list)

    @property
    def manifest_path(self) -> Path:
        """Concat-demuxer list file inside the scratch directory."""
        return self.scratch_dir / "files.txt"

    def segment_path(self, index: int, extension: str) -> Path:
        """Scratch path of the index-th normalized segment."""
        return self.scratch_dir / f"seg_{index:03d}{extension}"


@dataclass(frozen=True)
class MergeResult:
    """Result of a merge operation."""

    output_path: Path
    width: int
    height: int
    ratio: float
    segment_count: int
