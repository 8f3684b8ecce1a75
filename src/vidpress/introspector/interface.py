"""Prober interface for frame-size inference."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol


@dataclass(frozen=True)
class ProbeResult:
    """Frame size of the first video stream of one file."""

    width: int
    height: int

    @property
    def ratio(self) -> float:
        """Width/height aspect ratio."""
        return self.width / self.height


@dataclass(frozen=True)
class RatioSample:
    """Aspect ratio measured for one sampled file."""

    filename: str
    raw_ratio: float


class Prober(Protocol):
    """Protocol for frame-size probing implementations.

    The production implementation shells out to ffprobe; tests inject a
    StubProber with canned results.
    """

    def probe(self, path: Path) -> ProbeResult:
        """Report the frame size of a video file.

        Args:
            path: Path to the video file.

        Returns:
            ProbeResult with the width and height of the first video stream.

        Raises:
            ProbeFailedError: If the dimensions cannot be determined.
        """
        ...
