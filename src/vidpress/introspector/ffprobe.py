"""FFprobe-based implementation of the Prober protocol."""

import logging
import subprocess  # nosec B404 - subprocess is required for ffprobe invocation
from pathlib import Path

from vidpress.core.subprocess_utils import run_command
from vidpress.exceptions import ProbeFailedError
from vidpress.introspector.interface import ProbeResult

logger = logging.getLogger(__name__)

# Prevent hangs on corrupted files
PROBE_TIMEOUT = 60


def parse_dimensions(output: str) -> tuple[int, int]:
    """Parse ffprobe "WIDTH,HEIGHT" csv output.

    Args:
        output: Raw stdout of ffprobe.

    Returns:
        Tuple of (width, height).

    Raises:
        ValueError: If the output is not exactly two comma-separated
            non-negative integers.
    """
    parts = output.strip().split(",")
    if len(parts) != 2:
        raise ValueError(f"unexpected ffprobe output format: {output.strip()!r}")
    width_text, height_text = (part.strip() for part in parts)
    if not (width_text.isdigit() and height_text.isdigit()):
        raise ValueError(f"non-integer dimensions: {output.strip()!r}")
    return int(width_text), int(height_text)


class FFprobeProber:
    """ffprobe-based implementation of the Prober protocol.

    Reads the width and height of the first video stream only.
    """

    def __init__(self, ffprobe_path: Path, timeout: float | None = PROBE_TIMEOUT):
        """Initialize the prober.

        Args:
            ffprobe_path: Path to the ffprobe executable.
            timeout: Per-file timeout in seconds (None = no limit).
        """
        self._ffprobe_path = ffprobe_path
        self._timeout = timeout

    def build_args(self, path: Path) -> list[str | Path]:
        """Build the ffprobe command line for a file."""
        return [
            self._ffprobe_path,
            "-v",
            "error",
            "-select_streams",
            "v:0",
            "-show_entries",
            "stream=width,height",
            "-of",
            "csv=p=0",
            path,
        ]

    def probe(self, path: Path) -> ProbeResult:
        """Report the frame size of a video file.

        Args:
            path: Path to the video file.

        Returns:
            ProbeResult with positive width and height.

        Raises:
            ProbeFailedError: If ffprobe fails, times out, or prints
                something other than two integers.
        """
        try:
            stdout, stderr, returncode = run_command(
                self.build_args(path), timeout=self._timeout
            )
        except subprocess.TimeoutExpired as e:
            raise ProbeFailedError(path, f"ffprobe timed out after {e.timeout}s") from e
        except OSError as e:
            raise ProbeFailedError(path, f"cannot run ffprobe: {e}") from e

        if returncode != 0:
            raise ProbeFailedError(
                path, f"ffprobe exited with {returncode}: {stderr.strip()}"
            )

        try:
            width, height = parse_dimensions(stdout)
        except ValueError as e:
            raise ProbeFailedError(path, str(e)) from e

        if width == 0 or height == 0:
            raise ProbeFailedError(path, f"invalid frame size {width}x{height}")

        logger.debug("Probed %s: %dx%d", path.name, width, height)
        return ProbeResult(width=width, height=height)
