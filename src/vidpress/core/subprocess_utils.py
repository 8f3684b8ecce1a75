"""Captured invocation of short-lived external tools.

ffprobe calls go through run_command; the long-running ffmpeg encodes use
vidpress.executor.runner, which streams stderr instead of buffering it.
"""

from __future__ import annotations

import logging
import subprocess  # nosec B404 - subprocess is required for ffprobe invocation
import time
from pathlib import Path
from typing import NamedTuple

logger = logging.getLogger(__name__)

# Generous default for probes; callers pass their own limit
DEFAULT_TIMEOUT = 120


class CommandOutput(NamedTuple):
    """Decoded output of a finished command."""

    stdout: str
    stderr: str
    returncode: int


def run_command(
    args: list[str | Path], timeout: float | None = DEFAULT_TIMEOUT
) -> CommandOutput:
    """Run a tool to completion and capture its output as text.

    Undecodable bytes are replaced, so a probe of a file with an odd
    name or metadata never fails on decoding.

    Args:
        args: Executable followed by its arguments.
        timeout: Seconds before the tool is killed (None = no limit).

    Returns:
        CommandOutput; unpacks as (stdout, stderr, returncode).

    Raises:
        subprocess.TimeoutExpired: If the tool ran past timeout.
        OSError: If the executable cannot be started.
    """
    cmd = [str(arg) for arg in args]
    tool = Path(cmd[0]).name
    logger.debug("Running %s: %s", tool, " ".join(cmd))

    started = time.monotonic()
    try:
        completed = subprocess.run(  # nosec B603 - args built by vidpress
            cmd,
            capture_output=True,
            text=True,
            errors="replace",
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        logger.warning("%s timed out after %ss", tool, timeout)
        raise

    logger.debug(
        "%s exited with %d in %.3fs",
        tool,
        completed.returncode,
        time.monotonic() - started,
    )
    return CommandOutput(
        completed.stdout or "", completed.stderr or "", completed.returncode
    )
