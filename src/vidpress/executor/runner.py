"""FFmpeg process runner.

Runs one ffmpeg invocation to completion, collecting stderr on a reader
thread so an optional timeout can still be enforced. With verbose set the
diagnostic output is echoed live to the terminal.
"""

from __future__ import annotations

import logging
import queue
import subprocess  # nosec B404 - subprocess is required for FFmpeg invocation
import sys
import threading
import time
from collections import deque
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol, TextIO

logger = logging.getLogger(__name__)

# Number of stderr lines kept for error reporting
STDERR_TAIL_LINES = 40


@dataclass
class RunResult:
    """Outcome of one encoder invocation."""

    returncode: int
    stderr_lines: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """True when the process exited with status 0."""
        return self.returncode == 0

    @property
    def timed_out(self) -> bool:
        """True when the process was killed after the timeout."""
        return self.returncode == -1

    def stderr_text(self) -> str:
        """Collected stderr as one string."""
        return "".join(self.stderr_lines)

    def tail(self, lines: int = 10) -> str:
        """Last lines of stderr, stripped, for error messages."""
        return "".join(self.stderr_lines[-lines:]).strip()


class EncoderRunner(Protocol):
    """Protocol for encoder invocation.

    Implementations receive the ffmpeg arguments without the executable
    and block until the process exits.
    """

    def run(
        self,
        args: list[str],
        *,
        verbose: bool = False,
        description: str = "ffmpeg",
    ) -> RunResult:
        """Run the encoder with args and wait for it to finish."""
        ...


class FFmpegRunner:
    """Run ffmpeg synchronously.

    No timeout is applied by default; a caller wrapping vidpress in a
    long-running service can pass one.
    """

    STDERR_DRAIN_TIMEOUT: float = 5.0

    def __init__(
        self,
        ffmpeg_path: Path,
        timeout: float | None = None,
        echo: TextIO | None = None,
    ) -> None:
        """Initialize the runner.

        Args:
            ffmpeg_path: Path to the ffmpeg executable.
            timeout: Maximum seconds per invocation (None = no limit).
            echo: Stream verbose output is written to (default sys.stderr).
        """
        self.ffmpeg_path = ffmpeg_path
        self.timeout = timeout
        self._echo = echo

    def build_command(self, args: list[str]) -> list[str]:
        """Prefix args with the ffmpeg executable."""
        return [str(self.ffmpeg_path), *args]

    def run(
        self,
        args: list[str],
        *,
        verbose: bool = False,
        description: str = "ffmpeg",
    ) -> RunResult:
        """Run ffmpeg and wait for it to exit.

        Args:
            args: ffmpeg arguments (without the executable).
            verbose: Echo ffmpeg's stderr live.
            description: Label used in log messages.

        Returns:
            RunResult with the exit status and the tail of stderr.
            returncode is -1 if the timeout expired.

        Raises:
            OSError: If ffmpeg cannot be started.
        """
        cmd = self.build_command(args)
        echo = self._echo or sys.stderr
        if verbose:
            logger.info("FFmpeg command: %s", " ".join(cmd))
        else:
            logger.debug("FFmpeg command: %s", " ".join(cmd))

        process = subprocess.Popen(  # nosec B603 - args built by vidpress
            cmd,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.PIPE,
            text=True,
            errors="replace",
        )

        stderr_tail: deque[str] = deque(maxlen=STDERR_TAIL_LINES)
        stderr_queue: queue.Queue[str | None] = queue.Queue()
        stop_event = threading.Event()

        def read_stderr() -> None:
            """Read stderr lines and put them in the queue."""
            try:
                assert process.stderr is not None
                for line in process.stderr:
                    if stop_event.is_set():
                        break
                    stderr_queue.put(line)
            except (ValueError, OSError) as e:
                # Pipe closed or process terminated
                logger.debug("Stderr reader stopped: %s", e)
            finally:
                stderr_queue.put(None)

        reader_thread = threading.Thread(target=read_stderr, daemon=True)
        reader_thread.start()

        def consume(line: str) -> None:
            stderr_tail.append(line)
            if verbose:
                echo.write(line)
                echo.flush()

        start_time = time.monotonic()
        stream_done = False
        try:
            while not stream_done:
                if (
                    self.timeout is not None
                    and time.monotonic() - start_time >= self.timeout
                ):
                    logger.warning(
                        "%s timed out after %s seconds", description, self.timeout
                    )
                    stop_event.set()
                    process.kill()
                    process.wait()
                    reader_thread.join(timeout=2.0)
                    return RunResult(returncode=-1, stderr_lines=list(stderr_tail))
                try:
                    line = stderr_queue.get(timeout=1.0)
                except queue.Empty:
                    continue
                if line is None:
                    stream_done = True
                else:
                    consume(line)
        except KeyboardInterrupt:
            # Don't leave ffmpeg running behind the interrupted CLI
            stop_event.set()
            process.kill()
            process.wait()
            raise

        reader_thread.join(timeout=self.STDERR_DRAIN_TIMEOUT)
        process.wait()

        elapsed = time.monotonic() - start_time
        logger.debug(
            "%s finished with %d after %.1fs",
            description,
            process.returncode,
            elapsed,
        )
        return RunResult(returncode=process.returncode, stderr_lines=list(stderr_tail))
