"""Unit tests for FFmpegRunner.

A Python interpreter stands in for ffmpeg so the real process handling
is exercised.
"""

import io
import sys
from pathlib import Path

import pytest

from vidpress.executor.runner import STDERR_TAIL_LINES, FFmpegRunner, RunResult


def _script(code: str) -> list[str]:
    return ["-c", code]


@pytest.fixture
def runner() -> FFmpegRunner:
    return FFmpegRunner(Path(sys.executable))


class TestRunResult:
    """Tests for RunResult helpers."""

    def test_success(self) -> None:
        assert RunResult(returncode=0).success
        assert not RunResult(returncode=1).success

    def test_timed_out(self) -> None:
        assert RunResult(returncode=-1).timed_out

    def test_tail(self) -> None:
        result = RunResult(returncode=1, stderr_lines=["a\n", "b\n", "c\n"])
        assert result.tail(lines=2) == "b\nc"
        assert result.stderr_text() == "a\nb\nc\n"


class TestFFmpegRunner:
    """Tests for FFmpegRunner.run."""

    def test_build_command(self) -> None:
        runner = FFmpegRunner(Path("/opt/ffmpeg"))
        assert runner.build_command(["-i", "a.mp4"]) == ["/opt/ffmpeg", "-i", "a.mp4"]

    def test_collects_stderr(self, runner) -> None:
        result = runner.run(
            _script("import sys; sys.stderr.write('frame=1\\nframe=2\\n')")
        )
        assert result.success
        assert result.stderr_lines == ["frame=1\n", "frame=2\n"]

    def test_nonzero_exit(self, runner) -> None:
        result = runner.run(
            _script("import sys; sys.stderr.write('boom\\n'); sys.exit(3)")
        )
        assert result.returncode == 3
        assert result.tail() == "boom"

    def test_keeps_bounded_tail(self, runner) -> None:
        result = runner.run(
            _script(
                "import sys\nfor i in range(100):\n    sys.stderr.write(f'{i}\\n')"
            )
        )
        assert len(result.stderr_lines) == STDERR_TAIL_LINES
        assert result.stderr_lines[-1] == "99\n"

    def test_verbose_echoes_output(self) -> None:
        echo = io.StringIO()
        runner = FFmpegRunner(Path(sys.executable), echo=echo)

        runner.run(_script("import sys; sys.stderr.write('progress\\n')"), verbose=True)

        assert echo.getvalue() == "progress\n"

    def test_quiet_does_not_echo(self) -> None:
        echo = io.StringIO()
        runner = FFmpegRunner(Path(sys.executable), echo=echo)

        runner.run(_script("import sys; sys.stderr.write('progress\\n')"))

        assert echo.getvalue() == ""

    def test_timeout(self) -> None:
        runner = FFmpegRunner(Path(sys.executable), timeout=0.5)

        result = runner.run(_script("import time; time.sleep(30)"))

        assert result.timed_out
        assert not result.success

    def test_missing_executable(self, temp_dir) -> None:
        runner = FFmpegRunner(temp_dir / "no-such-ffmpeg")
        with pytest.raises(OSError):
            runner.run(["-version"])
