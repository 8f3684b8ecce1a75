"""Unit tests for run_command."""

import subprocess
import sys
from pathlib import Path

import pytest

from vidpress.core.subprocess_utils import run_command


class TestRunCommand:
    """Tests for run_command."""

    def test_captures_output(self) -> None:
        stdout, stderr, returncode = run_command(
            [Path(sys.executable), "-c", "import sys; print('out'); sys.exit(2)"]
        )
        assert stdout.strip() == "out"
        assert stderr == ""
        assert returncode == 2

    def test_timeout_propagates(self) -> None:
        with pytest.raises(subprocess.TimeoutExpired):
            run_command(
                [sys.executable, "-c", "import time; time.sleep(10)"], timeout=0.2
            )

    def test_missing_executable(self, temp_dir) -> None:
        with pytest.raises(FileNotFoundError):
            run_command([temp_dir / "missing-tool"])

    def test_named_fields(self) -> None:
        result = run_command(
            [sys.executable, "-c", "import sys; sys.stderr.write('e')"]
        )
        assert result.returncode == 0
        assert result.stderr == "e"
        assert result.stdout == ""
