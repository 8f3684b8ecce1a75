"""Shared test fixtures for vidpress."""

from __future__ import annotations

import random
import shutil
import tempfile
from collections.abc import Callable
from pathlib import Path

import pytest

from vidpress.executor.runner import RunResult
from vidpress.introspector.stub import StubProber


class FakeRunner:
    """EncoderRunner double that records arguments and writes outputs.

    The output file is the argument just before the trailing "-y", as in
    every command vidpress builds. fail_on decides which invocations fail.
    """

    def __init__(
        self,
        fail_on: Callable[[list[str]], bool] | None = None,
        returncode: int = 1,
        stderr: str = "",
        output_size: int = 250,
    ) -> None:
        self.fail_on = fail_on
        self.returncode = returncode
        self.stderr = stderr
        self.output_size = output_size
        self.calls: list[list[str]] = []
        self.verbose_flags: list[bool] = []

    def run(
        self,
        args: list[str],
        *,
        verbose: bool = False,
        description: str = "ffmpeg",
    ) -> RunResult:
        self.calls.append(list(args))
        self.verbose_flags.append(verbose)
        if self.fail_on is not None and self.fail_on(args):
            return RunResult(
                returncode=self.returncode,
                stderr_lines=self.stderr.splitlines(keepends=True),
            )
        Path(args[-2]).write_bytes(b"\0" * self.output_size)
        return RunResult(returncode=0)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test isolation."""
    dir_path = tempfile.mkdtemp()
    yield Path(dir_path)
    shutil.rmtree(dir_path, ignore_errors=True)


@pytest.fixture
def fake_runner() -> FakeRunner:
    """Runner that always succeeds."""
    return FakeRunner()


@pytest.fixture
def make_runner() -> type[FakeRunner]:
    """FakeRunner class, for tests that need failing invocations."""
    return FakeRunner


@pytest.fixture
def make_videos() -> Callable[..., list[Path]]:
    """Create placeholder video files of a given size in a directory."""

    def _make(directory: Path, names: list[str], size: int = 1000) -> list[Path]:
        directory.mkdir(parents=True, exist_ok=True)
        paths = []
        for name in names:
            path = directory / name
            path.write_bytes(b"\0" * size)
            paths.append(path)
        return paths

    return _make


@pytest.fixture
def stub_prober() -> Callable[[dict[str, tuple[int, int]]], StubProber]:
    """Build a StubProber from a name -> (width, height) table."""
    return StubProber


@pytest.fixture
def seeded_rng() -> random.Random:
    """Deterministic random source for directory sampling."""
    return random.Random(1234)
