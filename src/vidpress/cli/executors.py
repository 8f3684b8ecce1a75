"""Construct the executors used by the CLI commands."""

from __future__ import annotations

from vidpress.config import VidpressConfig
from vidpress.executor import CompressExecutor, FFmpegRunner, MergeExecutor
from vidpress.introspector import FFprobeProber
from vidpress.tools import require_tool


def build_prober(config: VidpressConfig) -> FFprobeProber:
    """Prober backed by the configured (or discovered) ffprobe.

    Raises:
        ToolNotFoundError: If ffprobe cannot be found.
    """
    return FFprobeProber(require_tool("ffprobe", config.tools.ffprobe))


def build_compressor(config: VidpressConfig) -> CompressExecutor:
    """Compress executor with real ffmpeg and ffprobe.

    Raises:
        ToolNotFoundError: If ffmpeg or ffprobe cannot be found.
    """
    runner = FFmpegRunner(require_tool("ffmpeg", config.tools.ffmpeg))
    return CompressExecutor(runner, build_prober(config))


def build_merger(config: VidpressConfig) -> MergeExecutor:
    """Merge executor writing scratch files under the configured temp dir."""
    return MergeExecutor(
        build_compressor(config), temp_directory=config.temp_directory
    )
