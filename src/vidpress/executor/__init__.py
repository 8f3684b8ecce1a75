"""Executors that drive ffmpeg.

- CompressExecutor: re-encode one file with derived parameters
- MergeExecutor: normalize a directory of files and concatenate them
- FFmpegRunner: blocking ffmpeg invocation shared by both
"""

from vidpress.executor.command import (
    build_compress_args,
    build_concat_args,
    format_manifest,
    letterbox_filter,
    prepare_output_path,
)
from vidpress.executor.compress import CompressExecutor, is_hardware_failure
from vidpress.executor.merge import MergeExecutor
from vidpress.executor.runner import EncoderRunner, FFmpegRunner, RunResult
from vidpress.executor.types import CompressStats, MergePlan, MergeResult

__all__ = [
    "CompressExecutor",
    "CompressStats",
    "EncoderRunner",
    "FFmpegRunner",
    "MergeExecutor",
    "MergePlan",
    "MergeResult",
    "RunResult",
    "build_compress_args",
    "build_concat_args",
    "format_manifest",
    "is_hardware_failure",
    "letterbox_filter",
    "prepare_output_path",
]
