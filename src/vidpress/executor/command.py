"""FFmpeg command building for compress and merge.

This module provides the functions that turn a resolved job into ffmpeg
arguments: output path normalization, the single-file compress command,
the letterbox filter and the concat-demuxer merge command.
"""

from __future__ import annotations

from pathlib import Path

from vidpress.exceptions import UnsupportedFormatError, UnsupportedOutputFormatError
from vidpress.policy.codecs import codec_args, muxer_for
from vidpress.policy.formats import DEFAULT_FORMATS, MediaFormats, normalize_extension
from vidpress.policy.types import EncodeJobConfig


def prepare_output_path(
    output_path: Path,
    extension: str,
    formats: MediaFormats = DEFAULT_FORMATS,
) -> tuple[Path, str]:
    """Normalize the output extension and apply it to the output path.

    The extension is appended (not substituted) when the path's current
    suffix differs, so "clip.mov" with ".mp4" becomes "clip.mov.mp4".

    Args:
        output_path: Requested output path.
        extension: Requested output extension, with or without a dot.
        formats: Format catalog.

    Returns:
        Tuple of (output path, normalized extension).

    Raises:
        UnsupportedOutputFormatError: If the extension is not supported.
    """
    ext = normalize_extension(extension)
    try:
        formats.require(ext)
    except UnsupportedFormatError as e:
        raise UnsupportedOutputFormatError(e.extension, e.supported) from None
    if output_path.suffix.lower() != ext:
        output_path = output_path.with_name(output_path.name + ext)
    return output_path, ext


def scale_filter(width: int, height: int) -> str:
    """Plain scale filter."""
    return f"scale={width}:{height}"


def letterbox_filter(width: int, height: int) -> str:
    """Fit into width x height, center-pad the rest, square pixels."""
    return (
        f"scale={width}:{height}:force_original_aspect_ratio=decrease,"
        f"pad={width}:{height}:(ow-iw)/2:(oh-ih)/2,setsar=1"
    )


def build_compress_args(
    input_path: Path,
    output_path: Path,
    job: EncodeJobConfig,
    extension: str,
    formats: MediaFormats = DEFAULT_FORMATS,
) -> list[str]:
    """Build ffmpeg arguments for a single-file compress.

    Args:
        input_path: Source file.
        output_path: Destination file.
        job: Fully resolved job (bitrate filled, dimensions even).
        extension: Normalized output extension.
        formats: Format catalog.

    Returns:
        ffmpeg arguments, without the executable.
    """
    args = ["-i", str(input_path)]
    args.extend(codec_args(extension, job, formats))
    args.extend(["-r", str(job.fps)])
    if job.width > 0 and job.height > 0:
        args.extend(["-vf", scale_filter(job.width, job.height)])
    args.extend(["-f", muxer_for(extension, formats)])
    args.extend([str(output_path), "-y"])
    return args


def format_manifest(segments: list[Path]) -> str:
    """Render a concat-demuxer list, one "file '<path>'" line per segment.

    Single quotes inside paths are escaped the way the concat demuxer
    expects ('\\'').
    """
    lines = []
    for segment in segments:
        escaped = str(segment).replace("'", "'\\''")
        lines.append(f"file '{escaped}'\n")
    return "".join(lines)


def build_concat_args(
    manifest_path: Path,
    output_path: Path,
    job: EncodeJobConfig,
    extension: str,
    width: int,
    height: int,
    formats: MediaFormats = DEFAULT_FORMATS,
) -> list[str]:
    """Build ffmpeg arguments joining the manifest's segments.

    Args:
        manifest_path: Concat-demuxer list file.
        output_path: Final merged file.
        job: Job used for the codec arguments.
        extension: Normalized output extension.
        width: Shared target width.
        height: Shared target height.
        formats: Format catalog.

    Returns:
        ffmpeg arguments, without the executable.
    """
    args = [
        "-f",
        "concat",
        "-safe",
        "0",
        "-i",
        str(manifest_path),
        "-vf",
        letterbox_filter(width, height),
    ]
    args.extend(codec_args(extension, job, formats))
    args.extend(["-f", muxer_for(extension, formats), str(output_path), "-y"])
    return args
