"""Codec selection policy.

Turns an output container and a job into the ffmpeg video codec
arguments. The hardware encoder is only used for containers that can
carry its output; other containers are downgraded to the software path
with a warning rather than an error.
"""

from __future__ import annotations

import logging

from vidpress.policy.formats import (
    DEFAULT_FORMATS,
    H264_CODEC,
    H265_CODEC,
    HARDWARE_CODEC,
    VP9_CODEC,
    WMV_CODEC,
    MediaFormats,
)
from vidpress.policy.types import EncodeJobConfig, EncoderKind

logger = logging.getLogger(__name__)


def select_encoder(
    extension: str,
    requested: EncoderKind,
    formats: MediaFormats = DEFAULT_FORMATS,
) -> EncoderKind:
    """Decide which encoder family will actually be used.

    Args:
        extension: Output extension (normalized or not).
        requested: Encoder kind asked for by the job.
        formats: Format catalog.

    Returns:
        The requested kind, or SOFTWARE when hardware was requested for a
        container the hardware encoder cannot write.

    Raises:
        UnsupportedFormatError: If the extension is not supported.
    """
    ext = formats.require(extension)
    if requested is EncoderKind.HARDWARE and ext not in formats.hardware_eligible:
        logger.warning(
            "Hardware encoding (%s) is not supported for %s, "
            "falling back to the software encoder",
            HARDWARE_CODEC,
            ext,
        )
        return EncoderKind.SOFTWARE
    return requested


def muxer_for(extension: str, formats: MediaFormats = DEFAULT_FORMATS) -> str:
    """Return the ffmpeg muxer name for a container extension.

    Raises:
        UnsupportedFormatError: If the extension is not supported.
    """
    ext = formats.require(extension)
    return formats.muxers.get(ext, ext.lstrip("."))


def codec_args(
    extension: str,
    job: EncodeJobConfig,
    formats: MediaFormats = DEFAULT_FORMATS,
) -> list[str]:
    """Build ffmpeg video codec arguments for an output container.

    Args:
        extension: Output extension.
        job: Job settings (encoder, preset, quality, bitrate).
        formats: Format catalog.

    Returns:
        List of ffmpeg arguments, starting with "-c:v".

    Raises:
        UnsupportedFormatError: If the extension is not supported.
    """
    ext = formats.require(extension)
    encoder = select_encoder(ext, job.encoder, formats)

    if encoder is EncoderKind.HARDWARE:
        return [
            "-c:v",
            HARDWARE_CODEC,
            "-rc",
            "vbr",
            "-cq",
            str(job.quality),
            "-b:v",
            job.bitrate_arg,
            "-maxrate",
            job.bitrate_arg,
            "-bufsize",
            job.bufsize_arg,
        ]

    codec = formats.software_codecs[ext]
    if codec in (H264_CODEC, H265_CODEC):
        return [
            "-c:v",
            codec,
            "-preset",
            job.preset,
            "-crf",
            str(job.quality),
            "-b:v",
            job.bitrate_arg,
            "-maxrate",
            job.bitrate_arg,
            "-bufsize",
            job.bufsize_arg,
        ]
    if codec == VP9_CODEC:
        # libvpx-vp9 takes no -preset
        return ["-c:v", codec, "-crf", str(job.quality), "-b:v", job.bitrate_arg]
    if codec == WMV_CODEC:
        return ["-c:v", codec, "-b:v", job.bitrate_arg]

    # Codec tables loaded from a custom MediaFormats may name other encoders
    return ["-c:v", codec, "-b:v", job.bitrate_arg]
