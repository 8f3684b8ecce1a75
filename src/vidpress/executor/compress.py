"""Single-file compress executor.

Validates the containers, resolves the target frame size and bitrate,
runs ffmpeg once and reports the size change. A hardware encoder failure
is reported as HardwareEncodeFailedError; retrying with the software
encoder is left to the caller.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path

from vidpress.exceptions import (
    EncodeFailedError,
    HardwareEncodeFailedError,
    InputUnreadableError,
    OutputUnreadableError,
    ProbeFailedError,
    UnsupportedInputFormatError,
)
from vidpress.executor.command import build_compress_args, prepare_output_path
from vidpress.executor.runner import EncoderRunner
from vidpress.executor.types import CompressStats
from vidpress.introspector.interface import Prober
from vidpress.policy.formats import (
    DEFAULT_FORMATS,
    HARDWARE_CODEC_FAMILY,
    MediaFormats,
)
from vidpress.policy.resolution import recommended_bitrate, resolve, tier_spec
from vidpress.policy.types import EncodeJobConfig, EncoderKind, ResolutionTier

logger = logging.getLogger(__name__)


def _even(value: int) -> int:
    return value - (value % 2)


def is_hardware_failure(stderr: str) -> bool:
    """Check whether ffmpeg's error output mentions the hardware encoder."""
    return HARDWARE_CODEC_FAMILY in stderr.casefold()


class CompressExecutor:
    """Compress one video file with ffmpeg."""

    def __init__(
        self,
        runner: EncoderRunner,
        prober: Prober,
        formats: MediaFormats = DEFAULT_FORMATS,
    ) -> None:
        """Initialize the executor.

        Args:
            runner: Encoder runner used for the ffmpeg invocation.
            prober: Prober used to read the source frame size.
            formats: Format catalog shared by every component.
        """
        self.runner = runner
        self.prober = prober
        self.formats = formats

    def resolve_job(self, input_path: Path, job: EncodeJobConfig) -> EncodeJobConfig:
        """Fill in frame size and bitrate for one input.

        With a tier and no explicit size, the source is probed and the
        resolution catalog decides; a probe failure is logged and the
        catalog's 16:9 default is used. Explicit sizes are rounded down to
        even values. A non-zero bitrate on the job is always kept.

        Args:
            input_path: Source file.
            job: Job as built from user intent.

        Returns:
            New job with even width/height (or 0 for no scaling) and a
            non-zero bitrate.
        """
        tier_set = job.resolution is not ResolutionTier.NONE
        if tier_set and not job.has_explicit_dimensions:
            original_width = original_height = 0
            try:
                probe = self.prober.probe(input_path)
                original_width, original_height = probe.width, probe.height
            except ProbeFailedError as e:
                logger.warning(
                    "Cannot get dimensions of %s: %s", input_path, e.reason
                )
            width, height, tier_bitrate = resolve(
                job.resolution, original_width, original_height
            )
            # Resolved dimensions replace the tier
            return replace(
                job,
                resolution=ResolutionTier.NONE,
                width=width,
                height=height,
                bitrate_kbps=job.bitrate_kbps or tier_bitrate,
            )

        if job.has_explicit_dimensions:
            width, height = _even(job.width), _even(job.height)
            bitrate = job.bitrate_kbps or recommended_bitrate(width, height)
            return replace(job, width=width, height=height, bitrate_kbps=bitrate)

        if job.bitrate_kbps == 0:
            return replace(job, bitrate_kbps=tier_spec(job.resolution).bitrate_kbps)
        return job

    def compress(
        self,
        input_path: Path,
        output_path: Path,
        job: EncodeJobConfig,
        verbose: bool = False,
    ) -> CompressStats:
        """Compress input_path into output_path.

        Args:
            input_path: Source video.
            output_path: Destination; the job's extension is appended when
                the suffix differs.
            job: Job settings.
            verbose: Stream ffmpeg output and log the size report.

        Returns:
            CompressStats with the final output path and sizes.

        Raises:
            UnsupportedInputFormatError: Input container not supported.
            UnsupportedOutputFormatError: Output extension not supported.
            InputUnreadableError: Input cannot be stat'ed.
            HardwareEncodeFailedError: The hardware encoder failed.
            EncodeFailedError: ffmpeg failed for any other reason.
            OutputUnreadableError: ffmpeg succeeded but left no output.
        """
        input_path = Path(input_path)
        if not self.formats.is_supported_file(input_path):
            raise UnsupportedInputFormatError(
                input_path.suffix or input_path.name, self.formats.supported_list
            )
        output_path, ext = prepare_output_path(
            Path(output_path), job.output_extension, self.formats
        )

        try:
            original_size = input_path.stat().st_size
        except OSError as e:
            raise InputUnreadableError(input_path, e.strerror or str(e)) from e

        resolved = self.resolve_job(input_path, job)
        args = build_compress_args(
            input_path, output_path, resolved, ext, self.formats
        )
        hardware = (
            resolved.encoder is EncoderKind.HARDWARE
            and ext in self.formats.hardware_eligible
        )

        logger.debug(
            "Compressing %s -> %s (%dx%d, %dk)",
            input_path,
            output_path,
            resolved.width,
            resolved.height,
            resolved.bitrate_kbps,
        )
        try:
            result = self.runner.run(
                args, verbose=verbose, description=f"compress {input_path.name}"
            )
        except OSError as e:
            raise EncodeFailedError(f"Cannot run ffmpeg: {e}") from e
        if not result.success:
            tail = result.tail()
            if hardware and is_hardware_failure(result.stderr_text()):
                raise HardwareEncodeFailedError(
                    f"GPU encoder error on {input_path.name}",
                    returncode=result.returncode,
                    stderr_tail=tail,
                )
            raise EncodeFailedError(
                f"ffmpeg execution error on {input_path.name} "
                f"(exit {result.returncode})",
                returncode=result.returncode,
                stderr_tail=tail,
            )

        try:
            compressed_size = output_path.stat().st_size
        except OSError as e:
            raise OutputUnreadableError(output_path, e.strerror or str(e)) from e

        stats = CompressStats(
            input_path=input_path,
            output_path=output_path,
            original_size=original_size,
            compressed_size=compressed_size,
        )
        if verbose:
            logger.info("Compression completed! %s", stats.summary())
        return stats
