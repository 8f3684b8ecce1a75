"""Directory merge executor.

Joins every supported video in a directory into one file in two phases:

1. Re-encode each input, in natural file-name order, to a shared frame
   size derived from the narrowest sampled aspect ratio.
2. Concatenate the normalized segments with the concat demuxer,
   letterboxing anything that still does not fit the shared frame.

Phase 2 starts only after every segment of phase 1 succeeded. Segments
and the manifest live in a private scratch directory that is removed on
every exit path.
"""

from __future__ import annotations

import logging
import random
import tempfile
from dataclasses import replace
from pathlib import Path

from vidpress.core.string_utils import natural_sorted
from vidpress.exceptions import (
    MergeFailedError,
    ReencodeFailedError,
    VidpressError,
)
from vidpress.executor.command import (
    build_concat_args,
    format_manifest,
    prepare_output_path,
)
from vidpress.executor.compress import CompressExecutor
from vidpress.executor.types import MergePlan, MergeResult
from vidpress.introspector.sampling import list_media_files, sample_directory
from vidpress.logging.context import segment_context
from vidpress.policy.codecs import select_encoder
from vidpress.policy.formats import MediaFormats
from vidpress.policy.resolution import DEFAULT_TIER, resolve_by_ratio, tier_spec
from vidpress.policy.types import AggregationMode, EncodeJobConfig, ResolutionTier

logger = logging.getLogger(__name__)

# Number of ordered file names echoed before re-encoding starts
PREVIEW_FILES = 20


class MergeExecutor:
    """Merge a directory of videos into one file."""

    def __init__(
        self,
        compressor: CompressExecutor,
        temp_directory: Path | None = None,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize the executor.

        Args:
            compressor: Compress executor used for the re-encode phase; its
                runner, prober and format catalog are reused for the
                concatenation and the ratio sampling.
            temp_directory: Parent for scratch directories (system default
                when None).
            rng: Random source for ratio sampling (time-seeded when None).
        """
        self.compressor = compressor
        self.temp_directory = temp_directory
        self.rng = rng

    @property
    def formats(self) -> MediaFormats:
        """Format catalog shared with the compress executor."""
        return self.compressor.formats

    def plan_geometry(
        self, input_dir: Path, job: EncodeJobConfig
    ) -> tuple[float, int, int]:
        """Pick the shared frame size for a directory.

        Returns:
            Tuple of (ratio, width, height).
        """
        ratio = sample_directory(
            input_dir,
            AggregationMode.MIN,
            prober=self.compressor.prober,
            formats=self.formats,
            rng=self.rng,
        )
        tier = job.resolution
        if tier is ResolutionTier.NONE:
            logger.info(
                "No resolution specified, defaulting to %s", DEFAULT_TIER.label
            )
            tier = DEFAULT_TIER
        width, height = resolve_by_ratio(tier, ratio)
        logger.info("Using resolution: %dx%d (ratio %.3f)", width, height, ratio)
        return ratio, width, height

    def segment_job(
        self, job: EncodeJobConfig, extension: str, width: int, height: int
    ) -> EncodeJobConfig:
        """Job used for every segment and for the final concatenation."""
        bitrate = job.bitrate_kbps or tier_spec(job.resolution).bitrate_kbps
        return replace(
            job,
            resolution=ResolutionTier.NONE,
            width=width,
            height=height,
            bitrate_kbps=bitrate,
            output_extension=extension,
            # Downgrade once here rather than warning for every segment
            encoder=select_encoder(extension, job.encoder, self.formats),
        )

    def merge(
        self,
        input_dir: Path,
        output_path: Path,
        job: EncodeJobConfig,
        verbose: bool = False,
    ) -> MergeResult:
        """Merge every supported video in input_dir into output_path.

        Args:
            input_dir: Directory holding the inputs (not recursed).
            output_path: Destination; the job's extension is appended when
                the suffix differs.
            job: Job settings. reverse=True orders inputs descending.
            verbose: Stream ffmpeg output of the concatenation step.

        Returns:
            MergeResult describing the merged file.

        Raises:
            UnsupportedOutputFormatError: Output extension not supported.
            NoMediaFoundError: No supported file in input_dir.
            NoAnalyzableMediaError: No sampled file could be probed.
            ReencodeFailedError: A segment failed; nothing was concatenated.
            MergeFailedError: The concatenation step failed.
        """
        input_dir = Path(input_dir)
        output_path, ext = prepare_output_path(
            Path(output_path), job.output_extension, self.formats
        )

        ratio, width, height = self.plan_geometry(input_dir, job)
        names = list_media_files(input_dir, self.formats)
        files = natural_sorted(names, reverse=job.reverse)
        seg_job = self.segment_job(job, ext, width, height)

        shown = files[:PREVIEW_FILES]
        logger.info("First %d files after sorting:", len(shown))
        for i, name in enumerate(shown, start=1):
            logger.info("  %d: %s", i, name)

        with tempfile.TemporaryDirectory(
            prefix="vidpress_merge_", dir=self.temp_directory
        ) as scratch:
            plan = MergePlan(
                input_dir=input_dir,
                output_path=output_path,
                files=files,
                width=width,
                height=height,
                ratio=ratio,
                # The concat demuxer reads relative entries against the list file
                scratch_dir=Path(scratch).resolve(),
            )
            self._reencode(plan, seg_job, ext)
            self._concatenate(plan, seg_job, ext, verbose)

        logger.info("Merge complete, output: %s", output_path)
        return MergeResult(
            output_path=output_path,
            width=width,
            height=height,
            ratio=ratio,
            segment_count=len(files),
        )

    def _reencode(self, plan: MergePlan, job: EncodeJobConfig, ext: str) -> None:
        """Phase 1: normalize every input into the scratch directory."""
        logger.info("Step 1: Re-encoding individual files...")
        total = len(plan.files)
        for index, name in enumerate(plan.files):
            segment = plan.segment_path(index, ext)
            with segment_context(index + 1, total, name):
                logger.info("%s -> %s", name, segment.name)
                try:
                    self.compressor.compress(
                        plan.input_dir / name, segment, job, verbose=False
                    )
                except VidpressError as e:
                    raise ReencodeFailedError(name, str(e)) from e
            plan.segments.append(segment)

    def _concatenate(
        self, plan: MergePlan, job: EncodeJobConfig, ext: str, verbose: bool
    ) -> None:
        """Phase 2: join the segments listed in the manifest."""
        logger.info("Step 2: Merging re-encoded segments...")
        try:
            plan.manifest_path.write_text(
                format_manifest(plan.segments), encoding="utf-8"
            )
        except OSError as e:
            raise MergeFailedError(f"Failed to write list file: {e}") from e

        args = build_concat_args(
            plan.manifest_path,
            plan.output_path,
            job,
            ext,
            plan.width,
            plan.height,
            self.formats,
        )
        try:
            result = self.compressor.runner.run(
                args, verbose=verbose, description="merge"
            )
        except OSError as e:
            raise MergeFailedError(f"Cannot run ffmpeg: {e}") from e
        if not result.success:
            raise MergeFailedError(
                f"Failed to merge videos (exit {result.returncode})",
                stderr_tail=result.tail(),
            )
