"""Directory aspect-ratio sampling.

Estimates a representative aspect ratio for a folder of videos by probing
a random sample of them. Large folders are only partially probed: at most
10 files, or 30% of the files once there are more than 50.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from pathlib import Path

from vidpress.exceptions import (
    NoAnalyzableMediaError,
    NoMediaFoundError,
    ProbeFailedError,
)
from vidpress.introspector.interface import Prober, RatioSample
from vidpress.policy.formats import DEFAULT_FORMATS, MediaFormats
from vidpress.policy.types import AggregationMode

logger = logging.getLogger(__name__)

MAX_SMALL_SAMPLE = 10
LARGE_DIRECTORY_THRESHOLD = 50
# Ratios closer than this share a bucket for most_common
RATIO_BUCKET_TOLERANCE = 0.2


@dataclass
class RatioBucket:
    """Group of ratios within tolerance of a representative value."""

    representative: float
    count: int = 1


def list_media_files(
    directory: Path, formats: MediaFormats = DEFAULT_FORMATS
) -> list[str]:
    """List names of non-directory entries with a supported extension.

    Args:
        directory: Directory to list (not recursed).
        formats: Format catalog.

    Returns:
        File names in directory listing order.

    Raises:
        NoMediaFoundError: If the directory cannot be read or holds no
            supported file.
    """
    try:
        entries = list(directory.iterdir())
    except OSError as e:
        raise NoMediaFoundError(directory, f"cannot read directory: {e}") from e

    names = [
        entry.name
        for entry in entries
        if not entry.is_dir() and formats.is_supported_file(entry.name)
    ]
    if not names:
        raise NoMediaFoundError(
            directory, f"supported containers: {', '.join(formats.supported_list)}"
        )
    return names


def sample_size(file_count: int) -> int:
    """Number of files to probe out of file_count candidates."""
    if file_count > LARGE_DIRECTORY_THRESHOLD:
        return file_count * 3 // 10
    return min(MAX_SMALL_SAMPLE, file_count)


def collect_ratio_samples(
    directory: Path,
    *,
    prober: Prober,
    formats: MediaFormats = DEFAULT_FORMATS,
    rng: random.Random | None = None,
) -> list[RatioSample]:
    """Probe a random sample of a directory's videos.

    Args:
        directory: Directory holding the videos.
        prober: Prober used for each sampled file.
        formats: Format catalog.
        rng: Random source for the shuffle. A time-seeded generator is
            used when omitted.

    Returns:
        One RatioSample per file that probed successfully, in sample order.

    Raises:
        NoMediaFoundError: If there is nothing to sample.
        NoAnalyzableMediaError: If every sampled file failed to probe.
    """
    candidates = list_media_files(directory, formats)
    if rng is None:
        rng = random.Random()  # nosec B311 - sampling, not security
    rng.shuffle(candidates)
    sample = candidates[: sample_size(len(candidates))]

    logger.debug(
        "Sampling %d of %d files in %s", len(sample), len(candidates), directory
    )

    samples: list[RatioSample] = []
    for name in sample:
        try:
            result = prober.probe(directory / name)
        except ProbeFailedError as e:
            logger.debug("Skipping %s: %s", name, e.reason)
            continue
        samples.append(RatioSample(filename=name, raw_ratio=result.ratio))

    if not samples:
        raise NoAnalyzableMediaError(directory, len(sample))
    return samples


def bucket_ratios(ratios: list[float]) -> list[RatioBucket]:
    """Cluster ratios into buckets in first-seen order.

    A ratio joins the first bucket whose representative is within
    RATIO_BUCKET_TOLERANCE; otherwise it opens a new bucket and becomes
    its representative.
    """
    buckets: list[RatioBucket] = []
    for ratio in ratios:
        for bucket in buckets:
            if abs(ratio - bucket.representative) <= RATIO_BUCKET_TOLERANCE:
                bucket.count += 1
                break
        else:
            buckets.append(RatioBucket(representative=ratio))
    return buckets


def aggregate_ratios(
    samples: list[RatioSample], mode: AggregationMode | str
) -> float:
    """Collapse sampled ratios into one ratio.

    most_common returns the representative of the largest bucket; on a
    tie the bucket opened first wins, so the result is deterministic for
    a given sample order. min, max and average use the raw ratios.

    Args:
        samples: Non-empty list of samples.
        mode: Aggregation mode or its name.

    Returns:
        The aggregated aspect ratio.

    Raises:
        InvalidModeError: If mode is not recognized.
        ValueError: If samples is empty.
    """
    mode = AggregationMode.parse(mode)
    if not samples:
        raise ValueError("Cannot aggregate an empty sample")
    ratios = [s.raw_ratio for s in samples]

    if mode is AggregationMode.MOST_COMMON:
        # max() keeps the first of equal counts
        best = max(bucket_ratios(ratios), key=lambda b: b.count)
        return best.representative
    if mode is AggregationMode.MIN:
        return min(ratios)
    if mode is AggregationMode.MAX:
        return max(ratios)
    return sum(ratios) / len(ratios)


def sample_directory(
    directory: Path,
    mode: AggregationMode | str,
    *,
    prober: Prober,
    formats: MediaFormats = DEFAULT_FORMATS,
    rng: random.Random | None = None,
) -> float:
    """Estimate a representative aspect ratio for a directory.

    Args:
        directory: Directory holding the videos.
        mode: How the sampled ratios are collapsed.
        prober: Prober used for each sampled file.
        formats: Format catalog.
        rng: Random source for the shuffle (time-seeded when omitted).

    Returns:
        Aspect ratio (width/height).

    Raises:
        InvalidModeError: If mode is not recognized.
        NoMediaFoundError: If there is nothing to sample.
        NoAnalyzableMediaError: If every sampled file failed to probe.
    """
    # Reject a bad mode before probing anything
    mode = AggregationMode.parse(mode)
    samples = collect_ratio_samples(
        directory, prober=prober, formats=formats, rng=rng
    )
    ratio = aggregate_ratios(samples, mode)
    logger.info(
        "Sampled %d file(s) in %s, %s ratio %.3f",
        len(samples),
        directory,
        mode.value,
        ratio,
    )
    return ratio
