"""Resolution catalog.

Maps a resolution tier to its canonical height and default bitrate, and
derives the output frame size from an aspect ratio. All derived dimensions
are even, as required by the H.264/H.265 encoders.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from fractions import Fraction

from vidpress.policy.types import ResolutionTier

logger = logging.getLogger(__name__)

# Widest frame the catalog will produce for landscape sources
MAX_LANDSCAPE_WIDTH = 3840

# Ratio assumed when the source dimensions are unknown
DEFAULT_ASPECT_RATIO = Fraction(16, 9)


@dataclass(frozen=True)
class TierSpec:
    """Canonical height and default bitrate for a tier."""

    height: int
    bitrate_kbps: int


TIER_SPECS: dict[ResolutionTier, TierSpec] = {
    ResolutionTier.UHD_4K: TierSpec(height=2160, bitrate_kbps=20000),
    ResolutionTier.QHD_2K: TierSpec(height=1440, bitrate_kbps=10000),
    ResolutionTier.FHD_1080P: TierSpec(height=1080, bitrate_kbps=5000),
    ResolutionTier.HD_720P: TierSpec(height=720, bitrate_kbps=2500),
    ResolutionTier.SD_480P: TierSpec(height=480, bitrate_kbps=1000),
    ResolutionTier.SD_360P: TierSpec(height=360, bitrate_kbps=800),
    ResolutionTier.SD_240P: TierSpec(height=240, bitrate_kbps=500),
}

DEFAULT_TIER = ResolutionTier.FHD_1080P

# (minimum pixel count, bitrate kbps), checked in descending order
BITRATE_THRESHOLDS: tuple[tuple[int, int], ...] = (
    (3840 * 2160, 20000),
    (2560 * 1440, 10000),
    (1920 * 1080, 5000),
    (1280 * 720, 2500),
    (854 * 480, 1000),
    (640 * 360, 800),
    (320 * 288, 500),
)
FALLBACK_BITRATE_KBPS = 250


def tier_spec(tier: ResolutionTier) -> TierSpec:
    """Look up a tier's spec; NONE falls back to 1080p."""
    return TIER_SPECS.get(tier, TIER_SPECS[DEFAULT_TIER])


def _even(value: int) -> int:
    return value - (value % 2)


def _dimensions_for_ratio(height: int, ratio: Fraction | float) -> tuple[int, int]:
    """Derive (width, height) for a canonical height and aspect ratio.

    Exact ratios (Fraction) keep integer precision, so 2160 at 16:9 gives
    exactly 3840.
    """
    width = int(height * ratio)
    # Only landscape frames are clamped
    if ratio >= 1 and width > MAX_LANDSCAPE_WIDTH:
        logger.debug(
            "Clamping width %d to %d (ratio %.3f)",
            width,
            MAX_LANDSCAPE_WIDTH,
            float(ratio),
        )
        width = MAX_LANDSCAPE_WIDTH
        height = int(width / ratio)
    return _even(width), _even(height)


def resolve(
    tier: ResolutionTier,
    original_width: int | None = None,
    original_height: int | None = None,
) -> tuple[int, int, int]:
    """Resolve output dimensions and bitrate for a tier.

    Args:
        tier: Target tier (NONE means 1080p).
        original_width: Source width in pixels, 0/None if unknown.
        original_height: Source height in pixels, 0/None if unknown.

    Returns:
        Tuple of (width, height, bitrate_kbps), width and height even.
    """
    spec = tier_spec(tier)
    if original_width and original_height:
        ratio: Fraction | float = Fraction(original_width, original_height)
    else:
        ratio = DEFAULT_ASPECT_RATIO
    width, height = _dimensions_for_ratio(spec.height, ratio)
    return width, height, spec.bitrate_kbps


def resolve_by_ratio(tier: ResolutionTier, ratio: float) -> tuple[int, int]:
    """Resolve output dimensions for a tier from a bare aspect ratio.

    Args:
        tier: Target tier (NONE means 1080p).
        ratio: Width/height aspect ratio; must be positive.

    Returns:
        Tuple of (width, height), both even.

    Raises:
        ValueError: If ratio is not positive.
    """
    if ratio <= 0:
        raise ValueError(f"Aspect ratio must be positive, got {ratio}")
    return _dimensions_for_ratio(tier_spec(tier).height, ratio)


def recommended_bitrate(width: int, height: int) -> int:
    """Recommend a bitrate in kbps from measured frame dimensions.

    Args:
        width: Frame width in pixels.
        height: Frame height in pixels.

    Returns:
        Bitrate in kbps.
    """
    pixels = width * height
    for threshold, bitrate in BITRATE_THRESHOLDS:
        if pixels >= threshold:
            return bitrate
    return FALLBACK_BITRATE_KBPS
