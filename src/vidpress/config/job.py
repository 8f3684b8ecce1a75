"""Build an EncodeJobConfig from user intent.

Applies the rules that turn loosely specified options into one
consistent job: explicit dimensions win over a tier, no size at all means
1080p, and a missing bitrate comes from the tier.
"""

from __future__ import annotations

import logging

from vidpress.config.models import JobDefaults
from vidpress.policy.formats import normalize_extension
from vidpress.policy.resolution import DEFAULT_TIER, tier_spec
from vidpress.policy.types import EncodeJobConfig, EncoderKind, ResolutionTier

logger = logging.getLogger(__name__)


def _even(value: int) -> int:
    return value - (value % 2)


def build_job_config(
    defaults: JobDefaults,
    *,
    fps: int | None = None,
    resolution: str | None = None,
    bitrate: int | None = None,
    preset: str | None = None,
    quality: int | None = None,
    width: int = 0,
    height: int = 0,
    encoder: str | None = None,
    output_extension: str | None = None,
    reverse: bool = False,
) -> EncodeJobConfig:
    """Combine defaults and explicit options into a job.

    Options left as None fall back to defaults.

    Args:
        defaults: Configured (and profile-adjusted) job defaults.
        fps: Output frame rate.
        resolution: Tier name ("4k", "1080p", "720", ...).
        bitrate: Bitrate in kbps, 0 for the tier default.
        preset: Software encoder preset.
        quality: Constant quality value.
        width: Explicit output width (0 = none).
        height: Explicit output height (0 = none).
        encoder: hardware/software (or gpu/cpu).
        output_extension: Output container extension.
        reverse: Merge inputs in descending order.

    Returns:
        Validated EncodeJobConfig.

    Raises:
        ValueError: If an option is invalid, or only one of width/height
            is given.
    """
    if (width > 0) != (height > 0):
        raise ValueError("Custom width and height must be given together")

    tier = ResolutionTier.parse(
        resolution if resolution is not None else defaults.resolution
    )
    explicit = width > 0 and height > 0

    if explicit:
        if tier is not ResolutionTier.NONE:
            logger.info("Custom width/height specified, ignoring resolution")
        tier = ResolutionTier.NONE
        width, height = _even(width), _even(height)
    elif tier is ResolutionTier.NONE:
        logger.info(
            "No custom width/height or resolution specified, using %s",
            DEFAULT_TIER.label,
        )
        tier = DEFAULT_TIER

    bitrate_kbps = bitrate if bitrate is not None else defaults.bitrate
    if bitrate_kbps == 0 and tier is not ResolutionTier.NONE:
        bitrate_kbps = tier_spec(tier).bitrate_kbps

    return EncodeJobConfig(
        fps=fps if fps is not None else defaults.fps,
        resolution=tier,
        bitrate_kbps=bitrate_kbps,
        preset=preset if preset is not None else defaults.preset,
        quality=quality if quality is not None else defaults.quality,
        width=width,
        height=height,
        encoder=EncoderKind.parse(
            encoder if encoder is not None else defaults.encoder
        ),
        output_extension=normalize_extension(
            output_extension
            if output_extension is not None
            else defaults.output_extension
        ),
        reverse=reverse,
    )
