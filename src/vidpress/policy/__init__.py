"""Encoding decision policy.

Resolution catalog, container catalog and codec selection. Everything in
this package is pure: no external tools are invoked.
"""

from vidpress.policy.codecs import codec_args, muxer_for, select_encoder
from vidpress.policy.formats import (
    DEFAULT_FORMATS,
    MediaFormats,
    normalize_extension,
)
from vidpress.policy.resolution import (
    recommended_bitrate,
    resolve,
    resolve_by_ratio,
    tier_spec,
)
from vidpress.policy.types import (
    AggregationMode,
    EncodeJobConfig,
    EncoderKind,
    ResolutionTier,
)

__all__ = [
    "DEFAULT_FORMATS",
    "AggregationMode",
    "EncodeJobConfig",
    "EncoderKind",
    "MediaFormats",
    "ResolutionTier",
    "codec_args",
    "muxer_for",
    "normalize_extension",
    "recommended_bitrate",
    "resolve",
    "resolve_by_ratio",
    "select_encoder",
    "tier_spec",
]
