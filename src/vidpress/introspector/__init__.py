"""Introspector module for vidpress.

This module provides frame-size inference:

- Prober: Protocol defining the probing interface
- FFprobeProber: Production implementation using ffprobe
- StubProber: Table-driven implementation for testing
- sample_directory: Representative aspect ratio of a folder of videos
"""

from vidpress.introspector.ffprobe import FFprobeProber, parse_dimensions
from vidpress.introspector.interface import Prober, ProbeResult, RatioSample
from vidpress.introspector.sampling import (
    aggregate_ratios,
    bucket_ratios,
    collect_ratio_samples,
    list_media_files,
    sample_directory,
    sample_size,
)
from vidpress.introspector.stub import StubProber

__all__ = [
    "FFprobeProber",
    "ProbeResult",
    "Prober",
    "RatioSample",
    "StubProber",
    "aggregate_ratios",
    "bucket_ratios",
    "collect_ratio_samples",
    "list_media_files",
    "parse_dimensions",
    "sample_directory",
    "sample_size",
]
