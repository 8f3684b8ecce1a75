"""Structured logging module for vidpress.

Provides configurable logging with JSON format support and file rotation.
Includes merge segment context for the re-encode phase.
"""

from vidpress.logging.config import configure_logging
from vidpress.logging.context import (
    SegmentContextFilter,
    get_segment_context,
    segment_context,
)
from vidpress.logging.handlers import JSONFormatter

__all__ = [
    "JSONFormatter",
    "SegmentContextFilter",
    "configure_logging",
    "get_segment_context",
    "segment_context",
]
