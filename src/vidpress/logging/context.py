"""Merge segment context for structured logging.

Provides context propagation using contextvars, so every log record
emitted while a merge input is being re-encoded carries its position and
file name.
"""

from __future__ import annotations

import contextvars
import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Generator

# (index, total) of the segment being processed, 1-based
_segment_position: contextvars.ContextVar[tuple[int, int] | None] = (
    contextvars.ContextVar("segment_position", default=None)
)
_segment_file: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "segment_file", default=None
)


@contextmanager
def segment_context(
    index: int, total: int, file: str | None = None
) -> Generator[None, None, None]:
    """Context manager marking log records with the current merge segment.

    Restores the previous context on exit.

    Args:
        index: 1-based position of the segment.
        total: Number of segments in the merge.
        file: Name of the input file being re-encoded.

    Example:
        with segment_context(3, 12, "part03.mp4"):
            logger.info("Re-encoding")  # "[3/12] Re-encoding"
    """
    position_token = _segment_position.set((index, total))
    file_token = _segment_file.set(file)
    try:
        yield
    finally:
        _segment_position.reset(position_token)
        _segment_file.reset(file_token)


def get_segment_context() -> tuple[int | None, int | None, str | None]:
    """Get current segment context.

    Returns:
        Tuple of (index, total, file), all None outside a segment.
    """
    position = _segment_position.get()
    if position is None:
        return None, None, _segment_file.get()
    return position[0], position[1], _segment_file.get()


class SegmentContextFilter(logging.Filter):
    """Logging filter that injects segment context into log records.

    Adds segment_index and segment_file for JSON output and a compact
    segment_tag like "[3/12] " for text output.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        """Inject segment context into log record.

        Args:
            record: The log record to process.

        Returns:
            Always True (does not filter, only enriches).
        """
        index, total, file = get_segment_context()
        record.segment_index = index
        record.segment_file = file
        record.segment_tag = f"[{index}/{total}] " if index is not None else ""
        return True
