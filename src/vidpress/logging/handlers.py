"""Structured (JSON lines) log output."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

# Attributes every LogRecord carries; anything else arrived through extra=
_RECORD_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", None, None).__dict__
) | {"message", "asctime"}

# Set by SegmentContextFilter; emitted explicitly, never via extra=
_SEGMENT_ATTRS = ("segment_index", "segment_file")
_HIDDEN_ATTRS = _RECORD_ATTRS | {"segment_tag", *_SEGMENT_ATTRS}


class JSONFormatter(logging.Formatter):
    """One JSON object per record.

    Keys: timestamp (ISO-8601, UTC), level, message, logger (omitted for
    the root logger), context (extra= fields plus the merge segment, when
    any) and exception (formatted traceback, when any).
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
        }
        if record.name != "root":
            entry["logger"] = record.name

        context = {
            key: value
            for key, value in vars(record).items()
            if key not in _HIDDEN_ATTRS and not key.startswith("_")
        }
        for key in _SEGMENT_ATTRS:
            value = getattr(record, key, None)
            if value is not None:
                context[key] = value
        if context:
            entry["context"] = context

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)
