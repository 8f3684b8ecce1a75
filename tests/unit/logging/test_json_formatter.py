"""Unit tests for JSONFormatter."""

import json
import logging
import sys

from vidpress.logging.context import SegmentContextFilter, segment_context
from vidpress.logging.handlers import JSONFormatter


def _record(msg: str = "hello %s", args: tuple = ("world",), **extra):
    record = logging.LogRecord(
        name="vidpress.executor.merge",
        level=logging.WARNING,
        pathname="merge.py",
        lineno=10,
        msg=msg,
        args=args,
        exc_info=extra.pop("exc_info", None),
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    """Tests for JSONFormatter.format."""

    def test_basic_fields(self) -> None:
        entry = json.loads(JSONFormatter().format(_record()))
        assert entry["level"] == "WARNING"
        assert entry["message"] == "hello world"
        assert entry["logger"] == "vidpress.executor.merge"
        assert entry["timestamp"].endswith("+00:00")
        assert "context" not in entry

    def test_extra_context(self) -> None:
        entry = json.loads(JSONFormatter().format(_record(returncode=1)))
        assert entry["context"] == {"returncode": 1}

    def test_segment_fields(self) -> None:
        record = _record()
        with segment_context(2, 5, "ep2.mp4"):
            SegmentContextFilter().filter(record)
        entry = json.loads(JSONFormatter().format(record))
        assert entry["context"] == {"segment_index": 2, "segment_file": "ep2.mp4"}
        assert "segment_tag" not in entry["context"]

    def test_exception_included(self) -> None:
        try:
            raise ValueError("bad value")
        except ValueError:
            record = _record(exc_info=sys.exc_info())
        entry = json.loads(JSONFormatter().format(record))
        assert "ValueError: bad value" in entry["exception"]

    def test_non_serializable_extra(self) -> None:
        entry = json.loads(JSONFormatter().format(_record(path=object())))
        assert entry["context"]["path"].startswith("<object")
