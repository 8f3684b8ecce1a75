"""Unit tests for configure_logging."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest

from vidpress.config.models import LoggingConfig
from vidpress.logging.config import configure_logging
from vidpress.logging.handlers import JSONFormatter


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_stderr_only_by_default(self) -> None:
        configure_logging(LoggingConfig(level="warning"))
        root = logging.getLogger()
        assert root.level == logging.WARNING
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0], logging.StreamHandler)

    def test_file_handler(self, temp_dir: Path) -> None:
        log_file = temp_dir / "logs" / "vidpress.log"
        configure_logging(LoggingConfig(level="debug", file=log_file))

        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0], RotatingFileHandler)

        logging.getLogger("vidpress.test").info("written")
        root.handlers[0].flush()
        assert "vidpress.test - INFO - written" in log_file.read_text()

    def test_file_and_stderr(self, temp_dir: Path) -> None:
        configure_logging(
            LoggingConfig(file=temp_dir / "v.log", include_stderr=True)
        )
        assert len(logging.getLogger().handlers) == 2

    def test_json_format(self, temp_dir: Path) -> None:
        configure_logging(LoggingConfig(format="json"))
        handler = logging.getLogger().handlers[0]
        assert isinstance(handler.formatter, JSONFormatter)

    def test_unwritable_log_file_falls_back_to_stderr(
        self, temp_dir: Path, capsys
    ) -> None:
        blocker = temp_dir / "file"
        blocker.write_text("")
        configure_logging(LoggingConfig(file=blocker / "v.log"))

        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert not isinstance(root.handlers[0], RotatingFileHandler)
        assert "Could not open log file" in capsys.readouterr().err
