"""Tests for EnvReader class."""

from __future__ import annotations

import logging
from pathlib import Path

from vidpress.config.env import EnvReader


class TestEnvReaderGetStr:
    """Tests for EnvReader.get_str method."""

    def test_returns_value_when_set(self) -> None:
        """Should return the value when environment variable is set."""
        reader = EnvReader(env={"MY_VAR": "hello"})
        assert reader.get_str("MY_VAR") == "hello"

    def test_returns_default_when_not_set(self) -> None:
        """Should return default when environment variable is not set."""
        reader = EnvReader(env={})
        assert reader.get_str("MY_VAR", "default") == "default"
        assert reader.get_str("MY_VAR") is None


class TestEnvReaderGetInt:
    """Tests for EnvReader.get_int method."""

    def test_parses_integer(self) -> None:
        reader = EnvReader(env={"VIDPRESS_FPS": "25"})
        assert reader.get_int("VIDPRESS_FPS", 32) == 25

    def test_invalid_value_warns_and_returns_default(self, caplog) -> None:
        """Should log a warning and fall back on unparseable values."""
        reader = EnvReader(env={"VIDPRESS_FPS": "fast"})
        with caplog.at_level(logging.WARNING):
            assert reader.get_int("VIDPRESS_FPS", 32) == 32
        assert "Invalid integer value for VIDPRESS_FPS" in caplog.text


class TestEnvReaderGetBool:
    """Tests for EnvReader.get_bool method."""

    def test_truthy_values(self) -> None:
        for value in ("true", "1", "YES", "On"):
            assert EnvReader(env={"V": value}).get_bool("V") is True

    def test_other_values_are_false(self) -> None:
        assert EnvReader(env={"V": "nope"}).get_bool("V", True) is False

    def test_default_when_not_set(self) -> None:
        assert EnvReader(env={}).get_bool("V", True) is True


class TestEnvReaderGetPath:
    """Tests for EnvReader.get_path method."""

    def test_existing_path(self, temp_dir: Path) -> None:
        reader = EnvReader(env={"VIDPRESS_TEMP_DIR": str(temp_dir)})
        assert reader.get_path("VIDPRESS_TEMP_DIR") == temp_dir

    def test_missing_path_rejected_when_must_exist(
        self, temp_dir: Path, caplog
    ) -> None:
        reader = EnvReader(env={"VIDPRESS_TEMP_DIR": str(temp_dir / "nope")})
        with caplog.at_level(logging.WARNING):
            assert reader.get_path("VIDPRESS_TEMP_DIR") is None
        assert "non-existent path" in caplog.text

    def test_missing_path_allowed(self, temp_dir: Path) -> None:
        reader = EnvReader(env={"VIDPRESS_LOG_FILE": str(temp_dir / "x.log")})
        assert reader.get_path("VIDPRESS_LOG_FILE", must_exist=False) == (
            temp_dir / "x.log"
        )

    def test_empty_value_is_unset(self) -> None:
        reader = EnvReader(env={"VIDPRESS_TEMP_DIR": ""})
        assert reader.get_path("VIDPRESS_TEMP_DIR", default=Path("/tmp")) == Path(
            "/tmp"
        )
