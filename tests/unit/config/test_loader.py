"""Tests for configuration loading and precedence."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from vidpress.config.env import EnvReader
from vidpress.config.loader import (
    get_config,
    get_data_dir,
    get_default_config_path,
    load_config_file,
)

CONFIG_TOML = """
[tools]
ffmpeg = "/opt/ffmpeg/bin/ffmpeg"

[logging]
level = "debug"
format = "json"

[defaults]
fps = 24
resolution = "720p"
encoder = "cpu"
output_extension = "mkv"

[jobs]
temp_directory = "/var/tmp/vidpress"
"""


@pytest.fixture
def config_file(temp_dir: Path) -> Path:
    path = temp_dir / "config.toml"
    path.write_text(CONFIG_TOML, encoding="utf-8")
    return path


class TestPaths:
    """Tests for data directory and config path resolution."""

    def test_default_data_dir(self) -> None:
        assert get_data_dir(EnvReader(env={})) == Path.home() / ".vidpress"

    def test_data_dir_from_env(self, temp_dir: Path) -> None:
        env = EnvReader(env={"VIDPRESS_DATA_DIR": str(temp_dir)})
        assert get_data_dir(env) == temp_dir
        assert get_default_config_path(env) == temp_dir / "config.toml"

    def test_config_path_from_env(self, temp_dir: Path) -> None:
        env = EnvReader(env={"VIDPRESS_CONFIG_PATH": str(temp_dir / "other.toml")})
        assert get_default_config_path(env) == temp_dir / "other.toml"


class TestLoadConfigFile:
    """Tests for load_config_file."""

    def test_missing_file(self, temp_dir: Path) -> None:
        assert load_config_file(temp_dir / "missing.toml") == {}

    def test_invalid_toml_warns(self, temp_dir: Path, caplog) -> None:
        path = temp_dir / "bad.toml"
        path.write_text("[defaults\nfps = ", encoding="utf-8")
        with caplog.at_level(logging.WARNING):
            assert load_config_file(path) == {}
        assert "Failed to load config file" in caplog.text

    def test_parses_sections(self, config_file: Path) -> None:
        data = load_config_file(config_file)
        assert data["defaults"]["fps"] == 24
        assert data["tools"]["ffmpeg"] == "/opt/ffmpeg/bin/ffmpeg"


class TestGetConfig:
    """Tests for get_config precedence."""

    def test_defaults_without_file(self, temp_dir: Path) -> None:
        config = get_config(temp_dir / "missing.toml", EnvReader(env={}))
        assert config.defaults.fps == 32
        assert config.defaults.quality == 32
        assert config.defaults.encoder == "hardware"
        assert config.defaults.output_extension == ".mp4"
        assert config.logging.level == "info"
        assert config.tools.ffmpeg is None
        assert config.temp_directory is None

    def test_file_values(self, config_file: Path) -> None:
        config = get_config(config_file, EnvReader(env={}))
        assert config.tools.ffmpeg == Path("/opt/ffmpeg/bin/ffmpeg")
        assert config.logging.level == "debug"
        assert config.logging.format == "json"
        assert config.defaults.fps == 24
        assert config.defaults.resolution == "720p"
        assert config.defaults.encoder == "cpu"
        assert config.defaults.output_extension == ".mkv"
        assert config.temp_directory == Path("/var/tmp/vidpress")

    def test_env_overrides_file(self, config_file: Path) -> None:
        env = EnvReader(
            env={
                "VIDPRESS_FPS": "60",
                "VIDPRESS_LOG_LEVEL": "warning",
                "VIDPRESS_ENCODER": "gpu",
            }
        )
        config = get_config(config_file, env)
        assert config.defaults.fps == 60
        assert config.logging.level == "warning"
        assert config.defaults.encoder == "gpu"
        # Untouched values still come from the file
        assert config.defaults.resolution == "720p"

    def test_cli_tool_path_overrides_everything(
        self, config_file: Path, temp_dir: Path
    ) -> None:
        ffmpeg = temp_dir / "ffmpeg"
        ffmpeg.touch()
        env = EnvReader(env={"VIDPRESS_FFMPEG_PATH": str(ffmpeg)})

        assert get_config(config_file, env).tools.ffmpeg == ffmpeg
        assert (
            get_config(config_file, env, ffmpeg_path=Path("/cli/ffmpeg")).tools.ffmpeg
            == Path("/cli/ffmpeg")
        )

    def test_invalid_value_raises(self, temp_dir: Path) -> None:
        path = temp_dir / "config.toml"
        path.write_text('[defaults]\nencoder = "quantum"\n', encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid encoder"):
            get_config(path, EnvReader(env={}))

    def test_invalid_log_level_raises(self, temp_dir: Path) -> None:
        env = EnvReader(env={"VIDPRESS_LOG_LEVEL": "loud"})
        with pytest.raises(ValueError, match="level must be one of"):
            get_config(temp_dir / "missing.toml", env)
