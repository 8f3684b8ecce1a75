"""Configuration loader with precedence handling.

Configuration is loaded with the following precedence (highest to lowest):
1. CLI arguments (passed directly to functions)
2. Environment variables (VIDPRESS_*)
3. Config file (~/.vidpress/config.toml)
4. Default values

Environment variables:
- VIDPRESS_CONFIG_PATH: Path to config file (overrides default location)
- VIDPRESS_DATA_DIR: Path to vidpress data directory (overrides ~/.vidpress/)
- VIDPRESS_FFMPEG_PATH / VIDPRESS_FFPROBE_PATH: Tool executables
- VIDPRESS_LOG_LEVEL / VIDPRESS_LOG_FILE / VIDPRESS_LOG_FORMAT: Logging
- VIDPRESS_TEMP_DIR: Parent directory for merge scratch directories
- VIDPRESS_FPS, VIDPRESS_RESOLUTION, VIDPRESS_BITRATE, VIDPRESS_PRESET,
  VIDPRESS_QUALITY, VIDPRESS_ENCODER, VIDPRESS_OUTPUT_EXTENSION: Job defaults
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from vidpress.config.env import EnvReader
from vidpress.config.models import (
    JobDefaults,
    LoggingConfig,
    ToolPathsConfig,
    VidpressConfig,
)

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR_NAME = ".vidpress"
CONFIG_FILE_NAME = "config.toml"


def get_data_dir(env_reader: EnvReader | None = None) -> Path:
    """Get the vidpress data directory.

    Holds config.toml and the profiles/ directory. Can be overridden by
    the VIDPRESS_DATA_DIR environment variable.

    Returns:
        Path to the data directory (~/.vidpress/ by default).
    """
    env = env_reader or EnvReader()
    return env.get_path("VIDPRESS_DATA_DIR", must_exist=False) or (
        Path.home() / DEFAULT_DATA_DIR_NAME
    )


def get_default_config_path(env_reader: EnvReader | None = None) -> Path:
    """Get the default config file path.

    Can be overridden by VIDPRESS_CONFIG_PATH environment variable.

    Returns:
        Path to config file.
    """
    env = env_reader or EnvReader()
    env_path = env.get_path("VIDPRESS_CONFIG_PATH", must_exist=False)
    if env_path:
        return env_path
    return get_data_dir(env) / CONFIG_FILE_NAME


def load_config_file(
    path: Path | None = None, env_reader: EnvReader | None = None
) -> dict[str, Any]:
    """Load configuration from TOML file.

    Args:
        path: Path to config file. If None, uses default location.
        env_reader: Environment reader used to find the default location.

    Returns:
        Parsed configuration dict. Empty dict if the file doesn't exist or
        cannot be parsed (a warning is logged).
    """
    if path is None:
        path = get_default_config_path(env_reader)

    if not path.exists():
        logger.debug("Config file not found: %s", path)
        return {}

    try:
        with open(path, "rb") as f:
            config = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Failed to load config file %s: %s", path, e)
        return {}
    logger.debug("Loaded config from %s", path)
    return config


def _file_path(section: dict[str, Any], key: str) -> Path | None:
    value = section.get(key)
    return Path(value).expanduser() if value else None


def get_config(
    config_path: Path | None = None,
    env_reader: EnvReader | None = None,
    # CLI overrides (highest precedence)
    ffmpeg_path: Path | None = None,
    ffprobe_path: Path | None = None,
) -> VidpressConfig:
    """Get vidpress configuration with full precedence handling.

    Args:
        config_path: Path to config file (overrides VIDPRESS_CONFIG_PATH).
        env_reader: Environment reader (os.environ when None).
        ffmpeg_path: CLI override for ffmpeg path.
        ffprobe_path: CLI override for ffprobe path.

    Returns:
        VidpressConfig with merged configuration.

    Raises:
        ValueError: If a configured value is invalid.
    """
    env = env_reader or EnvReader()
    file_config = load_config_file(config_path, env)

    tools_file = file_config.get("tools", {})
    tools = ToolPathsConfig(
        ffmpeg=(
            ffmpeg_path
            or env.get_path("VIDPRESS_FFMPEG_PATH")
            or _file_path(tools_file, "ffmpeg")
        ),
        ffprobe=(
            ffprobe_path
            or env.get_path("VIDPRESS_FFPROBE_PATH")
            or _file_path(tools_file, "ffprobe")
        ),
    )

    logging_file = file_config.get("logging", {})
    log_config = LoggingConfig(
        level=env.get_str("VIDPRESS_LOG_LEVEL") or logging_file.get("level", "info"),
        file=(
            env.get_path("VIDPRESS_LOG_FILE", must_exist=False)
            or _file_path(logging_file, "file")
        ),
        format=(
            env.get_str("VIDPRESS_LOG_FORMAT") or logging_file.get("format", "text")
        ),
        include_stderr=env.get_bool(
            "VIDPRESS_LOG_INCLUDE_STDERR",
            logging_file.get("include_stderr", False),
        ),
        max_bytes=logging_file.get("max_bytes", 10_485_760),
        backup_count=logging_file.get("backup_count", 5),
    )

    defaults_file = file_config.get("defaults", {})
    base = JobDefaults()
    defaults = JobDefaults(
        fps=env.get_int("VIDPRESS_FPS", defaults_file.get("fps", base.fps)),
        resolution=env.get_str(
            "VIDPRESS_RESOLUTION",
            str(defaults_file.get("resolution", base.resolution)),
        ),
        bitrate=env.get_int(
            "VIDPRESS_BITRATE", defaults_file.get("bitrate", base.bitrate)
        ),
        preset=env.get_str(
            "VIDPRESS_PRESET", defaults_file.get("preset", base.preset)
        ),
        quality=env.get_int(
            "VIDPRESS_QUALITY", defaults_file.get("quality", base.quality)
        ),
        encoder=env.get_str(
            "VIDPRESS_ENCODER", defaults_file.get("encoder", base.encoder)
        ),
        output_extension=env.get_str(
            "VIDPRESS_OUTPUT_EXTENSION",
            defaults_file.get("output_extension", base.output_extension),
        ),
    )

    jobs_file = file_config.get("jobs", {})
    temp_directory = env.get_path("VIDPRESS_TEMP_DIR") or _file_path(
        jobs_file, "temp_directory"
    )

    return VidpressConfig(
        tools=tools,
        logging=log_config,
        defaults=defaults,
        temp_directory=temp_directory,
    )
