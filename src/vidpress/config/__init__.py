"""Configuration module for vidpress.

This module provides configuration loading with precedence handling:
1. CLI arguments (highest)
2. Environment variables
3. Config file (~/.vidpress/config.toml)
4. Default values (lowest)

Job profiles (~/.vidpress/profiles/*.yaml) sit between the configured
job defaults and CLI options.
"""

from vidpress.config.env import EnvReader
from vidpress.config.job import build_job_config
from vidpress.config.loader import (
    get_config,
    get_data_dir,
    get_default_config_path,
    load_config_file,
)
from vidpress.config.logging_factory import build_logging_config
from vidpress.config.models import (
    JobDefaults,
    LoggingConfig,
    ToolPathsConfig,
    VidpressConfig,
)

__all__ = [
    "EnvReader",
    "JobDefaults",
    "LoggingConfig",
    "ToolPathsConfig",
    "VidpressConfig",
    "build_job_config",
    "build_logging_config",
    "get_config",
    "get_data_dir",
    "get_default_config_path",
    "load_config_file",
]
