"""Configuration data models.

This module defines dataclasses for vidpress configuration options. All
of them are frozen: configuration is built once at startup and passed
down by reference.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from vidpress.policy.formats import normalize_extension
from vidpress.policy.types import EncoderKind, ResolutionTier


@dataclass(frozen=True)
class ToolPathsConfig:
    """Configuration for external tool paths.

    All paths are optional. If not specified, tools are looked up in PATH,
    then in the current directory and its parent.
    """

    ffmpeg: Path | None = None
    ffprobe: Path | None = None


@dataclass(frozen=True)
class LoggingConfig:
    """Configuration for structured logging."""

    # Log level: debug, info, warning, error
    level: str = "info"

    # Log file path (None = stderr only)
    file: Path | None = None

    # Log format: text or json
    format: str = "text"

    # Also log to stderr when file is set
    include_stderr: bool = False

    # Rotation threshold in bytes (default 10MB)
    max_bytes: int = 10_485_760

    # Number of rotated files to keep
    backup_count: int = 5

    def __post_init__(self) -> None:
        """Validate configuration."""
        valid_levels = {"debug", "info", "warning", "error"}
        if self.level.lower() not in valid_levels:
            raise ValueError(f"level must be one of {valid_levels}, got {self.level}")
        valid_formats = {"text", "json"}
        if self.format.lower() not in valid_formats:
            raise ValueError(
                f"format must be one of {valid_formats}, got {self.format}"
            )
        if self.max_bytes <= 0:
            raise ValueError(f"max_bytes must be positive, got {self.max_bytes}")
        if self.backup_count < 0:
            raise ValueError(
                f"backup_count must not be negative, got {self.backup_count}"
            )


@dataclass(frozen=True)
class JobDefaults:
    """Default job settings, overridden by profiles and CLI options."""

    fps: int = 32
    """Output frame rate."""

    resolution: str = ""
    """Resolution tier name ("" = none, which becomes 1080p)."""

    bitrate: int = 0
    """Bitrate in kbps (0 = tier default)."""

    preset: str = "medium"
    """Software encoder preset."""

    quality: int = 32
    """Constant quality value (-crf / -cq)."""

    encoder: str = "hardware"
    """hardware or software (gpu / cpu accepted)."""

    output_extension: str = ".mp4"

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.fps <= 0:
            raise ValueError(f"fps must be positive, got {self.fps}")
        if self.bitrate < 0:
            raise ValueError(f"bitrate must not be negative, got {self.bitrate}")
        # Raise ValueError for unknown names
        ResolutionTier.parse(self.resolution)
        EncoderKind.parse(self.encoder)
        object.__setattr__(
            self, "output_extension", normalize_extension(self.output_extension)
        )


@dataclass(frozen=True)
class VidpressConfig:
    """Main configuration for vidpress."""

    tools: ToolPathsConfig = field(default_factory=ToolPathsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    defaults: JobDefaults = field(default_factory=JobDefaults)

    # Parent directory for merge scratch directories (None = system temp)
    temp_directory: Path | None = None
