"""Apply command-line logging overrides to the configured LoggingConfig."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

from vidpress.config.models import LoggingConfig


def build_logging_config(
    base: LoggingConfig,
    *,
    level: str | None = None,
    file: Path | None = None,
    format: str | None = None,
    include_stderr: bool | None = None,
) -> LoggingConfig:
    """Return base with every override that was actually given applied.

    Rotation limits always come from base; they have no CLI option.

    Raises:
        ValueError: If an override is invalid (LoggingConfig validation).
    """
    overrides = {
        "level": level,
        "file": file,
        "format": format,
        "include_stderr": include_stderr,
    }
    return replace(
        base, **{name: value for name, value in overrides.items() if value is not None}
    )
