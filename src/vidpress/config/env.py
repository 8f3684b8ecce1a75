"""Typed access to VIDPRESS_* environment variables.

Tests hand EnvReader a plain dict instead of patching os.environ.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

logger = logging.getLogger(__name__)

ENV_PREFIX = "VIDPRESS_"

_TRUE_VALUES = frozenset({"true", "1", "yes", "on"})


class EnvReader:
    """Read environment variables as str, int, bool or Path.

    Unset variables yield the caller's default. Unusable values are logged
    and also yield the default, so a typo in the environment never stops
    the tool.

    Example:
        reader = EnvReader({"VIDPRESS_FPS": "25"})
        reader.get_int("VIDPRESS_FPS", 32)  # 25
    """

    def __init__(self, env: Mapping[str, str] | None = None) -> None:
        self._env: Mapping[str, str] = os.environ if env is None else env

    def get_str(self, var: str, default: str | None = None) -> str | None:
        """Raw value of var, or default when unset."""
        return self._env.get(var, default)

    def get_int(self, var: str, default: int | None = None) -> int | None:
        """Integer value of var; default when unset or not an integer."""
        raw = self._env.get(var)
        if raw is None:
            return default
        try:
            return int(raw)
        except ValueError:
            logger.warning("Invalid integer value for %s: %s", var, raw)
            return default

    def get_bool(self, var: str, default: bool | None = None) -> bool | None:
        """True for true/1/yes/on in any case, False for anything else set."""
        raw = self._env.get(var)
        if raw is None:
            return default
        return raw.strip().lower() in _TRUE_VALUES

    def get_path(
        self, var: str, must_exist: bool = True, default: Path | None = None
    ) -> Path | None:
        """User-expanded path from var.

        An empty value counts as unset. With must_exist, a path that is not
        on disk is logged and replaced by default.
        """
        raw = self._env.get(var)
        if not raw:
            return default
        path = Path(raw).expanduser()
        if must_exist and not path.exists():
            logger.warning(
                "Environment variable %s points to non-existent path: %s", var, raw
            )
            return default
        return path
