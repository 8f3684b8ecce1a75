"""External tool detection.

Locates the ffmpeg and ffprobe executables. Lookup order: configured
path, then PATH, then the current working directory and its parent (where
a bundled build is usually unpacked).
"""

import logging
import platform
import shutil
from pathlib import Path

from vidpress.exceptions import ToolNotFoundError

logger = logging.getLogger(__name__)


def _executable_name(name: str) -> str:
    if platform.system() == "Windows":
        return f"{name}.exe"
    return name


def find_tool(
    name: str,
    configured_path: Path | None = None,
    search_dirs: list[Path] | None = None,
) -> Path | None:
    """Find a tool executable.

    Args:
        name: Tool name (e.g., "ffmpeg").
        configured_path: Optional configured path override.
        search_dirs: Extra directories checked after PATH. Defaults to the
            current directory and its parent.

    Returns:
        Path to tool executable, or None if not found.
    """
    # Try configured path first
    if configured_path:
        if configured_path.is_file():
            return configured_path
        logger.warning(
            "Configured path for %s is not a file: %s", name, configured_path
        )

    # Fall back to PATH lookup
    which_result = shutil.which(name)
    if which_result:
        return Path(which_result)

    if search_dirs is None:
        cwd = Path.cwd()
        search_dirs = [cwd, cwd.parent]
    exe = _executable_name(name)
    for directory in search_dirs:
        candidate = directory / exe
        if candidate.is_file():
            logger.debug("Found %s at %s", name, candidate)
            return candidate

    return None


def require_tool(name: str, configured_path: Path | None = None) -> Path:
    """Find a tool executable or fail.

    Args:
        name: Tool name (e.g., "ffprobe").
        configured_path: Optional configured path override.

    Returns:
        Path to tool executable.

    Raises:
        ToolNotFoundError: If the tool cannot be found.
    """
    path = find_tool(name, configured_path)
    if path is None:
        env_var = f"VIDPRESS_{name.upper()}_PATH"
        raise ToolNotFoundError(
            name,
            f"Install ffmpeg, or set {env_var} / [tools] {name} in "
            "~/.vidpress/config.toml",
        )
    return path
