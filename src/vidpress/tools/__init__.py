"""External tool discovery for ffmpeg and ffprobe."""

from vidpress.tools.detection import find_tool, require_tool

__all__ = ["find_tool", "require_tool"]
