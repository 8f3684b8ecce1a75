"""vidpress - compress and merge videos with ffmpeg.

The core (policy, introspector, executor) never exits the process or
prints; the CLI in vidpress.cli wraps it.
"""

__version__ = "0.1.0"
