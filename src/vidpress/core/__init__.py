"""Core utilities package.

Pure helpers shared across vidpress: natural ordering, size formatting,
and subprocess invocation.
"""

from vidpress.core.formatting import format_megabytes
from vidpress.core.string_utils import natural_sort_key, natural_sorted
from vidpress.core.subprocess_utils import run_command

__all__ = [
    "format_megabytes",
    "natural_sort_key",
    "natural_sorted",
    "run_command",
]
