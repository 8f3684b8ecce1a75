"""String manipulation utilities.

Natural ordering for file names, casefolded so case never splits runs.
"""

from __future__ import annotations

import re

_DIGIT_RUN = re.compile(r"(\d+)")


def natural_sort_key(s: str) -> tuple[tuple[int, int | str], ...]:
    """Build a sort key that orders embedded digit runs numerically.

    Text and digit chunks are tagged so they never compare against each
    other directly; digit runs compare by value, text by casefolded value.

    Args:
        s: String to build a key for (typically a file name).

    Returns:
        Tuple usable as a sort key.

    Example:
        >>> sorted(["file10.mp4", "file2.mp4"], key=natural_sort_key)
        ['file2.mp4', 'file10.mp4']
    """
    key: list[tuple[int, int | str]] = []
    for chunk in _DIGIT_RUN.split(s):
        if not chunk:
            continue
        if chunk.isdigit():
            key.append((0, int(chunk)))
        else:
            key.append((1, chunk.casefold()))
    return tuple(key)


def natural_sorted(names: list[str], reverse: bool = False) -> list[str]:
    """Return names in natural (human) order.

    Args:
        names: Strings to sort.
        reverse: Sort descending instead of ascending.

    Returns:
        New sorted list.
    """
    return sorted(names, key=natural_sort_key, reverse=reverse)
