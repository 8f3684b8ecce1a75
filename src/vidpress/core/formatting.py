"""Formatting utilities.

Pure functions for formatting data for display.
"""


def format_megabytes(size_bytes: int) -> str:
    """Format a byte count as megabytes with two decimals ("12.34MB")."""
    return f"{size_bytes / 1024 / 1024:.2f}MB"
