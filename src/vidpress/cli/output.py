"""Error reporting shared by the CLI commands."""

from __future__ import annotations

import sys
from typing import NoReturn

import click

from vidpress.cli.exit_codes import ExitCode
from vidpress.exceptions import (
    EncodeFailedError,
    HardwareEncodeFailedError,
    InputUnreadableError,
    InvalidModeError,
    MergeFailedError,
    NoAnalyzableMediaError,
    NoMediaFoundError,
    ReencodeFailedError,
    ToolNotFoundError,
    UnsupportedFormatError,
    VidpressError,
)

# Checked in order, so subclasses come before their bases
_ERROR_CODES: tuple[tuple[type[VidpressError], ExitCode], ...] = (
    (ToolNotFoundError, ExitCode.TOOL_NOT_AVAILABLE),
    (UnsupportedFormatError, ExitCode.UNSUPPORTED_FORMAT),
    (InvalidModeError, ExitCode.CONFIG_ERROR),
    (InputUnreadableError, ExitCode.TARGET_NOT_FOUND),
    (NoMediaFoundError, ExitCode.NO_MEDIA_FOUND),
    (NoAnalyzableMediaError, ExitCode.NO_MEDIA_FOUND),
    (HardwareEncodeFailedError, ExitCode.HARDWARE_ENCODE_FAILED),
    (EncodeFailedError, ExitCode.OPERATION_FAILED),
    (ReencodeFailedError, ExitCode.OPERATION_FAILED),
    (MergeFailedError, ExitCode.OPERATION_FAILED),
)


def exit_code_for(error: VidpressError) -> ExitCode:
    """Map a core error to the exit code the CLI reports."""
    for error_type, code in _ERROR_CODES:
        if isinstance(error, error_type):
            return code
    return ExitCode.OPERATION_FAILED


def error_exit(message: str, code: ExitCode | int) -> NoReturn:
    """Exit with formatted error message.

    Args:
        message: Error message to display.
        code: Exit code to use (ExitCode enum or int).

    Note:
        This function never returns; it always calls sys.exit().
    """
    click.echo(f"Error: {message}", err=True)
    sys.exit(int(code))


def fail(error: VidpressError) -> NoReturn:
    """Report a core error and exit with its mapped code.

    The tail of ffmpeg's output is echoed for encode and merge failures.
    """
    stderr_tail = getattr(error, "stderr_tail", "")
    if stderr_tail:
        click.echo(stderr_tail, err=True)
    cause = error.__cause__
    if isinstance(error, ReencodeFailedError) and isinstance(
        cause, HardwareEncodeFailedError
    ):
        # A GPU failure during a merge keeps its dedicated code
        if cause.stderr_tail:
            click.echo(cause.stderr_tail, err=True)
        error_exit(str(error), ExitCode.HARDWARE_ENCODE_FAILED)
    error_exit(str(error), exit_code_for(error))
