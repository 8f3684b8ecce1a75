"""Exceptions raised by the vidpress core.

Every error derives from VidpressError so callers (the CLI, or a service
wrapping the core) can catch the whole family in one place. Format and
configuration errors are raised before any external tool is invoked.
"""

from __future__ import annotations

from pathlib import Path


class VidpressError(Exception):
    """Base class for all vidpress errors."""

    pass


class ToolNotFoundError(VidpressError):
    """Raised when a required external tool (ffmpeg, ffprobe) is missing."""

    def __init__(self, tool_name: str, hint: str = "") -> None:
        self.tool_name = tool_name
        message = f"Required tool not available: {tool_name}"
        if hint:
            message = f"{message}. {hint}"
        super().__init__(message)


# =============================================================================
# Format errors
# =============================================================================


class UnsupportedFormatError(VidpressError):
    """Raised when a container extension is not in the supported catalog."""

    def __init__(self, extension: str, supported: tuple[str, ...] = ()) -> None:
        self.extension = extension
        self.supported = supported
        message = f"Unsupported format {extension!r}"
        if supported:
            message += f"; supported: {', '.join(supported)}"
        super().__init__(message)


class UnsupportedInputFormatError(UnsupportedFormatError):
    """Raised when the input file's container is not supported."""

    pass


class UnsupportedOutputFormatError(UnsupportedFormatError):
    """Raised when the requested output extension is not supported."""

    pass


# =============================================================================
# Filesystem errors
# =============================================================================


class InputUnreadableError(VidpressError):
    """Raised when the input file cannot be stat'ed."""

    def __init__(self, path: Path, reason: str = "") -> None:
        self.path = path
        super().__init__(f"Cannot read input file {path}: {reason or 'unknown error'}")


class OutputUnreadableError(VidpressError):
    """Raised when the encoder reported success but the output is missing."""

    def __init__(self, path: Path, reason: str = "") -> None:
        self.path = path
        super().__init__(
            f"Cannot read output file {path}: {reason or 'unknown error'}"
        )


# =============================================================================
# Inference errors
# =============================================================================


class ProbeFailedError(VidpressError):
    """Raised when ffprobe cannot report a file's dimensions.

    Recoverable: single-file inference continues with unknown dimensions
    and directory sampling skips the file.
    """

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Probe failed for {path}: {reason}")


class NoMediaFoundError(VidpressError):
    """Raised when a directory holds no file with a supported extension."""

    def __init__(self, directory: Path, detail: str = "") -> None:
        self.directory = directory
        message = f"No video files found in {directory}"
        if detail:
            message += f" ({detail})"
        super().__init__(message)


class NoAnalyzableMediaError(VidpressError):
    """Raised when every sampled file failed to probe."""

    def __init__(self, directory: Path, sampled: int) -> None:
        self.directory = directory
        self.sampled = sampled
        super().__init__(
            f"No valid videos could be analyzed in {directory} "
            f"({sampled} sampled, all failed to probe)"
        )


class InvalidModeError(VidpressError, ValueError):
    """Raised for an unrecognised ratio aggregation mode."""

    def __init__(self, mode: str, valid: tuple[str, ...]) -> None:
        self.mode = mode
        super().__init__(
            f"Invalid mode: {mode}. Supported modes: {', '.join(valid)}"
        )


# =============================================================================
# Encoder errors
# =============================================================================


class EncodeFailedError(VidpressError):
    """Raised when an encoder invocation exits non-zero."""

    def __init__(
        self,
        message: str,
        returncode: int | None = None,
        stderr_tail: str = "",
    ) -> None:
        self.returncode = returncode
        self.stderr_tail = stderr_tail
        super().__init__(message)


class HardwareEncodeFailedError(EncodeFailedError):
    """Raised when the hardware encoder failed.

    The core never retries with the software encoder on its own; the
    guidance text tells the caller how to re-invoke.
    """

    guidance = "Hardware (NVENC) encoding failed. Retry with the software encoder."

    def __init__(
        self,
        message: str,
        returncode: int | None = None,
        stderr_tail: str = "",
    ) -> None:
        super().__init__(f"{message}. {self.guidance}", returncode, stderr_tail)


class ReencodeFailedError(VidpressError):
    """Raised when normalising one merge input fails; aborts the merge."""

    def __init__(self, file: str, reason: str) -> None:
        self.file = file
        self.reason = reason
        super().__init__(f"Failed to re-encode {file}: {reason}")


class MergeFailedError(VidpressError):
    """Raised when the final concatenation step fails."""

    def __init__(self, message: str, stderr_tail: str = "") -> None:
        self.stderr_tail = stderr_tail
        super().__init__(message)
