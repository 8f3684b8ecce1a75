"""Container format catalog.

The supported containers, the subset the hardware encoder can write, and
the two independent extension lookups (software codec, muxer) live in one
immutable MediaFormats value. DEFAULT_FORMATS is built once at import and
handed to every component that needs it.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

from vidpress.exceptions import UnsupportedFormatError

# ffmpeg encoder names
HARDWARE_CODEC = "hevc_nvenc"
H264_CODEC = "libx264"
H265_CODEC = "libx265"
VP9_CODEC = "libvpx-vp9"
WMV_CODEC = "wmv2"

# Substring of the hardware encoder family looked for in ffmpeg errors
HARDWARE_CODEC_FAMILY = "nvenc"


def _frozen(mapping: dict[str, str]) -> Mapping[str, str]:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class MediaFormats:
    """Immutable container/codec/muxer tables.

    Attributes:
        supported: Containers accepted for input and output.
        hardware_eligible: Containers the hardware encoder can write.
        software_codecs: Extension -> software encoder name.
        muxers: Extension -> ffmpeg muxer name. Extensions missing here
            use the bare extension.
    """

    supported: frozenset[str]
    hardware_eligible: frozenset[str]
    software_codecs: Mapping[str, str] = field(default_factory=dict)
    muxers: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate table consistency."""
        if not self.hardware_eligible <= self.supported:
            extra = sorted(self.hardware_eligible - self.supported)
            raise ValueError(f"Hardware-eligible formats not supported: {extra}")
        missing = sorted(self.supported - set(self.software_codecs))
        if missing:
            raise ValueError(f"No software codec for formats: {missing}")

    @property
    def supported_list(self) -> tuple[str, ...]:
        """Supported extensions, sorted, for messages."""
        return tuple(sorted(self.supported))

    def is_supported(self, extension: str) -> bool:
        """Check whether an extension (with or without dot) is supported."""
        return normalize_extension(extension) in self.supported

    def is_supported_file(self, path: Path | str) -> bool:
        """Check whether a file's extension names a supported container.

        The extension is everything from the last dot of the name, so a
        file called just ".mp4" counts (Path.suffix would be empty).
        """
        name = Path(path).name
        dot = name.rfind(".")
        return dot >= 0 and self.is_supported(name[dot:])

    def require(self, extension: str) -> str:
        """Normalize an extension and fail if it is not supported.

        Raises:
            UnsupportedFormatError: If the extension is not in the catalog.
        """
        ext = normalize_extension(extension)
        if ext not in self.supported:
            raise UnsupportedFormatError(ext, self.supported_list)
        return ext


def normalize_extension(extension: str) -> str:
    """Lower-case an extension and make sure it starts with a dot.

    Example:
        >>> normalize_extension("MKV")
        '.mkv'
    """
    ext = extension.strip().lower()
    if ext and not ext.startswith("."):
        ext = f".{ext}"
    return ext


DEFAULT_FORMATS = MediaFormats(
    supported=frozenset(
        {".mp4", ".avi", ".mkv", ".mov", ".wmv", ".flv", ".webm", ".ts"}
    ),
    hardware_eligible=frozenset({".mp4", ".mov", ".mkv", ".ts"}),
    software_codecs=_frozen(
        {
            ".mp4": H264_CODEC,
            ".mov": H264_CODEC,
            ".avi": H264_CODEC,
            ".flv": H264_CODEC,
            ".ts": H264_CODEC,
            ".mkv": H265_CODEC,
            ".webm": VP9_CODEC,
            ".wmv": WMV_CODEC,
        }
    ),
    muxers=_frozen(
        {
            ".mkv": "matroska",
            ".ts": "mpegts",
            ".wmv": "asf",
        }
    ),
)
