"""Job configuration types.

This module defines the enums and the immutable job value that flow from
user intent through the resolution catalog and codec policy into the
executors.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from vidpress.exceptions import InvalidModeError


class ResolutionTier(Enum):
    """Named target resolution bucket."""

    UHD_4K = "4k"
    QHD_2K = "2k"
    FHD_1080P = "1080p"
    HD_720P = "720p"
    SD_480P = "480p"
    SD_360P = "360p"
    SD_240P = "240p"
    NONE = ""

    @classmethod
    def parse(cls, value: str | ResolutionTier | None) -> ResolutionTier:
        """Parse a user-supplied tier name.

        Accepts the canonical names case-insensitively, and bare heights
        such as "1080". Empty or None maps to NONE.

        Raises:
            ValueError: If the value names no known tier.
        """
        if isinstance(value, ResolutionTier):
            return value
        if value is None:
            return cls.NONE
        text = value.casefold().strip()
        if text in ("", "none"):
            return cls.NONE
        if text.isdigit():
            text = f"{text}p"
        for tier in cls:
            if tier.value == text:
                return tier
        valid = ", ".join(t.label for t in cls if t is not cls.NONE)
        raise ValueError(f"Invalid resolution '{value}'. Must be one of: {valid}")

    @property
    def label(self) -> str:
        """Display label (e.g. "4K", "1080p")."""
        if self is ResolutionTier.NONE:
            return "none"
        return self.value.upper() if self.value.endswith("k") else self.value


class EncoderKind(Enum):
    """Which encoder family a job asks for."""

    HARDWARE = "hardware"
    SOFTWARE = "software"

    @classmethod
    def parse(cls, value: str | EncoderKind) -> EncoderKind:
        """Parse an encoder name; "gpu" and "cpu" are accepted aliases.

        Raises:
            ValueError: If the value names no known encoder kind.
        """
        if isinstance(value, EncoderKind):
            return value
        text = value.casefold().strip()
        aliases = {
            "hardware": cls.HARDWARE,
            "gpu": cls.HARDWARE,
            "software": cls.SOFTWARE,
            "cpu": cls.SOFTWARE,
        }
        if text not in aliases:
            raise ValueError(
                f"Invalid encoder '{value}'. Must be one of: "
                "hardware, software (or gpu, cpu)"
            )
        return aliases[text]


class AggregationMode(Enum):
    """How a set of sampled aspect ratios collapses to one ratio."""

    MOST_COMMON = "most_common"
    MIN = "min"
    MAX = "max"
    AVERAGE = "average"

    @classmethod
    def parse(cls, value: str | AggregationMode) -> AggregationMode:
        """Parse a mode name ("most-common" and "most_common" both work).

        Raises:
            InvalidModeError: If the value names no known mode.
        """
        if isinstance(value, AggregationMode):
            return value
        text = value.casefold().strip().replace("-", "_")
        for mode in cls:
            if mode.value == text:
                return mode
        raise InvalidModeError(value, tuple(m.value for m in cls))


@dataclass(frozen=True)
class EncodeJobConfig:
    """Settings for one compress or merge invocation.

    Constructed once from user intent and refined by building new values
    with dataclasses.replace(); the executors only read it.
    """

    fps: int = 32
    """Output frame rate."""

    resolution: ResolutionTier = ResolutionTier.NONE
    """Target tier. NONE when explicit width/height are given."""

    bitrate_kbps: int = 0
    """Target bitrate in kbps. 0 = derive from the resolution catalog."""

    preset: str = "medium"
    """Encoder preset, passed through to software encoders untouched."""

    quality: int = 32
    """Constant quality value (-crf for software, -cq for hardware)."""

    width: int = 0
    height: int = 0

    encoder: EncoderKind = EncoderKind.HARDWARE

    output_extension: str = ".mp4"

    reverse: bool = False
    """Merge only: order inputs in descending natural order."""

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.fps <= 0:
            raise ValueError(f"fps must be positive, got {self.fps}")
        if self.width < 0 or self.height < 0:
            raise ValueError(
                f"width and height must not be negative, got "
                f"{self.width}x{self.height}"
            )
        if self.bitrate_kbps < 0:
            raise ValueError(f"bitrate must not be negative, got {self.bitrate_kbps}")
        if self.has_explicit_dimensions and self.resolution is not ResolutionTier.NONE:
            raise ValueError(
                "Explicit width/height and a resolution tier are mutually exclusive"
            )

    @property
    def has_explicit_dimensions(self) -> bool:
        """True when both width and height are set."""
        return self.width > 0 and self.height > 0

    @property
    def bitrate_arg(self) -> str:
        """Bitrate formatted for ffmpeg ("5000k")."""
        return f"{self.bitrate_kbps}k"

    @property
    def bufsize_arg(self) -> str:
        """Rate-control buffer size, twice the bitrate ("10000k")."""
        return f"{self.bitrate_kbps * 2}k"
