"""Job profile management.

Profiles store named job settings (for example a "phone" profile with
720p software encoding into .mp4) in <data_dir>/profiles/<name>.yaml and
are applied with the --profile option. Profile values override the
configured job defaults; CLI options override the profile.
"""

from __future__ import annotations

import re
from dataclasses import replace
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from vidpress.config.loader import get_data_dir
from vidpress.config.models import JobDefaults
from vidpress.policy.formats import DEFAULT_FORMATS, normalize_extension
from vidpress.policy.types import EncoderKind, ResolutionTier

_PROFILE_NAME = re.compile(r"^[a-zA-Z0-9_-]+$")


class ProfileError(Exception):
    """Error loading or validating a profile."""

    pass


class ProfileNotFoundError(ProfileError):
    """Profile does not exist."""

    pass


class JobProfileModel(BaseModel):
    """Pydantic model for a job profile file."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str | None = None
    description: str | None = None

    fps: int | None = Field(default=None, gt=0)
    resolution: str | None = None
    bitrate: int | None = Field(default=None, ge=0)
    preset: str | None = None
    quality: int | None = Field(default=None, ge=0)
    encoder: str | None = None
    output_extension: str | None = None

    @field_validator("resolution", mode="before")
    @classmethod
    def validate_resolution(cls, v: Any) -> str | None:
        """Accept tier names and bare heights (1080 -> 1080p)."""
        if v is None:
            return None
        return ResolutionTier.parse(str(v)).value

    @field_validator("encoder")
    @classmethod
    def validate_encoder(cls, v: str | None) -> str | None:
        """Normalize gpu/cpu aliases to hardware/software."""
        if v is None:
            return None
        return EncoderKind.parse(v).value

    @field_validator("output_extension")
    @classmethod
    def validate_output_extension(cls, v: str | None) -> str | None:
        """Require a supported container."""
        if v is None:
            return None
        ext = normalize_extension(v)
        if ext not in DEFAULT_FORMATS.supported:
            raise ValueError(
                f"unsupported output extension {ext!r}; "
                f"supported: {', '.join(DEFAULT_FORMATS.supported_list)}"
            )
        return ext

    def job_overrides(self) -> dict[str, Any]:
        """JobDefaults field values set by this profile."""
        return self.model_dump(exclude={"name", "description"}, exclude_none=True)


def get_profiles_directory() -> Path:
    """Get the profiles directory path.

    Returns:
        Path to <data_dir>/profiles/ (~/.vidpress/profiles/ by default).
    """
    return get_data_dir() / "profiles"


def list_profiles(profiles_dir: Path | None = None) -> list[str]:
    """List available profile names.

    Returns:
        Sorted profile names (without .yaml extension).
    """
    profiles_dir = profiles_dir or get_profiles_directory()
    if not profiles_dir.exists():
        return []

    return sorted(
        p.stem
        for p in profiles_dir.glob("*.yaml")
        if p.is_file() and not p.name.startswith(".")
    )


def load_profile(name: str, profiles_dir: Path | None = None) -> JobProfileModel:
    """Load a profile by name.

    Args:
        name: Profile name (without .yaml extension).
        profiles_dir: Directory to look in (default profiles directory
            when None).

    Returns:
        Validated profile.

    Raises:
        ProfileNotFoundError: If profile doesn't exist.
        ProfileError: If profile is invalid.
    """
    if not _PROFILE_NAME.match(name):
        raise ProfileError(f"Profile name must be alphanumeric (with - or _): {name}")

    profiles_dir = profiles_dir or get_profiles_directory()
    profile_path = profiles_dir / f"{name}.yaml"

    if not profile_path.exists():
        raise ProfileNotFoundError(f"Profile not found: {name}")

    try:
        with open(profile_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ProfileError(f"Invalid YAML in profile {name}: {e}") from e

    if not isinstance(data, dict):
        raise ProfileError(f"Profile {name} must be a mapping")

    try:
        profile = JobProfileModel.model_validate(data)
    except ValidationError as e:
        raise ProfileError(f"Invalid profile {name}: {e}") from e

    if profile.name is None:
        profile = profile.model_copy(update={"name": name})
    return profile


def apply_profile(defaults: JobDefaults, profile: JobProfileModel) -> JobDefaults:
    """Merge profile settings into job defaults.

    Precedence (highest wins):
        1. CLI options (applied later)
        2. Profile settings
        3. Configured defaults

    Returns:
        New JobDefaults with the profile's values applied.
    """
    return replace(defaults, **profile.job_overrides())
