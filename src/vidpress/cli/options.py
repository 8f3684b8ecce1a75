"""Job options shared by the compress and merge commands."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import click

from vidpress.cli.exit_codes import ExitCode
from vidpress.cli.output import error_exit
from vidpress.config import VidpressConfig, build_job_config
from vidpress.config.profiles import (
    ProfileError,
    ProfileNotFoundError,
    apply_profile,
    load_profile,
)
from vidpress.policy.types import EncodeJobConfig

_ENCODER_CHOICES = ["hardware", "software", "gpu", "cpu"]

_JOB_OPTIONS = [
    click.option(
        "--profile",
        default=None,
        help="Job profile from ~/.vidpress/profiles/ to start from.",
    ),
    click.option(
        "--fps", type=click.IntRange(min=1), default=None, help="Output frame rate."
    ),
    click.option(
        "--resolution",
        "-r",
        default=None,
        help="Resolution tier: 4k, 2k, 1080p, 720p, 480p, 360p, 240p.",
    ),
    click.option(
        "--bitrate",
        "-b",
        type=click.IntRange(min=0),
        default=None,
        help="Video bitrate in kbps (0 = tier default).",
    ),
    click.option(
        "--preset",
        default=None,
        help="Software encoder preset (ultrafast ... veryslow).",
    ),
    click.option(
        "--cq",
        "quality",
        type=click.IntRange(min=0),
        default=None,
        help="Constant quality value (lower is better).",
    ),
    click.option(
        "--width",
        type=click.IntRange(min=0),
        default=0,
        help="Custom output width (requires --height, overrides --resolution).",
    ),
    click.option(
        "--height",
        type=click.IntRange(min=0),
        default=0,
        help="Custom output height (requires --width, overrides --resolution).",
    ),
    click.option(
        "--encoder",
        "-e",
        type=click.Choice(_ENCODER_CHOICES, case_sensitive=False),
        default=None,
        help="Encoder: hardware (NVENC) or software.",
    ),
    click.option(
        "--output-extension",
        "-x",
        default=None,
        help="Output container extension, e.g. .mp4 or .mkv.",
    ),
]


def job_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Attach the shared job options to a command."""
    for option in reversed(_JOB_OPTIONS):
        func = option(func)
    return func


def job_from_options(
    config: VidpressConfig,
    *,
    profile: str | None,
    reverse: bool = False,
    **options: Any,
) -> EncodeJobConfig:
    """Build the job for a command invocation.

    Exits with CONFIG_ERROR or PROFILE_NOT_FOUND when the options or the
    profile are invalid.
    """
    defaults = config.defaults
    if profile:
        try:
            defaults = apply_profile(defaults, load_profile(profile))
        except ProfileNotFoundError as e:
            error_exit(str(e), ExitCode.PROFILE_NOT_FOUND)
        except (ProfileError, ValueError) as e:
            error_exit(str(e), ExitCode.CONFIG_ERROR)

    try:
        return build_job_config(defaults, reverse=reverse, **options)
    except ValueError as e:
        error_exit(str(e), ExitCode.CONFIG_ERROR)
