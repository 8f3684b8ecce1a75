"""CLI commands for job profile management."""

import click

from vidpress.cli.exit_codes import ExitCode
from vidpress.cli.output import error_exit
from vidpress.config.profiles import (
    ProfileError,
    ProfileNotFoundError,
    get_profiles_directory,
    list_profiles,
    load_profile,
)


@click.group("profiles")
def profiles_group() -> None:
    """Manage job profiles."""
    pass


@profiles_group.command("list")
def list_profiles_cmd() -> None:
    """List available job profiles.

    Profiles are stored in ~/.vidpress/profiles/ as YAML files.
    """
    profile_names = list_profiles()

    if not profile_names:
        click.echo(f"No profiles found in {get_profiles_directory()}")
        click.echo("Example: ~/.vidpress/profiles/phone.yaml")
        return

    for name in profile_names:
        try:
            profile = load_profile(name)
        except ProfileError as e:
            click.echo(f"  {name:<20} (invalid: {e})")
            continue
        click.echo(f"  {name:<20} {profile.description or ''}".rstrip())


@profiles_group.command("show")
@click.argument("name")
def show_profile_cmd(name: str) -> None:
    """Show the settings a profile applies."""
    try:
        profile = load_profile(name)
    except ProfileNotFoundError as e:
        error_exit(str(e), ExitCode.PROFILE_NOT_FOUND)
    except ProfileError as e:
        error_exit(str(e), ExitCode.CONFIG_ERROR)

    click.echo(f"Profile: {profile.name}")
    if profile.description:
        click.echo(f"Description: {profile.description}")
    for key, value in profile.job_overrides().items():
        click.echo(f"  {key}: {value}")
