"""CLI module for vidpress."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from vidpress.cli.exit_codes import ExitCode
from vidpress.cli.output import error_exit
from vidpress.config import build_logging_config, get_config
from vidpress.config.models import VidpressConfig
from vidpress.logging import configure_logging

logger = logging.getLogger(__name__)


def _configure_logging(
    config: VidpressConfig,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """Configure logging from the loaded config and CLI options.

    Args:
        config: Loaded configuration.
        log_level: Override log level (debug, info, warning, error).
        log_file: Override log file path.
        log_json: Use JSON log format.
    """
    configure_logging(
        build_logging_config(
            config.logging,
            level=log_level,
            file=log_file,
            format="json" if log_json else None,
        )
    )


@click.group()
@click.version_option(package_name="vidpress")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Config file (default: ~/.vidpress/config.toml).",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Override log level (default: info).",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Override log file path.",
)
@click.option(
    "--log-json",
    is_flag=True,
    default=False,
    help="Use JSON log format.",
)
@click.pass_context
def main(
    ctx: click.Context,
    config_path: Path | None,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """vidpress - Compress and merge videos with ffmpeg."""
    ctx.ensure_object(dict)

    # Preserve a config passed in by tests
    if "config" not in ctx.obj:
        try:
            ctx.obj["config"] = get_config(config_path)
        except ValueError as e:
            error_exit(f"Invalid configuration: {e}", ExitCode.CONFIG_ERROR)

    _configure_logging(ctx.obj["config"], log_level, log_file, log_json)
    logger.debug("vidpress starting: command=%s", ctx.invoked_subcommand)


# Defer import to avoid circular dependency
def _register_commands():
    from vidpress.cli.compress import compress_command
    from vidpress.cli.merge import merge_command
    from vidpress.cli.profiles import profiles_group
    from vidpress.cli.ratio import ratio_command

    main.add_command(compress_command)
    main.add_command(merge_command)
    main.add_command(profiles_group)
    main.add_command(ratio_command)


_register_commands()
