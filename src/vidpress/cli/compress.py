"""CLI command for compressing a single video."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

import click

from vidpress.cli.exit_codes import ExitCode
from vidpress.cli.executors import build_compressor
from vidpress.cli.options import job_from_options, job_options
from vidpress.cli.output import error_exit, fail
from vidpress.exceptions import VidpressError

logger = logging.getLogger(__name__)


def default_output_path(
    input_path: Path, extension: str, now: datetime | None = None
) -> Path:
    """Output name used when --output is omitted: <stem>_<HHMMSS><ext>.

    The file lands in the current directory.
    """
    timestamp = (now or datetime.now()).strftime("%H%M%S")
    return Path(f"{input_path.stem}_{timestamp}.{extension.lstrip('.')}")


@click.command("compress")
@click.argument("input_path", type=click.Path(path_type=Path))
@click.option(
    "--output",
    "-o",
    "output_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Output file (default: <name>_<HHMMSS><ext> in the current directory).",
)
@job_options
@click.pass_context
def compress_command(
    ctx: click.Context,
    input_path: Path,
    output_path: Path | None,
    **options,
) -> None:
    """Compress INPUT_PATH with ffmpeg.

    Examples:

        # Hardware HEVC at 720p
        vidpress compress movie.mov -r 720p

        # Software x264 into a Matroska file
        vidpress compress movie.mov -e software -x .mkv -o out/movie.mkv
    """
    config = ctx.obj["config"]

    if not input_path.is_file():
        error_exit(f"Input file not found: {input_path}", ExitCode.TARGET_NOT_FOUND)

    job = job_from_options(config, **options)

    if output_path is None:
        output_path = default_output_path(input_path, job.output_extension)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        error_exit(
            f"Failed to create output directory: {e}", ExitCode.OPERATION_FAILED
        )

    try:
        compressor = build_compressor(config)
        stats = compressor.compress(input_path, output_path, job, verbose=True)
    except VidpressError as e:
        fail(e)
    except KeyboardInterrupt:
        logger.info("Compression interrupted: %s", input_path)
        error_exit("Compression aborted by user", ExitCode.INTERRUPTED)

    click.echo("Compression completed!")
    click.echo(stats.summary())
    click.echo(f"Output: {stats.output_path}")
