"""CLI command for merging a directory of videos."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from vidpress.cli.exit_codes import ExitCode
from vidpress.cli.executors import build_merger
from vidpress.cli.options import job_from_options, job_options
from vidpress.cli.output import error_exit, fail
from vidpress.exceptions import VidpressError

logger = logging.getLogger(__name__)


@click.command("merge")
@click.argument("input_dir", type=click.Path(path_type=Path))
@click.option(
    "--output",
    "-o",
    "output_path",
    type=click.Path(path_type=Path),
    required=True,
    help="Merged output file.",
)
@click.option(
    "--reverse",
    is_flag=True,
    default=False,
    help="Merge files in descending natural order.",
)
@job_options
@click.pass_context
def merge_command(
    ctx: click.Context,
    input_dir: Path,
    output_path: Path,
    reverse: bool,
    **options,
) -> None:
    """Merge every video in INPUT_DIR into one file.

    Files are ordered by natural sort (ep2 before ep10), re-encoded to a
    shared frame size picked from a sample of their aspect ratios, then
    concatenated.

    Examples:

        vidpress merge ./episodes -o season.mp4 -r 720p
    """
    config = ctx.obj["config"]

    if not input_dir.is_dir():
        error_exit(f"Directory not found: {input_dir}", ExitCode.TARGET_NOT_FOUND)

    job = job_from_options(config, reverse=reverse, **options)

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        error_exit(
            f"Failed to create output directory: {e}", ExitCode.OPERATION_FAILED
        )

    try:
        merger = build_merger(config)
        result = merger.merge(input_dir, output_path, job, verbose=True)
    except VidpressError as e:
        fail(e)
    except KeyboardInterrupt:
        logger.info("Merge interrupted: %s", input_dir)
        error_exit("Merge aborted by user", ExitCode.INTERRUPTED)

    click.echo(
        f"Merge complete, output: {result.output_path} "
        f"({result.width}x{result.height}, {result.segment_count} segments)"
    )
