"""CLI command for sampling a directory's aspect ratio."""

from __future__ import annotations

from pathlib import Path

import click

from vidpress.cli.exit_codes import ExitCode
from vidpress.cli.executors import build_prober
from vidpress.cli.output import error_exit, fail
from vidpress.exceptions import VidpressError
from vidpress.introspector import sample_directory
from vidpress.policy.types import AggregationMode


@click.command("ratio")
@click.argument("input_dir", type=click.Path(path_type=Path))
@click.option(
    "--mode",
    "-m",
    type=click.Choice([m.value for m in AggregationMode], case_sensitive=False),
    default=AggregationMode.MOST_COMMON.value,
    show_default=True,
    help="How sampled ratios are combined.",
)
@click.pass_context
def ratio_command(ctx: click.Context, input_dir: Path, mode: str) -> None:
    """Print the aspect ratio (width/height) sampled from INPUT_DIR.

    Up to ten files are probed, or 30% of the files in directories
    holding more than fifty.
    """
    config = ctx.obj["config"]

    if not input_dir.is_dir():
        error_exit(f"Directory not found: {input_dir}", ExitCode.TARGET_NOT_FOUND)

    try:
        ratio = sample_directory(input_dir, mode, prober=build_prober(config))
    except VidpressError as e:
        fail(e)

    click.echo(f"{ratio:.3f}")
