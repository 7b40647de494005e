# SPDX-License-Identifier: MIT

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from timegantt.configuration import Configuration
from timegantt.error import GanttError
from timegantt.model.options import GanttOptions
from timegantt.repository.configuration import CONFIGURATION_REPO
from timegantt.service.gantt import draw_gantt
from timegantt.terminal.validate import (
    parse_color_column,
    validate_dimension,
    validate_timezone,
)
from timegantt.time import is_valid_timezone
from timegantt.view.render import check_output_path

err_console = Console(stderr=True)

app = typer.Typer(
    help="Draw a Gantt chart of time-tracked intervals read from CSV",
    add_completion=False,
)


@app.command()
def draw(
    output: Annotated[
        Optional[Path],
        typer.Option(
            "--output",
            "-o",
            help="Output Gantt image file, the format follows the suffix",
        ),
    ] = None,
    input_file: Annotated[
        Optional[Path],
        typer.Option(
            "--input",
            "-i",
            help="Input CSV file. If unset, stdin is read instead",
        ),
    ] = None,
    width: Annotated[
        Optional[float],
        typer.Option(
            "--width",
            "-w",
            callback=validate_dimension,
            help="Output image width in inches  [default: 16]",
        ),
    ] = None,
    height: Annotated[
        Optional[float],
        typer.Option(
            "--height",
            "-h",
            callback=validate_dimension,
            help="Output image height in inches  [default: 9]",
        ),
    ] = None,
    color: Annotated[
        Optional[str],
        typer.Option(
            "--color",
            "-c",
            help="Color column, or none  [default: task_project]",
        ),
    ] = None,
    timezone: Annotated[
        Optional[str],
        typer.Option(
            "--timezone",
            callback=validate_timezone,
            help="Timezone whose midnights split days  [default: Europe/Paris]",
        ),
    ] = None,
    no_legend: Annotated[
        bool, typer.Option("--no-legend", help="Always hide the legend")
    ] = False,
    no_label: Annotated[
        bool, typer.Option("--no-label", help="Disable task description labels")
    ] = False,
    by_day: Annotated[
        bool,
        typer.Option("--by-day", help="Display intervals by day, split at midnight"),
    ] = False,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Show debug logging")
    ] = False,
) -> None:
    """
    Draw a Gantt chart.

    Settings not given on the command line come from the configuration file.
    """
    configure_logging(verbose)

    config = CONFIGURATION_REPO.get_config()
    options = build_options(
        config,
        input_path=input_file,
        output_path=output,
        width=width,
        height=height,
        color=color,
        timezone=timezone,
        no_legend=no_legend,
        no_label=no_label,
        by_day=by_day,
    )

    try:
        check_output_path(options.output_path)
        draw_gantt(options)
    except GanttError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]", soft_wrap=True)
        raise typer.Exit(1)


def build_options(
    config: Configuration,
    input_path: Optional[Path] = None,
    output_path: Optional[Path] = None,
    width: Optional[float] = None,
    height: Optional[float] = None,
    color: Optional[str] = None,
    timezone: Optional[str] = None,
    no_legend: bool = False,
    no_label: bool = False,
    by_day: bool = False,
) -> GanttOptions:
    """Layer command line arguments over the configuration file settings."""
    color_column = config["color_column"]
    if color is not None:
        color_column = parse_color_column(color)

    effective_timezone = timezone if timezone is not None else config["timezone"]
    if not is_valid_timezone(effective_timezone):
        raise typer.BadParameter(
            f"Unknown timezone '{effective_timezone}' in the configuration file"
        )

    return GanttOptions(
        input_path=input_path,
        output_path=output_path,
        width=width if width is not None else config["width"],
        height=height if height is not None else config["height"],
        color_column=color_column,
        timezone=effective_timezone,
        show_legend=config["show_legend"] and not no_legend,
        show_label=config["show_label"] and not no_label,
        by_day=by_day,
    )


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )
    # matplotlib is chatty at debug level
    logging.getLogger("matplotlib").setLevel(logging.WARNING)


def run() -> None:
    app()
