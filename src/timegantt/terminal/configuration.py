# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from timegantt import configuration
from timegantt.repository.configuration import CONFIGURATION_REPO
from timegantt.terminal.custom_typer import AliasedTyperGroup
from timegantt.terminal.validate import (
    parse_color_column,
    validate_dimension,
    validate_timezone,
)

app = typer.Typer(
    cls=AliasedTyperGroup,
    help="View and change the default drawing settings",
    no_args_is_help=True,
    add_completion=False,
)


@app.command("view, v")
def view() -> None:
    """Display current configuration settings."""
    config = CONFIGURATION_REPO.get_config()

    console = Console()
    table = Table()
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row("timezone", config["timezone"])
    table.add_row("width", str(config["width"]))
    table.add_row("height", str(config["height"]))
    table.add_row(
        "color_column",
        config["color_column"] if config["color_column"] is not None else "None",
    )
    table.add_row(
        "show_legend",
        "✓ Enabled" if config["show_legend"] else "✗ Disabled",
    )
    table.add_row(
        "show_label",
        "✓ Enabled" if config["show_label"] else "✗ Disabled",
    )
    table.add_row("config_path", str(configuration.APP_CONFIG_PATH))

    console.print(table)


@app.command("set, s", no_args_is_help=True)
def set_config(
    timezone: Annotated[
        Optional[str], typer.Option("--timezone", callback=validate_timezone)
    ] = None,
    width: Annotated[
        Optional[float],
        typer.Option("--width", "-w", callback=validate_dimension),
    ] = None,
    height: Annotated[
        Optional[float],
        typer.Option("--height", "-h", callback=validate_dimension),
    ] = None,
    color: Annotated[
        Optional[str],
        typer.Option("--color", "-c", help="column name, or none to disable"),
    ] = None,
    legend: Annotated[
        Optional[bool], typer.Option("--legend/--no-legend")
    ] = None,
    label: Annotated[Optional[bool], typer.Option("--label/--no-label")] = None,
) -> None:
    """Change default drawing settings."""
    color_column = parse_color_column(color) if color is not None else None

    CONFIGURATION_REPO.update_config(
        timezone=timezone,
        width=width,
        height=height,
        color_column=color_column,
        remove_color_column=color is not None and color_column is None,
        show_legend=legend,
        show_label=label,
    )
    CONFIGURATION_REPO.flush()

    view()


def run() -> None:
    app()
