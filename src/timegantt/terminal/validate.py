# SPDX-License-Identifier: MIT

from typing import Optional

import typer

from timegantt.time import is_valid_timezone

# Values of --color that disable colouring
NO_COLOR_VALUES = {"none", "null"}


def validate_timezone(timezone: Optional[str]) -> Optional[str]:
    if timezone is None:
        return None
    if not is_valid_timezone(timezone):
        raise typer.BadParameter(f"Unknown timezone '{timezone}'")
    return timezone


def validate_dimension(dimension: Optional[float]) -> Optional[float]:
    if dimension is None:
        return None
    if dimension <= 0:
        raise typer.BadParameter("Image dimensions must be positive")
    return dimension


def parse_color_column(color: str) -> Optional[str]:
    if color.lower() in NO_COLOR_VALUES:
        return None
    return color
