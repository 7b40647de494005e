# SPDX-License-Identifier: MIT

import datetime
from typing import Any, Optional

import matplotlib.dates as mdates
import pandas as pd
import pendulum

from timegantt.error import SchemaError
from timegantt.model.column import UNKNOWN_VALUE, Column
from timegantt.model.options import GanttOptions
from timegantt.time import hour_of_day

PLOT_COLUMNS = ["x0", "x1", "y0", "y1", "fill", "label", "label_x", "label_y"]


def assemble(df: pd.DataFrame, options: GanttOptions) -> pd.DataFrame:
    """
    Map each interval row to the rectangle drawn for it.

    Timeline layout: x is the instant as a matplotlib date number and every
    rectangle spans y from 0 to 1.

    By-day layout: x is the wall clock hour (0 to 24) in the configured
    timezone, y spans the start date to the next day. Rows are expected to be
    split by day already.

    Returns:
        A DataFrame with columns x0, x1, y0, y1, fill, label, label_x, label_y.
        `fill` is None for every row when colouring is disabled.

    Raises:
        SchemaError: If the colour column does not exist
    """
    if options.color_column is not None and options.color_column not in df.columns:
        raise SchemaError(
            f"Color column '{options.color_column}' does not exist, "
            f"available columns: {', '.join(str(c) for c in df.columns)}"
        )

    rows: list[dict[str, Any]] = []
    for row in df.to_dict("records"):
        start: pendulum.DateTime = row[Column.START].in_tz(options.timezone)
        end: pendulum.DateTime = row[Column.END].in_tz(options.timezone)
        if options.by_day:
            rectangle = _by_day_rectangle(start, end)
        else:
            rectangle = _timeline_rectangle(start, end)
        rectangle["fill"] = _fill_value(row, options.color_column)
        rectangle["label"] = str(row[Column.DESCRIPTION])
        rectangle["label_x"] = (rectangle["x0"] + rectangle["x1"]) / 2
        rectangle["label_y"] = (rectangle["y0"] + rectangle["y1"]) / 2
        rows.append(rectangle)

    return pd.DataFrame(rows, columns=PLOT_COLUMNS)


def _timeline_rectangle(
    start: pendulum.DateTime, end: pendulum.DateTime
) -> dict[str, Any]:
    return {
        "x0": mdates.date2num(start),
        "x1": mdates.date2num(end),
        "y0": 0.0,
        "y1": 1.0,
    }


def _by_day_rectangle(
    start: pendulum.DateTime, end: pendulum.DateTime
) -> dict[str, Any]:
    day = start.date()
    y0 = mdates.date2num(datetime.datetime(day.year, day.month, day.day))
    return {
        "x0": hour_of_day(start, day),
        "x1": hour_of_day(end, day),
        "y0": y0,
        "y1": y0 + 1.0,
    }


def _fill_value(row: dict[str, Any], color_column: Optional[str]) -> Optional[str]:
    if color_column is None:
        return None
    value = row[color_column]
    if pd.isna(value):
        return UNKNOWN_VALUE
    return str(value)
