# SPDX-License-Identifier: MIT

import logging
import sys
from pathlib import Path
from typing import Any, Optional

import pandas as pd
import pendulum

from timegantt.error import InputReadError, SchemaError
from timegantt.model.column import (
    OPTIONAL_COLUMNS,
    REQUIRED_COLUMNS,
    UNKNOWN_VALUE,
    Column,
)
from timegantt.model.interval import Interval
from timegantt.time import datetime_from_str_in_tz, now_in_tz

logger = logging.getLogger(__name__)


def load_table(input_path: Optional[Path], timezone: str) -> pd.DataFrame:
    """
    Read time-tracked intervals from a CSV file, or from stdin.

    Optional task columns are added when absent and their missing values become
    "unknown". A missing end timestamp becomes the current time. Timestamps are
    parsed into `timezone`.

    Args:
        input_path: CSV file to read, `None` or "-" for stdin
        timezone: IANA timezone naive timestamps are interpreted in

    Raises:
        InputReadError: If the input cannot be read or is not CSV
        SchemaError: If a required column or a start timestamp is missing or
            a timestamp cannot be parsed
    """
    df = _read_csv(input_path)

    for column in REQUIRED_COLUMNS:
        if column not in df.columns:
            raise SchemaError(
                f"Required column '{column}' is missing from {_source_name(input_path)}"
            )

    df = df.copy()
    for column in OPTIONAL_COLUMNS:
        if column not in df.columns:
            df[column] = UNKNOWN_VALUE
        else:
            df[column] = df[column].astype(object).where(
                df[column].notna(), UNKNOWN_VALUE
            )
            df[column] = df[column].astype(str)

    now = now_in_tz(timezone)
    # object dtype keeps pendulum instances instead of numpy datetimes
    df[Column.START] = pd.Series(
        [
            _parse_timestamp(value, Column.START, row, timezone, default=None)
            for row, value in enumerate(df[Column.START])
        ],
        index=df.index,
        dtype=object,
    )
    df[Column.END] = pd.Series(
        [
            _parse_timestamp(value, Column.END, row, timezone, default=now)
            for row, value in enumerate(df[Column.END])
        ],
        index=df.index,
        dtype=object,
    )

    logger.debug("loaded %d rows from %s", len(df), _source_name(input_path))
    return df


def _read_csv(input_path: Optional[Path]) -> pd.DataFrame:
    source: Any = input_path
    if input_path is None or str(input_path) == "-":
        source = sys.stdin
    try:
        # Timestamps stay strings; pendulum parses them below.
        return pd.read_csv(
            source,
            dtype={Column.START: str, Column.END: str},
            keep_default_na=True,
        )
    except FileNotFoundError as e:
        raise InputReadError(f"Input file '{input_path}' does not exist") from e
    except pd.errors.EmptyDataError as e:
        raise InputReadError(f"{_source_name(input_path)} is empty") from e
    except (OSError, UnicodeDecodeError, pd.errors.ParserError) as e:
        raise InputReadError(
            f"Could not read CSV from {_source_name(input_path)}: {e}"
        ) from e


def _parse_timestamp(
    value: Any,
    column: str,
    row: int,
    timezone: str,
    default: Optional[pendulum.DateTime],
) -> pendulum.DateTime:
    if pd.isna(value) or str(value).strip() == "":
        if default is None:
            raise SchemaError(f"Row {row + 1}: column '{column}' has no value")
        return default
    try:
        return datetime_from_str_in_tz(str(value).strip(), timezone)
    except ValueError as e:
        raise SchemaError(
            f"Row {row + 1}: column '{column}' has an invalid timestamp '{value}'"
        ) from e


def _source_name(input_path: Optional[Path]) -> str:
    if input_path is None or str(input_path) == "-":
        return "stdin"
    return f"'{input_path}'"


def table_to_intervals(df: pd.DataFrame) -> list[Interval]:
    return [
        Interval(
            start=row[Column.START],
            end=row[Column.END],
            description=row[Column.DESCRIPTION],
            project=row[Column.PROJECT],
            status=row[Column.STATUS],
            tags=row[Column.TAGS],
            uuid=row[Column.UUID],
        )
        for row in df.to_dict("records")
    ]
