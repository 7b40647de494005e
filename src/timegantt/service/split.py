# SPDX-License-Identifier: MIT

import logging
from typing import Any

import pandas as pd
import pendulum

from timegantt.error import InvalidIntervalError
from timegantt.model.column import Column
from timegantt.model.interval import Interval
from timegantt.service.loader import table_to_intervals
from timegantt.time import closing_date, next_midnight

logger = logging.getLogger(__name__)

# Gap left between the end of one day's piece and the start of the next.
# Timestamps are loaded at second resolution, so one second never inverts a piece.
BOUNDARY_EPSILON = pendulum.duration(seconds=1)


def is_mono_day(interval: Interval, timezone: str) -> bool:
    start = interval.start.in_tz(timezone)
    end = interval.end.in_tz(timezone)
    return start.date() == closing_date(end)


def split_interval(
    interval: Interval,
    timezone: str,
    epsilon: pendulum.Duration = BOUNDARY_EPSILON,
) -> list[Interval]:
    """
    Split an interval into consecutive pieces that never cross midnight.

    Day boundaries are the midnights of `timezone`. Each piece but the last ends
    `epsilon` before the next midnight and the following piece starts `epsilon`
    later, at that midnight. The last piece ends exactly at the original end.

    An end exactly at midnight closes the previous day, so no zero-length
    trailing piece is produced: 23:00 to 00:00 is returned as a single interval.

    Args:
        interval: The interval to split
        timezone: IANA timezone name defining the day boundaries
        epsilon: Boundary gap between consecutive pieces (defaults to 1 second)

    Returns:
        The pieces in chronological order; `[interval]` itself when it is mono-day

    Raises:
        InvalidIntervalError: If the interval does not end after it starts
    """
    if interval.start >= interval.end:
        raise InvalidIntervalError(
            f"Interval '{interval.description}' ({interval.uuid}) does not end "
            f"after it starts: {interval.start.isoformat()} >= "
            f"{interval.end.isoformat()}"
        )

    start = interval.start.in_tz(timezone)
    end = interval.end.in_tz(timezone)
    last_date = closing_date(end)

    if start.date() == last_date:
        return [interval]

    pieces: list[Interval] = []
    current_start = start
    while current_start.date() < last_date:
        current_end = max(current_start, next_midnight(current_start) - epsilon)
        pieces.append(interval._replace(start=current_start, end=current_end))
        current_start = current_end + epsilon
    pieces.append(interval._replace(start=current_start, end=end))

    logger.debug(
        "split '%s' from %s to %s into %d days",
        interval.description,
        start.isoformat(),
        end.isoformat(),
        len(pieces),
    )
    return pieces


def split_by_day(intervals: list[Interval], timezone: str) -> list[Interval]:
    """
    Split every multi-day interval into mono-day pieces.

    Mono-day intervals come first, in input order, followed by the pieces of the
    multi-day intervals.
    """
    mono_day, pieces = _partition(intervals, timezone)
    return [intervals[i] for i in mono_day] + [piece for _, piece in pieces]


def split_table(df: pd.DataFrame, timezone: str) -> pd.DataFrame:
    """
    Table version of `split_by_day`.

    Each piece copies every column of its source row, only the start and end
    timestamps change.
    """
    records = df.to_dict("records")
    mono_day, pieces = _partition(table_to_intervals(df), timezone)

    rows: list[dict[str, Any]] = [records[i] for i in mono_day]
    rows.extend(
        {**records[i], Column.START: piece.start, Column.END: piece.end}
        for i, piece in pieces
    )
    split = pd.DataFrame(rows, columns=df.columns)
    for column in (Column.START, Column.END):
        split[column] = pd.Series(
            [row[column] for row in rows], index=split.index, dtype=object
        )
    return split


def _partition(
    intervals: list[Interval], timezone: str
) -> tuple[list[int], list[tuple[int, Interval]]]:
    """
    Positions of the mono-day intervals, and the day pieces of the others
    paired with the position of the interval they come from.
    """
    mono_day: list[int] = []
    pieces: list[tuple[int, Interval]] = []
    multi_day = 0
    for i, interval in enumerate(intervals):
        if is_mono_day(interval, timezone):
            mono_day.append(i)
            continue
        multi_day += 1
        pieces.extend((i, piece) for piece in split_interval(interval, timezone))

    logger.info(
        "%d intervals span a single day, %d multi-day intervals became %d pieces",
        len(mono_day),
        multi_day,
        len(pieces),
    )
    return mono_day, pieces
