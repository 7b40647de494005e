# SPDX-License-Identifier: MIT

from typing import cast

import pendulum


def now_in_tz(timezone: str) -> pendulum.DateTime:
    return pendulum.now(timezone).set(microsecond=0)


def is_valid_timezone(timezone: str) -> bool:
    try:
        pendulum.timezone(timezone)
    except ValueError:
        return False
    return True


def datetime_from_str_in_tz(value: str, timezone: str) -> pendulum.DateTime:
    """
    Parse an ISO 8601 timestamp (extended or basic form) into the given timezone.

    Naive timestamps are interpreted in `timezone`, aware ones are converted to it.
    The result is truncated to whole seconds.
    """
    parsed = pendulum.parse(value, tz=timezone)
    if not isinstance(parsed, pendulum.DateTime):
        raise ValueError(f"'{value}' is not a datetime")
    return parsed.in_tz(timezone).set(microsecond=0)


def next_midnight(datetime: pendulum.DateTime) -> pendulum.DateTime:
    """First midnight strictly after `datetime`, in its own timezone."""
    return cast(pendulum.DateTime, datetime.start_of("day").add(days=1))


def is_midnight(datetime: pendulum.DateTime) -> bool:
    return datetime == datetime.start_of("day")


def closing_date(datetime: pendulum.DateTime) -> pendulum.Date:
    """
    Calendar date an interval ending at `datetime` belongs to.

    An end exactly at midnight closes the previous day.
    """
    if is_midnight(datetime):
        return datetime.subtract(days=1).date()
    return datetime.date()


def hour_of_day(datetime: pendulum.DateTime, day: pendulum.Date) -> float:
    """
    Wall clock time of `datetime` in hours, as read on the clock of its timezone.

    A midnight after `day` closes that day and is hour 24.
    """
    if is_midnight(datetime) and datetime.date() > day:
        return 24.0
    return datetime.hour + datetime.minute / 60 + datetime.second / 3600
