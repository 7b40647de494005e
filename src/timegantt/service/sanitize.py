# SPDX-License-Identifier: MIT

import logging

import pandas as pd

from timegantt.model.column import Column

logger = logging.getLogger(__name__)


def sanitize(df: pd.DataFrame) -> pd.DataFrame:
    """
    Drop intervals that do not end after they start, then drop rows repeating
    an earlier start timestamp, keeping the first occurrence.
    """
    is_positive = pd.Series(
        [start < end for start, end in zip(df[Column.START], df[Column.END])],
        index=df.index,
        dtype=bool,
    )
    positive = df[is_positive]
    distinct = positive.drop_duplicates(subset=[Column.START], keep="first")

    dropped_invalid = len(df) - len(positive)
    dropped_duplicates = len(positive) - len(distinct)
    if dropped_invalid > 0:
        logger.debug("dropped %d intervals with end <= start", dropped_invalid)
    if dropped_duplicates > 0:
        logger.debug("dropped %d intervals with a duplicate start", dropped_duplicates)

    return distinct.reset_index(drop=True)
