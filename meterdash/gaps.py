from __future__ import annotations
import logging

import numpy as np
import pandas as pd

from . import canon, utils
from .types import ReadingFrame

logger = logging.getLogger(__name__)


def _zero_rows(
    after: pd.Timestamp, count: int, interval: pd.Timedelta, columns: pd.Index
) -> pd.DataFrame:
    idx = pd.date_range(start=after + interval, periods=count, freq=interval)
    idx.name = canon.INDEX_NAME
    return pd.DataFrame(0.0, index=idx, columns=columns)


def fill_gaps(
    df: ReadingFrame, interval_s: float = canon.DEFAULT_GAP_INTERVAL_S
) -> ReadingFrame:
    """
    Insert zero-valued rows at a fixed cadence wherever two consecutive
    readings are more than `interval_s` apart.

    For a gap delta > T, floor(delta / T) rows are placed at t + k*T,
    k = 1..floor(delta / T). Every numeric field on those rows is 0, not NaN,
    so the chart flatlines through the gap. When delta is an exact multiple
    of T the last synthetic row lands on the next reading's timestamp and
    sits just before it.

    Real rows are never altered or dropped. Input must be sorted ascending.
    """
    if interval_s <= 0:
        raise ValueError("interval_s must be positive")

    if len(df) < 2:
        return utils.as_reading_frame(df)

    interval = pd.Timedelta(seconds=interval_s)
    idx = pd.DatetimeIndex(df.index)
    counts = utils.gap_counts(idx, interval)
    gap_pos = np.flatnonzero(counts)
    if len(gap_pos) == 0:
        return utils.as_reading_frame(df)

    pieces: list[pd.DataFrame] = []
    start = 0
    for pos in gap_pos:
        pieces.append(df.iloc[start : pos + 1])
        pieces.append(_zero_rows(idx[pos], int(counts[pos]), interval, df.columns))
        start = pos + 1
    pieces.append(df.iloc[start:])

    out = pd.concat(pieces)
    out.index.name = canon.INDEX_NAME
    logger.debug(
        "Filled %d gaps with %d synthetic rows", len(gap_pos), int(counts.sum())
    )
    return utils.as_reading_frame(out)
