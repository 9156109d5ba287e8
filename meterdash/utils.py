# meterdash/utils.py
from __future__ import annotations
from datetime import datetime, timezone
from typing import cast
from zoneinfo import ZoneInfo

import numpy as np
import pandas as pd

from . import canon
from .types import ReadingFrame


def to_utc_index(ts: pd.Series | list, name: str = canon.INDEX_NAME) -> pd.DatetimeIndex:
    """Parse ISO-8601 timestamps to a UTC DatetimeIndex. Naive values are taken as UTC."""
    idx = pd.DatetimeIndex(pd.to_datetime(ts, utc=True, format="ISO8601"))
    idx.name = name
    return idx


def iso_instant(dt: datetime) -> str:
    """ISO-8601 instant in UTC with a 'Z' suffix, e.g. 2025-01-01T00:00:00.000Z."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt = dt.astimezone(timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"


def format_instant(
    ts: datetime | pd.Timestamp,
    tz: str = canon.DEFAULT_TZ,
    fmt: str = canon.DEFAULT_LABEL_FORMAT,
) -> str:
    t = pd.Timestamp(ts)
    if t.tz is None:
        t = t.tz_localize("UTC")
    return t.tz_convert(ZoneInfo(tz)).strftime(fmt)


def format_labels(
    idx: pd.DatetimeIndex,
    tz: str = canon.DEFAULT_TZ,
    fmt: str = canon.DEFAULT_LABEL_FORMAT,
) -> list[str]:
    """Render each instant of a tz-aware index as a display label."""
    if len(idx) == 0:
        return []
    local = pd.DatetimeIndex(idx).tz_convert(ZoneInfo(tz))
    return [str(s) for s in local.strftime(fmt)]


def gap_counts(idx: pd.DatetimeIndex, interval: pd.Timedelta) -> np.ndarray:
    """
    Number of synthetic slots owed after each row: floor(delta / interval)
    where delta > interval, else 0. Length is len(idx) - 1.
    """
    if len(idx) < 2:
        return np.zeros(0, dtype=np.int64)
    ts = pd.DatetimeIndex(idx)
    # Timedelta arithmetic keeps this independent of the index resolution
    deltas = ts[1:] - ts[:-1]
    slots = np.asarray(deltas // interval, dtype=np.int64)
    return np.where(np.asarray(deltas > interval), slots, 0).astype(np.int64)


def empty_reading_frame() -> ReadingFrame:
    """Return an empty ReadingFrame with the canonical columns and a UTC index."""
    idx = pd.DatetimeIndex([], tz="UTC", name=canon.INDEX_NAME)
    out = pd.DataFrame(columns=canon.READING_COLS, index=idx, dtype=float)
    out.__class__ = ReadingFrame
    return cast(ReadingFrame, out)


def as_reading_frame(df: pd.DataFrame) -> ReadingFrame:
    out = df.copy()
    out.__class__ = ReadingFrame
    return cast(ReadingFrame, out)
