from __future__ import annotations
from datetime import datetime
from typing import Optional, cast

import pandas as pd

from . import canon, exceptions


def assert_readings(df: pd.DataFrame) -> None:
    if df.index.name != canon.INDEX_NAME:
        raise exceptions.IngestError(f"Index must be '{canon.INDEX_NAME}'.")
    if not isinstance(df.index, pd.DatetimeIndex):
        raise exceptions.IngestError("Index must be a DatetimeIndex.")
    tz_index = cast(pd.DatetimeIndex, df.index)
    if tz_index.tz is None:
        raise exceptions.IngestError("Index must be tz-aware.")
    # equal timestamps are allowed, going backwards is not
    if not df.index.is_monotonic_increasing:
        raise exceptions.IngestError("Readings must be sorted ascending by timestamp.")


def check_query(
    device_id: Optional[str],
    start: Optional[datetime],
    end: Optional[datetime],
) -> None:
    """Device ID and both ends of the date range must be set before fetching."""
    exceptions.require(
        bool(device_id and device_id.strip()) and start is not None and end is not None,
        "Device ID and date range are required.",
        exceptions.SelectionError,
    )


def check_device(device_id: Optional[str]) -> None:
    exceptions.require(
        bool(device_id and device_id.strip()),
        "Device ID is required.",
        exceptions.SelectionError,
    )
