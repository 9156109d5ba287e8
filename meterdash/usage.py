from __future__ import annotations
import math
from typing import Any, Iterable

from . import canon, utils
from .types import DisplayRow, UsageInterval


def _is_number(v: Any) -> bool:
    if isinstance(v, bool) or not isinstance(v, (int, float)):
        return False
    return math.isfinite(v)


def format_duration(seconds: float) -> str:
    """Seconds to HH:MM:SS. Hours are not wrapped at 24."""
    hrs = int(seconds // 3600)
    mins = int((seconds % 3600) // 60)
    secs = int(seconds % 60)
    return f"{hrs:02d}:{mins:02d}:{secs:02d}"


def format_interval(
    interval: UsageInterval,
    *,
    tz: str = canon.DEFAULT_TZ,
    label_format: str = canon.DEFAULT_LABEL_FORMAT,
) -> DisplayRow:
    ongoing = interval.end_time is None
    end = (
        canon.ONGOING
        if interval.end_time is None
        else utils.format_instant(interval.end_time, tz, label_format)
    )
    usage = (
        format_duration(interval.usage_time)
        if _is_number(interval.usage_time)
        else canon.NOT_AVAILABLE
    )
    return DisplayRow(
        id=str(interval.id),
        device_id=str(interval.device_id),
        power_source=interval.power_source or "",
        start_time=utils.format_instant(interval.start_time, tz, label_format),
        end_time=end,
        usage_time=usage,
        ongoing=ongoing,
    )


def format_intervals(
    intervals: Iterable[UsageInterval],
    *,
    tz: str = canon.DEFAULT_TZ,
    label_format: str = canon.DEFAULT_LABEL_FORMAT,
) -> list[DisplayRow]:
    return [format_interval(i, tz=tz, label_format=label_format) for i in intervals]
