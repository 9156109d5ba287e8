from __future__ import annotations
import logging
from typing import Any, Iterable, Mapping, Optional

import pandas as pd
from pydantic import ValidationError

from . import canon, utils, validate
from .exceptions import IngestError
from .types import Reading, ReadingFrame, UsageInterval

logger = logging.getLogger(__name__)


def _parse_readings(records: Iterable[Mapping[str, Any]]) -> list[Reading]:
    out: list[Reading] = []
    for i, rec in enumerate(records):
        try:
            out.append(Reading.model_validate(rec))
        except ValidationError as e:
            raise IngestError(f"Reading {i} is malformed: {e}") from e
    return out


def from_records(records: Optional[Iterable[Mapping[str, Any]]]) -> ReadingFrame:
    """
    Normalise the readings endpoint payload into a ReadingFrame:
      - index: tz-aware UTC 'timestamp', order preserved
      - columns: every canonical reading field, NaN where absent or null
    Unknown keys are dropped.
    """
    if not records:
        return utils.empty_reading_frame()

    readings = _parse_readings(records)
    rows = [r.model_dump(mode="json") for r in readings]
    df = pd.DataFrame.from_records(rows, columns=[canon.INDEX_NAME, *canon.READING_COLS])

    idx = utils.to_utc_index(df[canon.INDEX_NAME])
    df = df.drop(columns=[canon.INDEX_NAME]).astype(float)
    df.index = idx

    validate.assert_readings(df)
    logger.debug("Ingested %d readings", len(df))
    return utils.as_reading_frame(df)


def from_readings(readings: Iterable[Reading]) -> ReadingFrame:
    """Build a ReadingFrame from already-validated Reading models."""
    return from_records([r.model_dump() for r in readings])


def usage_from_records(
    records: Optional[Iterable[Mapping[str, Any]]],
) -> list[UsageInterval]:
    """Validate usage-interval rows. None or an empty payload yields []."""
    if not records:
        return []
    out: list[UsageInterval] = []
    for i, rec in enumerate(records):
        try:
            out.append(UsageInterval.model_validate(rec))
        except ValidationError as e:
            raise IngestError(f"Usage row {i} is malformed: {e}") from e
    return out
