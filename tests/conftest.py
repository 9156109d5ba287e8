import pandas as pd
import pytest

from meterdash import ingest

TZ = "UTC"


@pytest.fixture
def minute_rng():
    return pd.date_range("2025-01-01", periods=5, freq="1min", tz=TZ)


def _record(ts, **fields):
    return {"timestamp": ts.isoformat(), **fields}


@pytest.fixture
def record():
    return _record


@pytest.fixture
def avg_frame():
    """Two readings carrying only the aggregate fields."""
    return ingest.from_records(
        [
            {"timestamp": "2025-01-01T00:00:00Z", "avg_current": 1, "avg_voltage": 3},
            {"timestamp": "2025-01-01T00:01:00Z", "avg_current": 2, "avg_voltage": 4},
        ]
    )


@pytest.fixture
def phase_frame(minute_rng):
    """
    Regular one-minute readings:
      - phase1/phase3 report kW, phase2 never does
      - phase1 voltage and current on every row
      - others_tkw only
    """
    rows = []
    for i, ts in enumerate(minute_rng):
        rows.append(
            _record(
                ts,
                phase1_kw=1.0 + i,
                phase3_kw=3.0 + i,
                phase1_voltage=230.0,
                phase1_current=5.0,
                others_tkw=4.0 + i,
            )
        )
    return ingest.from_records(rows)
