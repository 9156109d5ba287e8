"""Tests for turning readings and a filter selection into chart series."""

import pytest

from meterdash import canon, ingest, series
from meterdash.config import DashboardConfig
from meterdash.types import FilterSelection


def _labels(chart):
    return [s.label for s in chart.series]


def test_no_selection_uses_averages(avg_frame):
    chart = series.build_series(avg_frame)
    assert len(chart.series) == 2
    cur, volt = chart.series
    assert (cur.label, cur.values, cur.axis) == ("Average Current (A)", [1.0, 2.0], "current")
    assert (volt.label, volt.values, volt.axis) == ("Average Voltage (V)", [3.0, 4.0], "voltage")
    assert cur.color == canon.AVG_CURRENT_COLOR


def test_parameters_only_skips_absent_phase(phase_frame):
    chart = series.build_series(phase_frame, parameters=["kw"])
    assert _labels(chart) == ["PHASE1 Power (kW)", "PHASE3 Power (kW)"]
    assert all(s.axis == "power" for s in chart.series)
    assert chart.series[0].values == [1.0, 2.0, 3.0, 4.0, 5.0]


def test_parameters_only_follows_selection_order(phase_frame):
    chart = series.build_series(phase_frame, parameters=["current", "voltage"])
    assert _labels(chart) == ["PHASE1 Current (A)", "PHASE1 Voltage (V)"]
    assert [s.axis for s in chart.series] == ["current", "voltage"]


def test_others_only(phase_frame):
    chart = series.build_series(phase_frame, phases=["others"])
    assert _labels(chart) == ["Others TKW"]
    assert chart.series[0].axis == "power"


def test_others_with_other_phase_and_no_parameters(phase_frame):
    # phase rows need parameters, so only the others fields come through
    chart = series.build_series(phase_frame, phases=["phase1", "others"])
    assert _labels(chart) == ["Others TKW"]


def test_phases_without_parameters_is_empty(phase_frame):
    chart = series.build_series(phase_frame, phases=["phase1"])
    assert chart.series == []
    assert len(chart.labels) == len(phase_frame)


def test_general_case_orders_by_phase_then_parameter(phase_frame):
    chart = series.build_series(
        phase_frame, parameters=["voltage", "kw"], phases=["phase3", "others", "phase1"]
    )
    assert _labels(chart) == [
        "Phase 3 Power (kW)",
        "Others TKW",
        "Phase 1 Voltage (V)",
        "Phase 1 Power (kW)",
    ]
    assert [s.axis for s in chart.series] == ["power", "power", "voltage", "power"]


def test_general_case_colors(phase_frame):
    chart = series.build_series(phase_frame, parameters=["kw"], phases=["phase1", "others"])
    phase1_kw, others_tkw = chart.series
    assert phase1_kw.color == (60, 60, 132)
    # others_tkw is the third others key, selected second
    assert others_tkw.color == (180, 120, 120)


def test_partially_absent_field_fills_zero():
    df = ingest.from_records(
        [
            {"timestamp": "2025-01-01T00:00:00Z", "phase2_pf": 0.9},
            {"timestamp": "2025-01-01T00:01:00Z"},
            {"timestamp": "2025-01-01T00:02:00Z", "phase2_pf": None},
        ]
    )
    chart = series.build_series(df, parameters=["pf"])
    assert _labels(chart) == ["PHASE2 Power Factor (PF)"]
    assert chart.series[0].values == [0.9, 0.0, 0.0]
    assert chart.series[0].axis == "current"


@pytest.mark.parametrize(
    "param, axis",
    [("kw", "power"), ("voltage", "voltage"), ("current", "current"), ("pf", "current")],
)
def test_parameter_to_axis(param, axis):
    assert series.parameter_to_axis(param) == axis


def test_every_series_matches_label_count(phase_frame):
    chart = series.build_series(
        phase_frame, parameters=list(canon.PARAMETERS), phases=list(canon.ALL_PHASES)
    )
    assert chart.series
    for s in chart.series:
        assert len(s.values) == len(chart.labels) == len(chart.timestamps)
    assert len(set(_labels(chart))) == len(chart.series)


def test_labels_use_display_timezone(avg_frame):
    chart = series.build_series(
        avg_frame, tz="Australia/Brisbane", label_format="%Y-%m-%d %H:%M"
    )
    assert chart.labels == ["2025-01-01 10:00", "2025-01-01 10:01"]


def test_shape_fills_gaps_before_building():
    df = ingest.from_records(
        [
            {"timestamp": "2025-01-01T00:00:00Z", "avg_current": 1, "avg_voltage": 230},
            {"timestamp": "2025-01-01T00:03:00Z", "avg_current": 2, "avg_voltage": 231},
        ]
    )
    chart = series.shape(df, FilterSelection(), DashboardConfig())
    assert len(chart.labels) == 5
    assert chart.series[0].values == [1.0, 0.0, 0.0, 0.0, 2.0]


def test_shape_with_gap_makes_every_field_present():
    # synthetic rows define every field as 0, so phase2 now counts as present
    df = ingest.from_records(
        [
            {"timestamp": "2025-01-01T00:00:00Z", "phase1_kw": 1},
            {"timestamp": "2025-01-01T00:02:00Z", "phase1_kw": 2},
        ]
    )
    chart = series.shape(df, FilterSelection(parameters=("kw",)))
    assert _labels(chart) == ["PHASE1 Power (kW)", "PHASE2 Power (kW)", "PHASE3 Power (kW)"]
