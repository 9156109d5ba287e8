from __future__ import annotations
from typing import Final, Dict, Tuple

from .types import Axis, Parameter, Phase

INDEX_NAME: Final[str] = "timestamp"
DEFAULT_TZ: Final[str] = "UTC"
DEFAULT_GAP_INTERVAL_S: Final[int] = 60
DEFAULT_LABEL_FORMAT: Final[str] = "%d/%m/%Y, %H:%M:%S"

PHASES: Final[tuple[Phase, ...]] = ("phase1", "phase2", "phase3")
ALL_PHASES: Final[tuple[Phase, ...]] = ("phase1", "phase2", "phase3", "others")
PARAMETERS: Final[tuple[Parameter, ...]] = ("voltage", "current", "kw", "pf")

PHASE_LABELS: Final[Dict[str, str]] = {
    "phase1": "Phase 1",
    "phase2": "Phase 2",
    "phase3": "Phase 3",
    "others": "Others",
}

PARAMETER_LABELS: Final[Dict[str, str]] = {
    "voltage": "Voltage (V)",
    "current": "Current (A)",
    "kw": "Power (kW)",
    "pf": "Power Factor (PF)",
}

# (phase, parameter) -> reading column
FIELD_TABLE: Final[Dict[Tuple[Phase, Parameter], str]] = {
    ("phase1", "voltage"): "phase1_voltage",
    ("phase1", "current"): "phase1_current",
    ("phase1", "kw"): "phase1_kw",
    ("phase1", "pf"): "phase1_pf",
    ("phase2", "voltage"): "phase2_voltage",
    ("phase2", "current"): "phase2_current",
    ("phase2", "kw"): "phase2_kw",
    ("phase2", "pf"): "phase2_pf",
    ("phase3", "voltage"): "phase3_voltage",
    ("phase3", "current"): "phase3_current",
    ("phase3", "kw"): "phase3_kw",
    ("phase3", "pf"): "phase3_pf",
}

# others column -> (label suffix, axis), in display order
OTHERS_FIELDS: Final[Dict[str, Tuple[str, Axis]]] = {
    "others_f": ("F", "current"),
    "others_apf": ("APF", "current"),
    "others_tkw": ("TKW", "power"),
}

AVG_CURRENT: Final[str] = "avg_current"
AVG_VOLTAGE: Final[str] = "avg_voltage"
AGGREGATE_COLS: Final[list[str]] = [AVG_CURRENT, AVG_VOLTAGE]

READING_COLS: Final[list[str]] = [
    *FIELD_TABLE.values(),
    *OTHERS_FIELDS.keys(),
    *AGGREGATE_COLS,
]

# Palette used when no dimension is selected
AVG_CURRENT_COLOR: Final[tuple[int, int, int]] = (255, 99, 132)
AVG_VOLTAGE_COLOR: Final[tuple[int, int, int]] = (54, 162, 235)

# Backend endpoints
READINGS_PATH: Final[str] = "/api/smart-meter/readings"
USAGE_PATH: Final[str] = "/api/all-power-source-usage"

ONGOING: Final[str] = "Ongoing"
NOT_AVAILABLE: Final[str] = "N/A"
