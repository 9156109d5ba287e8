from __future__ import annotations
import logging
from typing import Iterable, Optional

import pandas as pd

from . import canon, gaps, utils
from .config import DashboardConfig, default_config
from .types import (
    Axis,
    ChartData,
    FilterSelection,
    Parameter,
    Phase,
    ReadingFrame,
    Series,
    RGB,
)

logger = logging.getLogger(__name__)


def parameter_to_axis(param: Parameter) -> Axis:
    if param == "kw":
        return "power"
    if param == "voltage":
        return "voltage"
    return "current"


def _present(df: pd.DataFrame, col: str) -> bool:
    """A column counts as present if any row carries a value for it."""
    return col in df.columns and bool(df[col].notna().any())


def _values(df: pd.DataFrame, col: str) -> list[float]:
    if col not in df.columns:
        return [0.0] * len(df)
    return df[col].fillna(0.0).astype(float).tolist()


def _series(df: pd.DataFrame, col: str, label: str, axis: Axis, color: RGB) -> Series:
    return Series(label=label, values=_values(df, col), axis=axis, color=color)


def _average_series(df: pd.DataFrame) -> list[Series]:
    return [
        _series(df, canon.AVG_CURRENT, "Average Current (A)", "current", canon.AVG_CURRENT_COLOR),
        _series(df, canon.AVG_VOLTAGE, "Average Voltage (V)", "voltage", canon.AVG_VOLTAGE_COLOR),
    ]


def _others_series(df: pd.DataFrame, phase_idx: Optional[int] = None) -> list[Series]:
    out = []
    for key_idx, (col, (suffix, axis)) in enumerate(canon.OTHERS_FIELDS.items()):
        if not _present(df, col):
            continue
        # standalone others use a fixed blue channel, mixed selections key it by phase
        blue = 132 if phase_idx is None else (phase_idx + 1) * 60
        out.append(
            _series(df, col, f"Others {suffix}", axis, ((key_idx + 1) * 60, 120, blue))
        )
    return out


def _phase_param_series(
    df: pd.DataFrame,
    phase: Phase,
    phase_idx: int,
    param: Parameter,
    param_idx: int,
    label: str,
) -> Optional[Series]:
    col = canon.FIELD_TABLE[(phase, param)]
    if not _present(df, col):
        return None
    color = ((phase_idx + 1) * 60, (param_idx + 1) * 60, 132)
    return _series(df, col, label, parameter_to_axis(param), color)


def _select(
    df: pd.DataFrame, parameters: tuple[Parameter, ...], phases: tuple[Phase, ...]
) -> list[Series]:
    # Ordered checks; the predicates overlap so order matters
    if not parameters and not phases:
        return _average_series(df)

    out: list[Series] = []
    if parameters and not phases:
        for param_idx, param in enumerate(parameters):
            for phase_idx, phase in enumerate(canon.PHASES):
                label = f"{phase.upper()} {canon.PARAMETER_LABELS[param]}"
                s = _phase_param_series(df, phase, phase_idx, param, param_idx, label)
                if s is not None:
                    out.append(s)
        return out

    if not parameters and "others" in phases:
        return _others_series(df)

    for phase_idx, phase in enumerate(phases):
        if phase == "others":
            out.extend(_others_series(df, phase_idx))
            continue
        for param_idx, param in enumerate(parameters):
            label = f"{canon.PHASE_LABELS[phase]} {canon.PARAMETER_LABELS[param]}"
            s = _phase_param_series(df, phase, phase_idx, param, param_idx, label)
            if s is not None:
                out.append(s)
    return out


def build_series(
    df: ReadingFrame,
    parameters: Iterable[Parameter] = (),
    phases: Iterable[Phase] = (),
    *,
    tz: str = canon.DEFAULT_TZ,
    label_format: str = canon.DEFAULT_LABEL_FORMAT,
) -> ChartData:
    """
    Turn readings into chart series for the selected parameters and phases.

    Cases, first match wins:
      - nothing selected: average current and average voltage
      - parameters only: every parameter across phase1..phase3
      - 'others' phase with no parameters: frequency, APF and total kW
      - otherwise: each selected phase x parameter, 'others' expanding to its
        own three fields

    Series whose column is absent on every row are skipped. Values are 0.0
    where a row lacks the field. An empty result is not an error.
    """
    sel = FilterSelection(parameters=tuple(parameters), phases=tuple(phases))
    idx = pd.DatetimeIndex(df.index)
    series = _select(df, sel.parameters, sel.phases)
    logger.debug(
        "Built %d series over %d rows (parameters=%s, phases=%s)",
        len(series),
        len(df),
        list(sel.parameters),
        list(sel.phases),
    )
    return ChartData(
        timestamps=[t.to_pydatetime() for t in idx],
        labels=utils.format_labels(idx, tz, label_format),
        series=series,
    )


def shape(
    df: ReadingFrame,
    selection: FilterSelection,
    config: Optional[DashboardConfig] = None,
) -> ChartData:
    """Gap-fill the readings, then build the series for `selection`."""
    cfg = config or default_config()
    filled = gaps.fill_gaps(df, cfg.gap_interval_s)
    return build_series(
        filled,
        selection.parameters,
        selection.phases,
        tz=cfg.display_tz,
        label_format=cfg.label_format,
    )
