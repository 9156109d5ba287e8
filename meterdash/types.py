from __future__ import annotations
from typing import Any, Dict, List, Literal, Optional, Tuple, TypedDict
from datetime import datetime

import pandas as pd
from pydantic import BaseModel, Field, field_validator

Phase = Literal["phase1", "phase2", "phase3", "others"]
Parameter = Literal["voltage", "current", "kw", "pf"]
Axis = Literal["voltage", "current", "power"]
RGB = Tuple[int, int, int]


# Reading DataFrame
class ReadingFrame(pd.DataFrame):
    """
    Regularised table of meter readings.

    Expected:
      - DatetimeIndex named 'timestamp', tz-aware (UTC), non-decreasing
      - One float column per reading field; NaN means the backend did not
        report that field on that row
    """

    @property
    def _constructor(self):
        return ReadingFrame

    @property
    def avg_current(self) -> pd.Series:
        return self["avg_current"]

    @property
    def avg_voltage(self) -> pd.Series:
        return self["avg_voltage"]


class Reading(BaseModel):
    """One smart-meter sample as returned by the readings endpoint."""

    timestamp: datetime
    phase1_voltage: Optional[float] = None
    phase1_current: Optional[float] = None
    phase1_kw: Optional[float] = None
    phase1_pf: Optional[float] = None
    phase2_voltage: Optional[float] = None
    phase2_current: Optional[float] = None
    phase2_kw: Optional[float] = None
    phase2_pf: Optional[float] = None
    phase3_voltage: Optional[float] = None
    phase3_current: Optional[float] = None
    phase3_kw: Optional[float] = None
    phase3_pf: Optional[float] = None
    others_f: Optional[float] = None
    others_apf: Optional[float] = None
    others_tkw: Optional[float] = None
    avg_current: Optional[float] = None
    avg_voltage: Optional[float] = None
    model_config = {"frozen": True, "extra": "ignore"}


def _dedupe(values: Tuple[str, ...]) -> Tuple[str, ...]:
    return tuple(dict.fromkeys(values))


class FilterSelection(BaseModel):
    """Parameters and phases picked by the user, in selection order."""

    parameters: Tuple[Parameter, ...] = ()
    phases: Tuple[Phase, ...] = ()
    model_config = {"frozen": True}

    @field_validator("parameters", "phases")
    @classmethod
    def _keep_first(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        return _dedupe(v)


class ReadingQuery(FilterSelection):
    """Everything one fetch needs: device, date range and the filter."""

    device_id: str
    start: datetime
    end: datetime

    @property
    def selection(self) -> FilterSelection:
        return FilterSelection(parameters=self.parameters, phases=self.phases)


class Series(BaseModel):
    label: str
    values: List[float]
    axis: Axis
    color: RGB = (0, 0, 0)
    model_config = {"frozen": True}


class ChartData(BaseModel):
    """Chart-ready output: one label per row and axis-tagged series."""

    timestamps: List[datetime] = Field(default_factory=list)
    labels: List[str] = Field(default_factory=list)
    series: List[Series] = Field(default_factory=list)

    @property
    def empty(self) -> bool:
        return not self.labels


## Usage table
class UsageInterval(BaseModel):
    id: int | str
    device_id: int | str
    power_source: Optional[str] = None
    start_time: datetime
    end_time: Optional[datetime] = None
    # kept untyped: anything that is not a number renders as N/A
    usage_time: Any = None
    model_config = {"frozen": True, "extra": "ignore"}


class DisplayRow(BaseModel):
    id: str
    device_id: str
    power_source: str
    start_time: str
    end_time: str
    usage_time: str
    ongoing: bool


## Chart.js payload handed to the rendering widget
class ChartJsDataset(TypedDict):
    label: str
    data: List[float]
    borderColor: str
    backgroundColor: str
    yAxisID: str


class ChartJsData(TypedDict):
    labels: List[str]
    datasets: List[ChartJsDataset]


class ChartJsConfig(TypedDict):
    data: ChartJsData
    options: Dict[str, Any]
