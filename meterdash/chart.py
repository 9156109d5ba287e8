from __future__ import annotations
from typing import Any, Dict

from .types import ChartData, ChartJsConfig, ChartJsDataset, RGB


def _rgba(rgb: RGB, alpha: float) -> str:
    r, g, b = rgb
    return f"rgba({r}, {g}, {b}, {alpha:g})"


def _axis_scale(title: str, position: str, draw_grid: bool = True) -> Dict[str, Any]:
    scale: Dict[str, Any] = {
        "type": "linear",
        "position": position,
        "title": {"display": True, "text": title},
    }
    if not draw_grid:
        scale["grid"] = {"drawOnChartArea": False}
    return scale


def to_chartjs(
    chart: ChartData, title: str = "Smart Meter Readings Over Time"
) -> ChartJsConfig:
    """
    Line-chart config for Chart.js: one dataset per series, bound to a
    'y-<axis>' scale. Voltage sits on the left; current and power share the
    right side without their own grid lines.
    """
    datasets: list[ChartJsDataset] = [
        {
            "label": s.label,
            "data": list(s.values),
            "borderColor": _rgba(s.color, 1),
            "backgroundColor": _rgba(s.color, 0.2),
            "yAxisID": f"y-{s.axis}",
        }
        for s in chart.series
    ]
    options: Dict[str, Any] = {
        "responsive": True,
        "plugins": {
            "title": {"display": True, "text": title},
            "legend": {"position": "top"},
        },
        "scales": {
            "x": {"title": {"display": True, "text": "Time"}},
            "y-voltage": _axis_scale("Voltage (V)", "left"),
            "y-current": _axis_scale("Current (A)", "right", draw_grid=False),
            "y-power": _axis_scale("Power (kW)", "right", draw_grid=False),
        },
    }
    return {
        "data": {"labels": list(chart.labels), "datasets": datasets},
        "options": options,
    }
