from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from . import canon


def _getenv(env: Mapping[str, str], key: str, default: str) -> str:
    v = env.get(key)
    return v if v else default


def _getenv_float(env: Mapping[str, str], key: str, default: float) -> float:
    v = env.get(key)
    if not v:
        return default
    try:
        return float(v)
    except ValueError:
        return default


@dataclass(frozen=True)
class DashboardConfig:
    # Backend
    api_base_url: str = "http://localhost:3010"
    readings_path: str = canon.READINGS_PATH
    usage_path: str = canon.USAGE_PATH
    timeout_s: float = 10.0

    # Shaping
    gap_interval_s: float = canon.DEFAULT_GAP_INTERVAL_S

    # Display
    display_tz: str = canon.DEFAULT_TZ
    label_format: str = canon.DEFAULT_LABEL_FORMAT
    chart_title: str = "Smart Meter Readings Over Time"

    @property
    def readings_url(self) -> str:
        return self.api_base_url.rstrip("/") + self.readings_path

    @property
    def usage_url(self) -> str:
        return self.api_base_url.rstrip("/") + self.usage_path


def default_config() -> DashboardConfig:
    return DashboardConfig()


def load_config(env: Optional[Mapping[str, str]] = None) -> DashboardConfig:
    """Build a DashboardConfig from METERDASH_* environment variables."""
    env = os.environ if env is None else env
    d = DashboardConfig()
    return DashboardConfig(
        api_base_url=_getenv(env, "METERDASH_API_URL", d.api_base_url),
        readings_path=_getenv(env, "METERDASH_READINGS_PATH", d.readings_path),
        usage_path=_getenv(env, "METERDASH_USAGE_PATH", d.usage_path),
        timeout_s=_getenv_float(env, "METERDASH_TIMEOUT_S", d.timeout_s),
        gap_interval_s=_getenv_float(env, "METERDASH_GAP_INTERVAL_S", d.gap_interval_s),
        display_tz=_getenv(env, "METERDASH_TZ", d.display_tz),
        label_format=_getenv(env, "METERDASH_LABEL_FORMAT", d.label_format),
        chart_title=_getenv(env, "METERDASH_CHART_TITLE", d.chart_title),
    )
