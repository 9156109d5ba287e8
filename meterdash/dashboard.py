"""Per-instance state for the readings chart and the usage table.

Each panel owns its current selection, its last good result and a
user-facing message. Results are replaced wholesale on a successful fetch
and left untouched when a fetch fails.
"""

from __future__ import annotations
import logging
from datetime import datetime
from typing import Iterable, Optional, cast

from . import ingest, series, usage, validate
from .client import MeterApiClient
from .config import DashboardConfig, default_config
from .exceptions import ApiError, IngestError, SelectionError
from .types import (
    ChartData,
    ChartJsConfig,
    DisplayRow,
    FilterSelection,
    Parameter,
    Phase,
    ReadingQuery,
)
from .chart import to_chartjs

logger = logging.getLogger(__name__)

FETCH_FAILED = "Failed to fetch data. Please try again."
NO_USAGE_DATA = "No usage data found for the given device ID."


class _Generations:
    """Hands out fetch tokens; only the newest token may publish a result."""

    def __init__(self) -> None:
        self._latest = 0

    def begin(self) -> int:
        self._latest += 1
        return self._latest

    def is_current(self, token: int) -> bool:
        return token == self._latest


class ReadingsPanel:
    def __init__(
        self,
        client: MeterApiClient,
        config: Optional[DashboardConfig] = None,
    ):
        self.client = client
        self.config = config or default_config()
        self.device_id: str = ""
        self.start: Optional[datetime] = None
        self.end: Optional[datetime] = None
        self.selection = FilterSelection()
        self.chart = ChartData()
        self.message = ""
        self._generations = _Generations()

    def select(
        self,
        *,
        device_id: Optional[str] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        parameters: Optional[Iterable[Parameter]] = None,
        phases: Optional[Iterable[Phase]] = None,
    ) -> ChartData:
        """Update the selection and refetch once device and dates are all set."""
        if device_id is not None:
            self.device_id = device_id
        if start is not None:
            self.start = start
        if end is not None:
            self.end = end
        if parameters is not None or phases is not None:
            self.selection = FilterSelection(
                parameters=tuple(parameters) if parameters is not None else self.selection.parameters,
                phases=tuple(phases) if phases is not None else self.selection.phases,
            )
        if self.device_id and self.start is not None and self.end is not None:
            return self.refresh()
        return self.chart

    def query(self) -> ReadingQuery:
        validate.check_query(self.device_id, self.start, self.end)
        return ReadingQuery(
            device_id=self.device_id.strip(),
            start=cast(datetime, self.start),
            end=cast(datetime, self.end),
            parameters=self.selection.parameters,
            phases=self.selection.phases,
        )

    def begin(self) -> int:
        return self._generations.begin()

    def commit(self, token: int, chart: ChartData) -> bool:
        """Publish `chart` unless a newer fetch has started since `token`."""
        if not self._generations.is_current(token):
            logger.info("Discarding stale readings result (generation %d)", token)
            return False
        self.chart = chart
        self.message = ""
        return True

    def refresh(self) -> ChartData:
        try:
            query = self.query()
        except SelectionError as e:
            self.message = str(e)
            return self.chart

        token = self.begin()
        try:
            frame = ingest.from_records(self.client.fetch_readings(query))
        except (ApiError, IngestError):
            logger.exception("Error fetching readings for device %s", query.device_id)
            self.message = FETCH_FAILED
            return self.chart

        self.commit(token, series.shape(frame, query.selection, self.config))
        return self.chart

    def chartjs(self) -> ChartJsConfig:
        return to_chartjs(self.chart, self.config.chart_title)


class UsagePanel:
    def __init__(
        self,
        client: MeterApiClient,
        config: Optional[DashboardConfig] = None,
    ):
        self.client = client
        self.config = config or default_config()
        self.device_id: str = ""
        self.rows: list[DisplayRow] = []
        self.message = ""
        self._generations = _Generations()

    def refresh(self, device_id: Optional[str] = None) -> list[DisplayRow]:
        if device_id is not None:
            self.device_id = device_id
        try:
            validate.check_device(self.device_id)
        except SelectionError as e:
            self.message = str(e)
            return self.rows

        token = self._generations.begin()
        try:
            intervals = ingest.usage_from_records(
                self.client.fetch_usage(self.device_id.strip())
            )
        except (ApiError, IngestError):
            logger.exception("Error fetching usage data for device %s", self.device_id)
            self.message = FETCH_FAILED
            return self.rows

        if not self._generations.is_current(token):
            return self.rows
        if not intervals:
            self.rows = []
            self.message = NO_USAGE_DATA
            return self.rows

        self.rows = usage.format_intervals(
            intervals, tz=self.config.display_tz, label_format=self.config.label_format
        )
        self.message = ""
        return self.rows
