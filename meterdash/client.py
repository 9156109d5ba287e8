from __future__ import annotations
import logging
from typing import Any, Optional

import requests

from . import utils
from .config import DashboardConfig, default_config
from .exceptions import ApiError
from .types import ReadingQuery

logger = logging.getLogger(__name__)


def readings_payload(query: ReadingQuery) -> dict[str, Any]:
    """Request body for the readings endpoint."""
    return {
        "device_id": query.device_id,
        "start_date": utils.iso_instant(query.start),
        "end_date": utils.iso_instant(query.end),
        "phase": list(query.phases),
        "param": list(query.parameters),
    }


class MeterApiClient:
    """Thin JSON-over-HTTP client for the smart-meter backend."""

    def __init__(
        self,
        config: Optional[DashboardConfig] = None,
        session: Optional[requests.Session] = None,
    ):
        self.config = config or default_config()
        self.session = session or requests.Session()

    def _post(self, url: str, body: dict[str, Any]) -> Any:
        try:
            resp = self.session.post(url, json=body, timeout=self.config.timeout_s)
            resp.raise_for_status()
            if not resp.content:
                return None
            return resp.json()
        except requests.RequestException as e:
            logger.exception("Request to %s failed", url)
            raise ApiError(f"Request to {url} failed: {e}") from e
        except ValueError as e:
            logger.exception("Response from %s is not valid JSON", url)
            raise ApiError(f"Response from {url} is not valid JSON") from e

    def fetch_readings(self, query: ReadingQuery) -> list[dict[str, Any]]:
        url = self.config.readings_url
        logger.info(
            "Fetching readings for device %s from %s to %s",
            query.device_id,
            query.start,
            query.end,
        )
        data = self._post(url, readings_payload(query))
        if data is None:
            return []
        if not isinstance(data, list):
            raise ApiError(f"Expected a list of readings from {url}, got {type(data).__name__}")
        return data

    def fetch_usage(self, device_id: str) -> list[dict[str, Any]]:
        """Usage intervals for a device; an absent or empty body means no data."""
        url = self.config.usage_url
        logger.info("Fetching power source usage for device %s", device_id)
        data = self._post(url, {"device_id": device_id})
        if not data:
            return []
        if not isinstance(data, list):
            raise ApiError(f"Expected a list of usage rows from {url}, got {type(data).__name__}")
        return data

    def close(self) -> None:
        self.session.close()
