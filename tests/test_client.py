"""Tests for the backend client, using a stub in place of requests.Session."""

from datetime import datetime

import pytest
import pytz
import requests

from meterdash.client import MeterApiClient, readings_payload
from meterdash.config import DashboardConfig
from meterdash.exceptions import ApiError
from meterdash.types import ReadingQuery


class FakeResponse:
    def __init__(self, payload=None, status=200, content=b"x"):
        self._payload = payload
        self.status_code = status
        self.content = content

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class FakeSession:
    def __init__(self, response):
        self.response = response
        self.calls = []

    def post(self, url, json=None, timeout=None):
        self.calls.append((url, json, timeout))
        if isinstance(self.response, Exception):
            raise self.response
        return self.response

    def close(self):
        pass


def _query():
    return ReadingQuery(
        device_id="dev-1",
        start=pytz.utc.localize(datetime(2025, 1, 1)),
        end=datetime(2025, 1, 2, 12, 30),
        parameters=("kw", "voltage", "kw"),
        phases=("phase1",),
    )


def test_readings_payload_shape():
    body = readings_payload(_query())
    assert body == {
        "device_id": "dev-1",
        "start_date": "2025-01-01T00:00:00.000Z",
        "end_date": "2025-01-02T12:30:00.000Z",
        "phase": ["phase1"],
        "param": ["kw", "voltage"],
    }


def test_fetch_readings_posts_to_configured_url():
    session = FakeSession(FakeResponse([{"timestamp": "2025-01-01T00:00:00Z"}]))
    client = MeterApiClient(DashboardConfig(api_base_url="http://api", timeout_s=2.0), session)
    rows = client.fetch_readings(_query())
    assert rows == [{"timestamp": "2025-01-01T00:00:00Z"}]
    url, body, timeout = session.calls[0]
    assert url == "http://api/api/smart-meter/readings"
    assert body["device_id"] == "dev-1"
    assert timeout == 2.0


@pytest.mark.parametrize(
    "response",
    [
        requests.ConnectionError("refused"),
        FakeResponse(status=500),
        FakeResponse(ValueError("bad json")),
        FakeResponse({"not": "a list"}),
    ],
)
def test_fetch_readings_failures_raise_api_error(response):
    client = MeterApiClient(session=FakeSession(response))
    with pytest.raises(ApiError):
        client.fetch_readings(_query())


@pytest.mark.parametrize(
    "response", [FakeResponse(None), FakeResponse([]), FakeResponse(content=b"")]
)
def test_fetch_usage_absent_body_is_empty(response):
    client = MeterApiClient(session=FakeSession(response))
    assert client.fetch_usage("dev-1") == []


def test_fetch_usage_sends_device_id():
    session = FakeSession(FakeResponse([{"id": 1}]))
    client = MeterApiClient(session=session)
    assert client.fetch_usage("dev-9") == [{"id": 1}]
    url, body, _ = session.calls[0]
    assert url.endswith("/api/all-power-source-usage")
    assert body == {"device_id": "dev-9"}
