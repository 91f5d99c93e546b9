import threading

import numpy as np
import pytest
import requests


class FakeResponse:
    def __init__(self, payload, status_code=200):
        self.payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        return self.payload


class FakeSession:
    """Stands in for requests.Session; handler(url, params) -> payload dict."""

    def __init__(self, handler, status_code=200):
        self.handler = handler
        self.status_code = status_code
        self.calls = []
        self._lock = threading.Lock()

    def get(self, url, params=None, timeout=None):
        with self._lock:
            self.calls.append((url, dict(params or {})))
        return FakeResponse(self.handler(url, params or {}), self.status_code)


def parse_points(s):
    return [tuple(float(x) for x in p.split(",")) for p in s.split("|")]


def manhattan_meters(a, b):
    return int(round((abs(a[0] - b[0]) + abs(a[1] - b[1])) * 1000))


def distance_matrix_handler(url, params):
    origins = parse_points(params["origins"])
    destinations = parse_points(params["destinations"])
    rows = []
    for o in origins:
        elements = []
        for d in destinations:
            meters = manhattan_meters(o, d)
            elements.append({
                "status": "OK",
                "distance": {"value": meters},
                "duration": {"value": meters * 6},
            })
        rows.append({"elements": elements})
    return {"status": "OK", "rows": rows}


@pytest.fixture
def fake_session():
    return FakeSession


@pytest.fixture
def matrix_session():
    return FakeSession(distance_matrix_handler)


@pytest.fixture
def rng():
    return np.random.default_rng(1234)
