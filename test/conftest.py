"""
Pytest fixtures shared by unit and integration tests.
"""

import threading

import pytest

from sqliprobe.core.models import ProbeResponse
from sqliprobe.reporters.base import Reporter


class FakeClient:
    """
    Scripted stand-in for TargetClient.

    `script` maps a payload to a ProbeResponse, an exception to raise, or a
    callable returning either. Unknown payloads get a fast 200.
    """

    def __init__(self, script=None, default_status=200, default_body="ok", default_ms=10):
        self.script = dict(script or {})
        self.default_status = default_status
        self.default_body = default_body
        self.default_ms = default_ms
        self.sent = []
        self._lock = threading.Lock()

    def send(self, payload):
        with self._lock:
            self.sent.append(payload)
        entry = self.script.get(payload)
        if callable(entry) and not isinstance(entry, type):
            entry = entry(payload)
        if isinstance(entry, BaseException):
            raise entry
        if entry is None:
            return ProbeResponse(payload, self.default_status, self.default_body, self.default_ms)
        return entry


class RecordingReporter(Reporter):
    """Keeps every event in order as (name, args) tuples."""

    def __init__(self, verbose=1):
        self.verbose = verbose
        self.events = []
        self._lock = threading.Lock()

    def _rec(self, name, *args):
        with self._lock:
            self.events.append((name, args))

    def named(self, name):
        return [args for ev, args in self.events if ev == name]

    def run_start(self, target, settings):
        self._rec("run_start", target, settings)

    def calibrated(self, baseline):
        self._rec("calibrated", baseline)

    def category_start(self, category, payload_count, chunk_count):
        self._rec("category_start", category, payload_count, chunk_count)

    def finding(self, finding):
        self._rec("finding", finding)

    def error(self, category, payload, exc):
        self._rec("error", category, payload, exc)

    def summary(self, report):
        self._rec("summary", report)

    def info(self, msg):
        self._rec("info", msg)

    def debug(self, msg):
        self._rec("debug", msg)


def response(payload="", status=200, body="ok", ms=10):
    return ProbeResponse(payload=payload, status_code=status, body=body, elapsed_ms=ms)


@pytest.fixture
def fake_client_factory():
    return FakeClient


@pytest.fixture
def reporter():
    return RecordingReporter()


@pytest.fixture
def make_response():
    return response
