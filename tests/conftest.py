import os
import sys
import threading

import pytest


PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))

if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from review_core.config import log  # noqa: E402
from review_core.state import ChangeRecord, PollOutcome  # noqa: E402


class FakeResponse:
    def __init__(self, status_code=200, body=b"", reason="OK"):
        self.status_code = status_code
        self.content = body if isinstance(body, bytes) else body.encode("utf-8")
        self.reason = reason

    @property
    def text(self):
        return self.content.decode("utf-8", errors="replace")


class FakeSession:
    """
    In-memory stand-in for requests.Session.
    routes: list of (substring, FakeResponse | Exception); first match wins.
    """

    def __init__(self, routes=()):
        self.routes = list(routes)
        self.calls = []
        self.closed = False
        self._lock = threading.Lock()

    def get(self, url, timeout=None):
        with self._lock:
            self.calls.append((url, timeout))
        for needle, result in self.routes:
            if needle in url:
                if isinstance(result, Exception):
                    raise result
                return result
        return FakeResponse(404, b"Not found", "Not Found")

    def close(self):
        self.closed = True


class FakeTimer:
    """Records arm/cancel instead of sleeping; fire() runs the callback inline."""

    instances = []

    def __init__(self, interval, function):
        self.interval = interval
        self.function = function
        self.daemon = False
        self.started = False
        self.cancelled = False
        FakeTimer.instances.append(self)

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        self.function()


def change(number, submittable=False, revisions=1):
    return ChangeRecord(id=str(number), is_submittable=submittable, revision_count=revisions)


def ok(*records):
    return PollOutcome.ok(records)


@pytest.fixture
def fake_timer():
    FakeTimer.instances = []
    yield FakeTimer
    FakeTimer.instances = []


@pytest.fixture(autouse=True)
def _reset_logger():
    # setup_logging() detaches the shared logger from root; put it back so caplog sees records.
    yield
    for handler in list(log.handlers):
        log.removeHandler(handler)
        handler.close()
    log.propagate = True
    log.setLevel("NOTSET")
