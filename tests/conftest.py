"""
Shared test fixtures for Starry Geo tests.
"""
import os
from concurrent.futures import Executor, Future
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

# Keep tests away from the real session file; must happen before config import
os.environ["SESSION_FILE"] = ""

from starry_geo.models import GeoRecord, HistoryEntry, User
from starry_geo.services.api_client import GeoAPIClient, LoginResponse
from starry_geo.services.orchestrator import DashboardOrchestrator
from starry_geo.services.session_store import MemorySessionStore
from starry_geo.utils.notifications import NotificationQueue

TEST_EMAIL = "exam.user@example.com"
TEST_PASSWORD = "Password123!"
TEST_TOKEN = "tok-123"


class FakeTimer:
    """Stand-in for threading.Timer that only fires when told to."""

    def __init__(self, interval, function):
        self.interval = interval
        self.function = function
        self.daemon = False
        self.started = False
        self.cancelled = False

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        """Fire like a real timer would: not at all once cancelled."""
        if not self.cancelled:
            self.function()


class TimerRecorder:
    """Timer factory that remembers every timer it built."""

    def __init__(self):
        self.timers = []

    def __call__(self, interval, function):
        timer = FakeTimer(interval, function)
        self.timers.append(timer)
        return timer

    @property
    def last(self) -> FakeTimer:
        return self.timers[-1]


class ImmediateExecutor(Executor):
    """Executor that runs each task inline on submit."""

    def submit(self, fn, *args, **kwargs):
        future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as e:
            future.set_exception(e)
        return future


@pytest.fixture
def timers():
    """Recording fake timer factory."""
    return TimerRecorder()


@pytest.fixture
def notifications(timers):
    """Notification queue driven by fake timers."""
    queue = NotificationQueue(ttl_seconds=3.2, timer_factory=timers)
    yield queue
    queue.close()


@pytest.fixture
def store():
    """In-memory session store."""
    return MemorySessionStore()


@pytest.fixture
def user():
    return User(email=TEST_EMAIL, id=1)


@pytest.fixture
def caller_geo():
    """Geolocation of the caller's own address."""
    return GeoRecord(
        ip="203.0.113.7",
        city="Manila",
        region="Metro Manila",
        country="PH",
        loc="14.6042,120.9822",
        org="AS9299 Philippine Long Distance Telephone Company",
        postal="1000",
        timezone="Asia/Manila",
    )


@pytest.fixture
def google_geo():
    return GeoRecord(
        ip="8.8.8.8",
        city="Mountain View",
        region="California",
        country="US",
        loc="37.4056,-122.0775",
        org="AS15169 Google LLC",
        postal="94043",
        timezone="America/Los_Angeles",
    )


@pytest.fixture
def history(google_geo):
    """Two past lookups, newest first."""
    return [
        HistoryEntry(
            id=2,
            ip="1.1.1.1",
            payload=GeoRecord(ip="1.1.1.1", city="Brisbane", country="AU", loc="-27.4816,153.0175"),
            created_at=datetime(2025, 1, 15, 10, 30, tzinfo=timezone.utc),
        ),
        HistoryEntry(
            id=1,
            ip="8.8.8.8",
            payload=google_geo,
            created_at=datetime(2025, 1, 14, 9, 0, tzinfo=timezone.utc),
        ),
    ]


@pytest.fixture
def api(user, caller_geo, history):
    """Mock backend client answering every call successfully."""
    client = MagicMock(spec=GeoAPIClient)
    client.login.return_value = LoginResponse(token=TEST_TOKEN, user=user)
    client.me.return_value = user
    client.fetch_geo.return_value = caller_geo
    client.fetch_history.return_value = list(history)
    client.logout.return_value = None
    client.delete_history.return_value = None
    return client


@pytest.fixture
def orchestrator(api, store, notifications):
    """Orchestrator in BOOTING with mocked collaborators."""
    orch = DashboardOrchestrator(api, store, notifications)
    yield orch
    orch.close()


@pytest.fixture
def signed_in(orchestrator, api):
    """Orchestrator after a successful login, with call history reset."""
    assert orchestrator.login(TEST_EMAIL, TEST_PASSWORD)
    api.reset_mock()
    return orchestrator
