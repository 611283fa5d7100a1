# ==============================================================================
# Shared Test Fixtures
# ==============================================================================
"""
Pytest fixtures shared across all test modules.

Provides:
- In-memory event sinks (recording and failing) and beacon transport
- A manually advanced millisecond clock
- A mounted ActivityTracker wired with inline delivery
"""

import pytest

from shoptrack.base.identity import IdentityProvider
from shoptrack.base.sinks import BeaconTransport, EventSink
from shoptrack.tracking.dispatch import InlineDispatcher
from shoptrack.tracking.tracker import ActivityTracker
from shoptrack.ui.document import Document
from shoptrack.ui.router import HistoryRouter

BEACON_URL = "http://shop.test/beacon"


# ==============================================================================
# Test Doubles
# ==============================================================================


class RecordingSink(EventSink):
    """Keeps every inserted record in memory."""

    def __init__(self):
        self.records: list[dict] = []
        self.closed = False

    def insert(self, record: dict) -> None:
        self.records.append(record)

    def close(self) -> None:
        self.closed = True

    def event_types(self) -> list[str]:
        return [r["event_type"] for r in self.records]


class FailingSink(EventSink):
    """Rejects every insert."""

    def __init__(self, error: Exception | None = None):
        self.error = error or ConnectionError("sink unavailable")
        self.attempts = 0

    def insert(self, record: dict) -> None:
        self.attempts += 1
        raise self.error


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


class StubIdentity(IdentityProvider):
    def __init__(self, user_id: str | None = None):
        self.user_id = user_id

    def current_user_id(self) -> str | None:
        return self.user_id


class BrokenIdentity(IdentityProvider):
    def current_user_id(self) -> str | None:
        raise RuntimeError("auth service down")


class RecordingBeacon(BeaconTransport):
    """Captures beacons instead of sending them."""

    def __init__(self, accept: bool = True):
        self.sent: list[tuple[str, bytes]] = []
        self.accept = accept

    def send(self, url: str, payload: bytes) -> bool:
        self.sent.append((url, payload))
        return self.accept


# ==============================================================================
# Fixtures
# ==============================================================================


@pytest.fixture()
def sink():
    return RecordingSink()


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def beacon():
    return RecordingBeacon()


@pytest.fixture()
def document():
    return Document()


@pytest.fixture()
def router():
    return HistoryRouter("/")


@pytest.fixture()
def make_tracker(document, router, sink, beacon, clock):
    """Factory for unmounted trackers sharing the per-test doubles."""

    def _make(**overrides) -> ActivityTracker:
        kwargs = dict(
            document=document,
            router=router,
            sink=sink,
            identity=StubIdentity("user-1"),
            beacon=beacon,
            beacon_url=BEACON_URL,
            dispatcher=InlineDispatcher(),
            clock=clock,
        )
        kwargs.update(overrides)
        return ActivityTracker(**kwargs)

    return _make


@pytest.fixture()
def tracker(make_tracker):
    """A mounted tracker; unmounted after the test."""
    t = make_tracker().mount()
    yield t
    t.unmount()
