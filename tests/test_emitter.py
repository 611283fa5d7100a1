# ==============================================================================
# Tests for ActivityEmitter
# ==============================================================================
"""
Tests for the emission funnel: record assembly, identity resolution and the
best-effort failure policy.
"""

import logging
import threading

from conftest import BrokenIdentity, FailingSink, RecordingSink, StubIdentity
from shoptrack.core.session import TrackingSession
from shoptrack.tracking.dispatch import BackgroundDispatcher, InlineDispatcher
from shoptrack.tracking.emitter import ActivityEmitter


def _emitter(sink, identity=None, path="/shop", dispatcher=None, active=True):
    session = TrackingSession()
    if active:
        session.activate()
    return ActivityEmitter(
        session=session,
        sink=sink,
        identity=identity or StubIdentity("user-1"),
        current_path=lambda: path,
        dispatcher=dispatcher or InlineDispatcher(),
    )


# ==============================================================================
# Record assembly
# ==============================================================================


class TestRecord:
    def test_record_fields(self):
        sink = RecordingSink()
        emitter = _emitter(sink)
        emitter.emit("add_to_cart", {"product_id": "abc123"})

        assert sink.records == [
            {
                "user_id": "user-1",
                "session_id": emitter.session_id,
                "event_type": "add_to_cart",
                "event_data": {"product_id": "abc123"},
                "page_url": "/shop",
            }
        ]

    def test_emitter_is_callable(self):
        sink = RecordingSink()
        _emitter(sink)("wishlist_add")
        assert sink.records[0]["event_type"] == "wishlist_add"
        assert sink.records[0]["event_data"] is None

    def test_anonymous_visitor(self):
        sink = RecordingSink()
        _emitter(sink, identity=StubIdentity(None)).emit("page_view")
        assert sink.records[0]["user_id"] is None


# ==============================================================================
# Failure policy
# ==============================================================================


class TestFailures:
    def test_identity_failure_counts_as_anonymous(self):
        sink = RecordingSink()
        _emitter(sink, identity=BrokenIdentity()).emit("page_view")
        assert sink.records[0]["user_id"] is None

    def test_sink_failure_is_logged_not_raised(self, caplog):
        sink = FailingSink()
        emitter = _emitter(sink)
        with caplog.at_level(logging.ERROR, logger="shoptrack.tracking.emitter"):
            emitter.emit("page_view")
        assert sink.attempts == 1
        assert "Activity tracking error" in caplog.text
        assert "sink unavailable" in caplog.text

    def test_no_retry_after_failure(self):
        sink = FailingSink()
        emitter = _emitter(sink)
        emitter.emit("a")
        emitter.emit("b")
        assert sink.attempts == 2

    def test_invalid_event_type_is_dropped(self, caplog):
        sink = RecordingSink()
        with caplog.at_level(logging.ERROR):
            _emitter(sink).emit("")
        assert sink.records == []
        assert "Activity tracking error" in caplog.text

    def test_dispatcher_failure_is_logged(self, caplog):
        dispatcher = InlineDispatcher()
        dispatcher.shutdown()
        sink = RecordingSink()
        with caplog.at_level(logging.ERROR):
            _emitter(sink, dispatcher=dispatcher).emit("page_view")
        assert sink.records == []
        assert "Dispatcher is shut down" in caplog.text

    def test_inactive_session_drops_event(self):
        sink = RecordingSink()
        _emitter(sink, active=False).emit("page_view")
        assert sink.records == []


# ==============================================================================
# Background delivery
# ==============================================================================


class TestBackgroundDispatch:
    def test_emit_returns_before_delivery(self):
        release = threading.Event()

        class SlowSink(RecordingSink):
            def insert(self, record):
                release.wait(timeout=5)
                super().insert(record)

        sink = SlowSink()
        dispatcher = BackgroundDispatcher()
        emitter = _emitter(sink, dispatcher=dispatcher)

        emitter.emit("page_view")
        assert sink.records == []

        release.set()
        assert dispatcher.flush(timeout=5)
        assert sink.event_types() == ["page_view"]
        dispatcher.shutdown()

    def test_deliveries_keep_submission_order(self):
        sink = RecordingSink()
        dispatcher = BackgroundDispatcher()
        emitter = _emitter(sink, dispatcher=dispatcher)
        for i in range(20):
            emitter.emit(f"event_{i}")
        dispatcher.flush(timeout=5)
        dispatcher.shutdown()
        assert sink.event_types() == [f"event_{i}" for i in range(20)]

    def test_payload_captured_at_emit_time(self):
        release = threading.Event()

        class SlowSink(RecordingSink):
            def insert(self, record):
                release.wait(timeout=5)
                super().insert(record)

        sink = SlowSink()
        dispatcher = BackgroundDispatcher()
        emitter = _emitter(sink, dispatcher=dispatcher)

        emitter.emit("page_view")
        data = {"qty": 1, "options": {"size": "M"}}
        emitter.emit("add_to_cart", data)
        data["qty"] = 99
        data["options"]["size"] = "XL"

        release.set()
        assert dispatcher.flush(timeout=5)
        dispatcher.shutdown()
        assert sink.records[1]["event_data"] == {"qty": 1, "options": {"size": "M"}}

    def test_page_url_captured_at_emit_time(self):
        release = threading.Event()
        path = {"current": "/a"}

        class SlowSink(RecordingSink):
            def insert(self, record):
                release.wait(timeout=5)
                super().insert(record)

        session = TrackingSession()
        session.activate()
        sink = SlowSink()
        dispatcher = BackgroundDispatcher()
        emitter = ActivityEmitter(
            session, sink, StubIdentity(), lambda: path["current"], dispatcher
        )
        emitter.emit("page_view")
        path["current"] = "/b"
        release.set()
        dispatcher.flush(timeout=5)
        dispatcher.shutdown()
        assert sink.records[0]["page_url"] == "/a"
