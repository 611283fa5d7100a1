# ==============================================================================
# Tests for Navigation Tracking
# ==============================================================================
"""
Tests for page_view and time_on_page emission on mount and route changes.

Trackers run with an InlineDispatcher and a FakeClock, so every event is in
the RecordingSink as soon as the triggering call returns.
"""

import logging

# ==============================================================================
# Mount
# ==============================================================================


class TestInitialPageView:
    def test_single_page_view_on_mount(self, tracker, sink):
        assert sink.event_types() == ["page_view"]

    def test_initial_page_view_has_no_payload(self, tracker, sink):
        assert sink.records[0]["event_data"] is None

    def test_initial_page_view_records_path(self, make_tracker, sink):
        from shoptrack.ui.router import HistoryRouter

        make_tracker(router=HistoryRouter("/products?sort=price")).mount()
        assert sink.records[0]["page_url"] == "/products"

    def test_event_carries_session_and_user(self, tracker, sink):
        record = sink.records[0]
        assert record["session_id"] == tracker.session_id
        assert record["user_id"] == "user-1"
        assert "created_at" not in record


# ==============================================================================
# Route changes
# ==============================================================================


class TestRouteChange:
    def test_time_on_page_precedes_page_view(self, tracker, router, sink, clock):
        clock.advance(1500.7)
        router.push("/products")

        assert sink.event_types() == ["page_view", "time_on_page", "page_view"]
        time_on_page, page_view = sink.records[1], sink.records[2]
        assert time_on_page["event_data"] == {"ms": 1501}
        assert page_view["event_data"] == {"path": "/products"}
        assert page_view["page_url"] == "/products"

    def test_timer_restarts_per_page(self, tracker, router, sink, clock):
        clock.advance(1000)
        router.push("/products")
        clock.advance(250)
        router.push("/cart")

        timings = [r["event_data"]["ms"] for r in sink.records if r["event_type"] == "time_on_page"]
        assert timings == [1000, 250]

    def test_query_only_change_is_ignored(self, tracker, router, sink, clock):
        clock.advance(500)
        router.push("/?page=2")
        router.push("/#reviews")
        assert sink.event_types() == ["page_view"]

    def test_ignored_change_is_logged(self, tracker, router, caplog):
        with caplog.at_level(logging.DEBUG, logger="shoptrack.tracking.navigation"):
            router.push("/?page=2")
        assert "Ignoring location change to /?page=2" in caplog.text

    def test_back_and_forward_are_navigation(self, tracker, router, sink):
        router.push("/products")
        router.back()
        router.forward()
        paths = [r["event_data"]["path"] for r in sink.records[1:] if r["event_type"] == "page_view"]
        assert paths == ["/products", "/", "/products"]

    def test_replace_to_new_path_is_navigation(self, tracker, router, sink):
        router.replace("/login")
        assert sink.event_types()[-1] == "page_view"
        assert sink.records[-1]["event_data"] == {"path": "/login"}

    def test_all_events_share_session(self, tracker, router, sink):
        router.push("/a")
        router.push("/b")
        assert {r["session_id"] for r in sink.records} == {tracker.session_id}


# ==============================================================================
# After unmount
# ==============================================================================


class TestAfterUnmount:
    def test_no_events_after_unmount(self, make_tracker, router, sink):
        tracker = make_tracker().mount()
        tracker.unmount()
        router.push("/elsewhere")
        assert sink.event_types() == ["page_view"]
