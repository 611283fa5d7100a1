# ==============================================================================
# Navigation Observer
# ==============================================================================
"""
Turns route transitions into page-view and time-on-page events.

- First activation: start the page timer, emit page_view with no payload.
- Every change of path: emit time_on_page {ms} for the page being left,
  restart the timer, emit page_view {path} for the page being entered.

Changes that keep the path (query string or hash only) are not navigation.
Both events of a transition are emitted back to back on the caller's
thread, so the departing time_on_page always precedes the arriving page_view.
"""

import logging
from collections.abc import Callable

from shoptrack.core.models import EventType
from shoptrack.core.session import TrackingSession
from shoptrack.tracking.emitter import ActivityEmitter
from shoptrack.ui.router import HistoryRouter, Location

logger = logging.getLogger(__name__)


class NavigationObserver:
    """Watches the router's current path for one tracking session."""

    def __init__(self, session: TrackingSession, emitter: ActivityEmitter, router: HistoryRouter):
        self._session = session
        self._emitter = emitter
        self._router = router
        self._last_path: str | None = None
        self._unsubscribe: Callable[[], None] | None = None

    @property
    def last_path(self) -> str | None:
        return self._last_path

    def start(self) -> None:
        """Activate the session and record the initial page view."""
        self._session.activate()
        self._last_path = self._router.pathname
        self._emitter.emit(EventType.PAGE_VIEW.value)
        self._unsubscribe = self._router.subscribe(self._on_location_change)

    def stop(self) -> None:
        """Stop observing the router. Idempotent."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def _on_location_change(self, location: Location) -> None:
        if location.pathname == self._last_path or not self._session.is_active:
            logger.debug("Ignoring location change to %s", location.href)
            return
        self._last_path = location.pathname

        elapsed = self._session.restart_timer()
        if elapsed is not None:
            self._emitter.emit(EventType.TIME_ON_PAGE.value, {"ms": elapsed})
        self._emitter.emit(EventType.PAGE_VIEW.value, {"path": location.pathname})
