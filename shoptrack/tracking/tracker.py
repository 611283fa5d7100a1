# ==============================================================================
# Activity Tracker
# ==============================================================================
"""
Composition root of the tracking pipeline for one mounted UI.

Mounting mints a session, records the initial page view and installs the
click and unload listeners. Unmounting (or unload) ends the session; after
that nothing is attributable to it. A page reload is a new tracker.

    tracker = ActivityTracker(document, router, sink, identity, beacon)
    tracker.mount()
    tracker.emitter("add_to_cart", {"product_id": "abc123"})
    ...
    tracker.unmount()
"""

import logging

from shoptrack.base.identity import IdentityProvider
from shoptrack.base.sinks import BeaconTransport, EventSink
from shoptrack.core.markers import DEFAULT_MARKER_ATTRIBUTE, DEFAULT_META_ATTRIBUTE
from shoptrack.core.session import Clock, SessionState, TrackingSession, monotonic_ms
from shoptrack.tracking.departure import DepartureReporter
from shoptrack.tracking.dispatch import Dispatcher
from shoptrack.tracking.emitter import ActivityEmitter
from shoptrack.tracking.interaction import InteractionObserver
from shoptrack.tracking.navigation import NavigationObserver
from shoptrack.ui.document import Document
from shoptrack.ui.router import HistoryRouter

logger = logging.getLogger(__name__)

DEFAULT_BEACON_URL = "http://localhost:8080/beacon"


class ActivityTracker:
    """
    Tracks page views, time on page, marked clicks and departures for one
    mounted UI.

    Attributes:
        session: Session identity and page timer
        emitter: Handle for manual instrumentation
    """

    def __init__(
        self,
        document: Document,
        router: HistoryRouter,
        sink: EventSink,
        identity: IdentityProvider,
        beacon: BeaconTransport,
        beacon_url: str = DEFAULT_BEACON_URL,
        dispatcher: Dispatcher | None = None,
        clock: Clock = monotonic_ms,
        marker_attribute: str = DEFAULT_MARKER_ATTRIBUTE,
        meta_attribute: str = DEFAULT_META_ATTRIBUTE,
    ):
        self._document = document
        self._router = router
        self._sink = sink
        self.session = TrackingSession(clock=clock)
        self.emitter = ActivityEmitter(
            session=self.session,
            sink=sink,
            identity=identity,
            current_path=lambda: router.pathname,
            dispatcher=dispatcher,
        )
        self._navigation = NavigationObserver(self.session, self.emitter, router)
        self._interaction = InteractionObserver(self.emitter, marker_attribute, meta_attribute)
        self._departure = DepartureReporter(self.session, beacon, beacon_url)

    @property
    def session_id(self) -> str:
        return self.session.session_id

    @property
    def state(self) -> SessionState:
        return self.session.state

    def mount(self) -> "ActivityTracker":
        """Start the session and install all observers."""
        self._navigation.start()
        self._interaction.install(self._document)
        self._departure.install(self._document)
        return self

    def unmount(self) -> None:
        """Remove all observers and end the session. Idempotent."""
        self._navigation.stop()
        self._interaction.uninstall()
        self._departure.uninstall()
        self.session.terminate()

    def unload(self) -> None:
        """Signal page teardown through the document, as the runtime would."""
        self._document.dispatch_unload()

    def flush(self, timeout: float | None = None) -> bool:
        """Wait for in-flight deliveries. Returns True if none remain."""
        return self.emitter.dispatcher.flush(timeout)

    def close(self, timeout: float | None = None) -> None:
        """Unmount, wait for in-flight deliveries, and release the sink."""
        self.unmount()
        self.flush(timeout)
        self.emitter.dispatcher.shutdown()
        try:
            self._sink.close()
        except Exception as e:
            logger.warning("Error closing event sink: %s", e)

    def __enter__(self) -> "ActivityTracker":
        return self.mount()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
