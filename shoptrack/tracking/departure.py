# ==============================================================================
# Departure Reporter
# ==============================================================================
"""
Best-effort time-on-page report when the page is discarded.

At unload time ordinary deliveries may be cut off, so the final timing goes
through the beacon transport instead of the emitter: one JSON body
{"event": "time_on_page", "ms": N} posted to the fixed beacon endpoint.
Delivery is not guaranteed and failures are silent.

Unload ends the tracking session.
"""

from shoptrack.base.sinks import BeaconTransport
from shoptrack.core.models import BeaconPayload
from shoptrack.core.session import TrackingSession
from shoptrack.ui.document import BEFORE_UNLOAD, Document, UiEvent


class DepartureReporter:
    """Sends the unload beacon for one tracking session."""

    def __init__(self, session: TrackingSession, transport: BeaconTransport, beacon_url: str):
        self._session = session
        self._transport = transport
        self._beacon_url = beacon_url
        self._document: Document | None = None

    def install(self, document: Document) -> None:
        """Listen for the unload signal on document."""
        if self._document is not None:
            raise RuntimeError("Departure reporter is already installed")
        document.add_event_listener(BEFORE_UNLOAD, self.handle_unload)
        self._document = document

    def uninstall(self) -> None:
        """Stop listening for the unload signal. Idempotent."""
        if self._document is None:
            return
        self._document.remove_event_listener(BEFORE_UNLOAD, self.handle_unload)
        self._document = None

    def handle_unload(self, event: UiEvent | None = None) -> bool:
        """
        Send the final timing beacon and end the session.

        Returns:
            True if a beacon was handed to the transport
        """
        sent = False
        elapsed = self._session.elapsed_ms() if self._session.is_active else None
        if elapsed is not None:
            try:
                payload = BeaconPayload(ms=elapsed)
                sent = self._transport.send(self._beacon_url, payload.to_bytes())
            except Exception:
                sent = False
        self._session.terminate()
        return sent
