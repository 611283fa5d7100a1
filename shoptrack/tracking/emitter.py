# ==============================================================================
# Activity Emitter
# ==============================================================================
"""
The single funnel every tracking observer emits through.

For each call the emitter captures the current page path, then (on the
dispatcher) resolves the signed-in user, assembles an ActivityEvent and
inserts it into the event sink.

Failure policy: best effort, at most once. Identity lookup failures count
as an anonymous visitor; any other failure is logged and the event is
dropped. emit() never raises and never retries.
"""

import copy
import logging
from collections.abc import Callable
from typing import Any

from shoptrack.base.identity import IdentityProvider
from shoptrack.base.sinks import EventSink
from shoptrack.core.models import ActivityEvent
from shoptrack.core.session import TrackingSession
from shoptrack.tracking.dispatch import Dispatcher, InlineDispatcher

logger = logging.getLogger(__name__)

PathSource = Callable[[], str]


class ActivityEmitter:
    """
    Emits activity events for one tracking session.

    The emitter is the handle components receive for manual instrumentation;
    it is also callable: ``emitter("add_to_cart", {"product_id": pid})``.
    """

    def __init__(
        self,
        session: TrackingSession,
        sink: EventSink,
        identity: IdentityProvider,
        current_path: PathSource,
        dispatcher: Dispatcher | None = None,
    ):
        """
        Initialize the emitter.

        Args:
            session: Session whose id is stamped on every event
            sink: Destination of activity records
            identity: Provider of the current user id
            current_path: Returns the path of the current location
            dispatcher: Delivery strategy (defaults to inline)
        """
        self._session = session
        self._sink = sink
        self._identity = identity
        self._current_path = current_path
        self._dispatcher = dispatcher or InlineDispatcher()

    @property
    def session_id(self) -> str:
        return self._session.session_id

    @property
    def dispatcher(self) -> Dispatcher:
        return self._dispatcher

    def emit(self, event_type: str, event_data: dict[str, Any] | None = None) -> None:
        """
        Record an activity event. Never raises.

        Args:
            event_type: Event discriminator (page_view, add_to_cart, ...)
            event_data: Optional structured payload
        """
        try:
            if not self._session.is_active:
                logger.debug(
                    "Dropping %s event: session %s is %s",
                    event_type,
                    self._session.session_id,
                    self._session.state.value,
                )
                return
            session_id = self._session.session_id
            page_url = self._current_path()
            data = copy.deepcopy(event_data) if event_data is not None else None
            self._dispatcher.submit(
                lambda: self._deliver(session_id, event_type, data, page_url)
            )
        except Exception as e:
            logger.error("Activity tracking error: %s", e)

    __call__ = emit

    def _resolve_user_id(self) -> str | None:
        try:
            return self._identity.current_user_id()
        except Exception as e:
            logger.debug("Identity lookup failed, treating visitor as anonymous: %s", e)
            return None

    def _deliver(
        self,
        session_id: str,
        event_type: str,
        event_data: dict[str, Any] | None,
        page_url: str,
    ) -> None:
        try:
            event = ActivityEvent(
                user_id=self._resolve_user_id(),
                session_id=session_id,
                event_type=event_type,
                event_data=event_data,
                page_url=page_url,
            )
            self._sink.insert(event.to_record())
            logger.debug("Tracked %s on %s (session %s)", event_type, page_url, session_id)
        except Exception as e:
            logger.error("Activity tracking error: %s", e)
