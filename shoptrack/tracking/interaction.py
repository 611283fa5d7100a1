# ==============================================================================
# Interaction Observer
# ==============================================================================
"""
Delegated click tracking.

A single capture-phase click listener on the document root sees every click;
clicks inside an element carrying the marker attribute become activity
events, everything else is ignored. Elements never wire up handlers of
their own.
"""

import logging

from shoptrack.core.markers import (
    DEFAULT_MARKER_ATTRIBUTE,
    DEFAULT_META_ATTRIBUTE,
    find_nearest_marked,
)
from shoptrack.tracking.emitter import ActivityEmitter
from shoptrack.ui.document import CLICK, Document, UiEvent

logger = logging.getLogger(__name__)


class InteractionObserver:
    """Emits one event per click on a marked element."""

    def __init__(
        self,
        emitter: ActivityEmitter,
        marker_attribute: str = DEFAULT_MARKER_ATTRIBUTE,
        meta_attribute: str = DEFAULT_META_ATTRIBUTE,
    ):
        self._emitter = emitter
        self._marker_attribute = marker_attribute
        self._meta_attribute = meta_attribute
        self._document: Document | None = None

    @property
    def installed(self) -> bool:
        return self._document is not None

    def install(self, document: Document) -> None:
        """Attach the capture-phase click listener to document."""
        if self._document is not None:
            raise RuntimeError("Interaction observer is already installed")
        document.add_event_listener(CLICK, self.handle_click, capture=True)
        self._document = document

    def uninstall(self) -> None:
        """Detach the click listener. Idempotent."""
        if self._document is None:
            return
        self._document.remove_event_listener(CLICK, self.handle_click, capture=True)
        self._document = None

    def handle_click(self, event: UiEvent) -> None:
        marker = find_nearest_marked(event.target, self._marker_attribute, self._meta_attribute)
        if marker is None:
            logger.debug("Ignoring click on unmarked %s", getattr(event.target, "tag_name", None))
            return
        self._emitter.emit(marker.event_type, marker.payload)
