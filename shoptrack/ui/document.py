# ==============================================================================
# UI Tree
# ==============================================================================
"""
Minimal in-process model of a rendered UI tree.

Provides just enough of a document object model for delegated click
tracking: elements with attributes and a parent chain, and a document root
that dispatches clicks to capture-phase listeners before bubble-phase ones.

A UI toolkit adapter (or a test) builds the tree and calls
Document.dispatch_click() for every click it observes.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass

logger = logging.getLogger(__name__)

CLICK = "click"
BEFORE_UNLOAD = "beforeunload"


@dataclass
class UiEvent:
    """An event delivered to document listeners."""

    type: str
    target: "UiElement"
    propagation_stopped: bool = False

    def stop_propagation(self) -> None:
        """Prevent listeners of later phases from seeing the event."""
        self.propagation_stopped = True


Listener = Callable[[UiEvent], None]


class UiElement:
    """A node of the UI tree."""

    def __init__(
        self,
        tag_name: str,
        attributes: dict[str, str] | None = None,
        parent: "UiElement | None" = None,
    ):
        self._tag_name = tag_name
        self.attributes: dict[str, str] = dict(attributes or {})
        self.parent = parent
        self.children: list[UiElement] = []
        if parent is not None:
            parent.children.append(self)

    @property
    def tag_name(self) -> str:
        """Upper-case tag name, as HTML documents report it."""
        return self._tag_name.upper()

    def get_attribute(self, name: str) -> str | None:
        """Attribute value, or None if the attribute is absent."""
        return self.attributes.get(name)

    def set_attribute(self, name: str, value: str) -> None:
        self.attributes[name] = value

    def append(self, tag_name: str, **attributes: str) -> "UiElement":
        """Create a child element and return it.

        Underscores in keyword names become dashes (data_track -> data-track)
        and class_ maps to class.
        """
        attrs = {_attribute_name(k): v for k, v in attributes.items()}
        return UiElement(tag_name, attrs, parent=self)

    def __repr__(self) -> str:
        return f"UiElement({self._tag_name!r}, {self.attributes!r})"


def _attribute_name(keyword: str) -> str:
    return keyword.rstrip("_").replace("_", "-")


@dataclass
class _Registration:
    listener: Listener
    capture: bool


class Document:
    """Root of a UI tree with event listener registration."""

    def __init__(self, root: UiElement | None = None):
        self.root = root or UiElement("html")
        self._listeners: dict[str, list[_Registration]] = {}

    def add_event_listener(self, event_type: str, listener: Listener, capture: bool = False) -> None:
        """Register a listener. Registering the same listener/phase twice is a no-op."""
        registrations = self._listeners.setdefault(event_type, [])
        for reg in registrations:
            if reg.listener == listener and reg.capture == capture:
                return
        registrations.append(_Registration(listener, capture))

    def remove_event_listener(
        self, event_type: str, listener: Listener, capture: bool = False
    ) -> None:
        """Unregister a listener. Unknown listeners are ignored."""
        registrations = self._listeners.get(event_type, [])
        self._listeners[event_type] = [
            reg for reg in registrations if not (reg.listener == listener and reg.capture == capture)
        ]

    def listener_count(self, event_type: str) -> int:
        return len(self._listeners.get(event_type, []))

    def dispatch(self, event: UiEvent) -> UiEvent:
        """
        Deliver an event to document listeners.

        Capture-phase listeners run first, then bubble-phase listeners. A
        listener that raises is logged and does not stop delivery to the others.
        """
        registrations = list(self._listeners.get(event.type, []))
        for capture in (True, False):
            for reg in registrations:
                if reg.capture != capture:
                    continue
                try:
                    reg.listener(event)
                except Exception:
                    logger.exception("Uncaught error in %s listener", event.type)
            if event.propagation_stopped:
                break
        return event

    def dispatch_click(self, target: UiElement) -> UiEvent:
        """Deliver a click on target."""
        return self.dispatch(UiEvent(CLICK, target))

    def dispatch_unload(self) -> UiEvent:
        """Signal that the page is about to be discarded."""
        return self.dispatch(UiEvent(BEFORE_UNLOAD, self.root))
