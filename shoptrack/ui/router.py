# ==============================================================================
# History Router
# ==============================================================================
"""
In-process navigation history.

Keeps a stack of visited URLs with push/replace/back/forward semantics and
notifies subscribers of every location change, including query-string-only
changes. Subscribers decide which changes matter to them.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from urllib.parse import urljoin, urlsplit

logger = logging.getLogger(__name__)

_BASE = "http://localhost"


@dataclass(frozen=True)
class Location:
    """Current location split into its components."""

    pathname: str = "/"
    search: str = ""
    hash: str = ""

    @property
    def href(self) -> str:
        return f"{self.pathname}{self.search}{self.hash}"

    @classmethod
    def parse(cls, url: str, current: "Location | None" = None) -> "Location":
        """Resolve url (absolute or relative to current) into a Location."""
        base = _BASE + (current.href if current else "/")
        parts = urlsplit(urljoin(base, url))
        return cls(
            pathname=parts.path or "/",
            search=f"?{parts.query}" if parts.query else "",
            hash=f"#{parts.fragment}" if parts.fragment else "",
        )


LocationListener = Callable[[Location], None]


class HistoryRouter:
    """Navigation history with change notification."""

    def __init__(self, initial_url: str = "/"):
        self._entries = [Location.parse(initial_url)]
        self._index = 0
        self._listeners: list[LocationListener] = []

    @property
    def location(self) -> Location:
        return self._entries[self._index]

    @property
    def pathname(self) -> str:
        """Path component of the current location."""
        return self.location.pathname

    def subscribe(self, listener: LocationListener) -> Callable[[], None]:
        """
        Register a change listener.

        Returns:
            Function that unregisters the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def push(self, url: str) -> Location:
        """Navigate to url, discarding any forward history."""
        location = Location.parse(url, self.location)
        del self._entries[self._index + 1 :]
        self._entries.append(location)
        self._index += 1
        self._notify()
        return location

    def replace(self, url: str) -> Location:
        """Replace the current entry with url."""
        location = Location.parse(url, self.location)
        self._entries[self._index] = location
        self._notify()
        return location

    def go(self, delta: int) -> Location:
        """Move delta entries through history. Out-of-range moves are ignored."""
        target = self._index + delta
        if delta == 0 or not 0 <= target < len(self._entries):
            return self.location
        self._index = target
        self._notify()
        return self.location

    def back(self) -> Location:
        return self.go(-1)

    def forward(self) -> Location:
        return self.go(1)

    def _notify(self) -> None:
        location = self.location
        logger.debug("Location changed to %s", location.href)
        for listener in list(self._listeners):
            listener(location)
