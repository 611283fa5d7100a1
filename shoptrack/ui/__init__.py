"""
In-process UI runtime: the UI tree with delegated event listeners and the
navigation history the tracker observes.
"""

from shoptrack.ui.document import BEFORE_UNLOAD, CLICK, Document, UiElement, UiEvent
from shoptrack.ui.router import HistoryRouter, Location

__all__ = [
    "BEFORE_UNLOAD",
    "CLICK",
    "Document",
    "HistoryRouter",
    "Location",
    "UiElement",
    "UiEvent",
]
