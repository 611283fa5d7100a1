# ==============================================================================
# Activity Tracking Pipeline
# ==============================================================================
"""
Client-side activity tracking: page views, time on page, marked clicks and
the unload beacon, all funnelled through one emitter per session.

Usage:
    from shoptrack.tracking import build_tracker

    tracker = build_tracker(document, router).mount()
    tracker.emitter("add_to_cart", {"product_id": "abc123"})
"""

from shoptrack.tracking.departure import DepartureReporter
from shoptrack.tracking.dispatch import BackgroundDispatcher, Dispatcher, InlineDispatcher
from shoptrack.tracking.emitter import ActivityEmitter
from shoptrack.tracking.factory import (
    build_tracker,
    get_dispatcher,
    get_event_sink,
    get_identity_provider,
)
from shoptrack.tracking.interaction import InteractionObserver
from shoptrack.tracking.navigation import NavigationObserver
from shoptrack.tracking.tracker import ActivityTracker

__all__ = [
    "ActivityEmitter",
    "ActivityTracker",
    "BackgroundDispatcher",
    "DepartureReporter",
    "Dispatcher",
    "InlineDispatcher",
    "InteractionObserver",
    "NavigationObserver",
    "build_tracker",
    "get_dispatcher",
    "get_event_sink",
    "get_identity_provider",
]
