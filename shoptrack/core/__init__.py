# ==============================================================================
# Core Domain Logic
# ==============================================================================
"""
Pure domain logic with no external dependencies.

This module contains:
- Domain models (ActivityEvent, BeaconPayload, ClickMarker, Order, ...)
- Session identity and page timing (TrackingSession)
- Marker resolution for click tracking
- Admin dashboard aggregations

All code here is framework-agnostic and easily unit-testable.
"""

from shoptrack.core.analytics import (
    ActivitySummary,
    OrdersSummary,
    filter_activities,
    summarize_activity,
    summarize_orders,
)
from shoptrack.core.markers import find_nearest_marked, parse_marker_payload
from shoptrack.core.models import (
    ActivityEvent,
    ActivityRecord,
    BeaconPayload,
    ClickMarker,
    EventType,
    Order,
    OrderItem,
)
from shoptrack.core.session import SessionState, TrackingSession, round_elapsed_ms

__all__ = [
    "ActivityEvent",
    "ActivityRecord",
    "ActivitySummary",
    "BeaconPayload",
    "ClickMarker",
    "EventType",
    "Order",
    "OrderItem",
    "OrdersSummary",
    "SessionState",
    "TrackingSession",
    "filter_activities",
    "find_nearest_marked",
    "parse_marker_payload",
    "round_elapsed_ms",
    "summarize_activity",
    "summarize_orders",
]
