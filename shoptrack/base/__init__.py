# ==============================================================================
# Base Abstract Classes
# ==============================================================================
"""
Abstract base classes for the ports-and-adapters architecture.

The tracking pipeline depends only on these interfaces; concrete adapters
live in shoptrack.infrastructure.
"""

from shoptrack.base.identity import IdentityProvider
from shoptrack.base.repositories import ActivityRepository, OrderRepository
from shoptrack.base.sinks import BeaconTransport, EventSink

__all__ = [
    "ActivityRepository",
    "BeaconTransport",
    "EventSink",
    "IdentityProvider",
    "OrderRepository",
]
