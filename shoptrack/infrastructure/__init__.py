# ==============================================================================
# Infrastructure Adapters
# ==============================================================================
"""
Adapters for external services (ports-and-adapters architecture).

- supabase.py - hosted auth and REST data API (identity + event sink)
- repositories/ - direct PostgreSQL access (event sink + dashboard reads)
- beacon.py - unload-time beacon over HTTP
- logging_sink.py - event sink writing to the log
- identity.py - fixed-answer identity provider
"""

from shoptrack.infrastructure.beacon import HttpBeaconTransport
from shoptrack.infrastructure.identity import StaticIdentityProvider
from shoptrack.infrastructure.logging_sink import LoggingEventSink
from shoptrack.infrastructure.repositories import (
    PostgreSQLActivityRepository,
    PostgreSQLOrderRepository,
    check_postgresql_connection,
)
from shoptrack.infrastructure.supabase import SupabaseEventSink, SupabaseIdentityProvider

__all__ = [
    "HttpBeaconTransport",
    "LoggingEventSink",
    "PostgreSQLActivityRepository",
    "PostgreSQLOrderRepository",
    "StaticIdentityProvider",
    "SupabaseEventSink",
    "SupabaseIdentityProvider",
    "check_postgresql_connection",
]
