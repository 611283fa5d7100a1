# ==============================================================================
# Shoptrack Utilities
# ==============================================================================
"""
Shared utilities: configuration, retry policy, paths and schema setup.
"""

from shoptrack.utils.config import (
    AnalyticsSettings,
    PostgresSettings,
    Settings,
    SupabaseSettings,
    TrackingSettings,
    get_settings,
)

__all__ = [
    "AnalyticsSettings",
    "PostgresSettings",
    "Settings",
    "SupabaseSettings",
    "TrackingSettings",
    "get_settings",
]
