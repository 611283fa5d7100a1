# ==============================================================================
# Shoptrack
# ==============================================================================
"""
Storefront activity tracking.

Records page views, time on page, marked clicks and manual events for a
single-page storefront, tagged with a per-mount session id and the signed-in
user, and delivers them best effort to an append-only activity table.
"""

__version__ = "0.1.0"
