# ==============================================================================
# Static Identity Provider
# ==============================================================================
"""
Identity provider with a fixed answer.

Used for anonymous-only deployments (TRACKING_IDENTITY=anonymous), for
command-line simulations, and as a test stub.
"""

from shoptrack.base.identity import IdentityProvider


class StaticIdentityProvider(IdentityProvider):
    """Always reports the same user id (None means anonymous)."""

    def __init__(self, user_id: str | None = None):
        self.user_id = user_id

    def current_user_id(self) -> str | None:
        return self.user_id
