# ==============================================================================
# Identity Provider Abstract Base Class
# ==============================================================================
"""
Abstract interface for resolving the currently signed-in principal.

The tracking pipeline asks for the current user at every emission, so a
sign-in or sign-out mid-session is reflected in the next event.

Implementations: SupabaseIdentityProvider, StaticIdentityProvider
"""

from abc import ABC, abstractmethod


class IdentityProvider(ABC):
    """Source of the current principal's identity."""

    @abstractmethod
    def current_user_id(self) -> str | None:
        """
        Get the identifier of the signed-in user.

        Returns:
            The user id, or None for anonymous visitors. Implementations may
            raise on lookup failure; callers treat a failure as anonymous.
        """
        ...
