# ==============================================================================
# Repository Abstract Base Classes
# ==============================================================================
"""
Read-side repositories for the admin dashboard.

The tracking pipeline only ever appends through an EventSink; these
interfaces cover reading rows back for analytics.

Includes:
- ActivityRepository: recent activity rows with the actor's display name
- OrderRepository: storefront orders with their line items
"""

from abc import ABC, abstractmethod

from shoptrack.core.models import ActivityRecord, Order


class ActivityRepository(ABC):
    """Repository for activity rows."""

    @abstractmethod
    def connect(self) -> None:
        """Establish connection to the data store."""
        ...

    @abstractmethod
    def fetch_recent(self, limit: int = 100) -> list[ActivityRecord]:
        """
        Fetch the most recent activity rows, newest first.

        Args:
            limit: Maximum number of rows

        Returns:
            Activity records enriched with the user's full name when known
        """
        ...

    @abstractmethod
    def close(self) -> None:
        """Close connection and release resources."""
        ...


class OrderRepository(ABC):
    """Repository for storefront orders."""

    @abstractmethod
    def connect(self) -> None:
        """Establish connection to the data store."""
        ...

    @abstractmethod
    def fetch_orders(self) -> list[Order]:
        """
        Fetch all orders, newest first.

        Returns:
            Order records with their line items
        """
        ...

    @abstractmethod
    def close(self) -> None:
        """Close connection and release resources."""
        ...
