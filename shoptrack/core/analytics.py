# ==============================================================================
# Admin Analytics - Pure Domain Logic
# ==============================================================================
"""
Aggregations behind the admin dashboard.

Everything here is arithmetic over records that were already fetched:
- Activity panel: totals, recent events, page views, clicks, per-type counts
- Orders summary: sales, items sold, average order value, approximate profit,
  status breakdown and best-selling products

No database or framework dependencies, so the logic is unit tested with
plain model instances.
"""

from collections import Counter
from collections.abc import Iterable
from datetime import datetime, timedelta, timezone

from pydantic import BaseModel, Field

from shoptrack.core.models import ActivityRecord, EventType, Order

ALL_EVENTS = "all"
UNKNOWN_PRODUCT = "Unknown"


class ActivitySummary(BaseModel):
    """Headline counters for the activity panel."""

    total: int = 0
    recent: int = 0
    page_views: int = 0
    clicks: int = 0
    by_type: dict[str, int] = Field(default_factory=dict)


class ProductSales(BaseModel):
    """Quantity sold for one product name."""

    name: str
    quantity: int


class OrdersSummary(BaseModel):
    """Headline figures for the orders summary."""

    sales: float = 0.0
    subtotals: float = 0.0
    items: int = 0
    count: int = 0
    status_counts: dict[str, int] = Field(default_factory=dict)
    top_products: list[ProductSales] = Field(default_factory=list)

    @property
    def average_order_value(self) -> float:
        """Mean order total, 0 when there are no orders."""
        return self.sales / self.count if self.count else 0.0

    @property
    def profit(self) -> float:
        """Approximate profit: totals minus subtotals (delivery charges)."""
        return self.sales - self.subtotals

    def to_dict(self) -> dict:
        """Serialize including the derived figures."""
        data = self.model_dump()
        data["average_order_value"] = self.average_order_value
        data["profit"] = self.profit
        return data


def filter_activities(
    activities: Iterable[ActivityRecord], event_type: str | None = None
) -> list[ActivityRecord]:
    """
    Keep only activities of one event type.

    Args:
        activities: Activity records
        event_type: Type to keep; None or "all" keeps everything

    Returns:
        Matching records in their original order
    """
    if not event_type or event_type == ALL_EVENTS:
        return list(activities)
    return [a for a in activities if a.event_type == event_type]


def summarize_activity(
    activities: Iterable[ActivityRecord],
    now: datetime | None = None,
    window: timedelta = timedelta(hours=24),
) -> ActivitySummary:
    """
    Count activities for the dashboard headline cards.

    Args:
        activities: Activity records
        now: Reference time for the recent window (defaults to current UTC time)
        window: Length of the recent window

    Returns:
        ActivitySummary with total, recent, page view and click counts
    """
    now = now or datetime.now(timezone.utc)
    summary = ActivitySummary()
    by_type: Counter[str] = Counter()

    for activity in activities:
        summary.total += 1
        by_type[activity.event_type] += 1
        created_at = activity.created_at
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        if now - created_at < window:
            summary.recent += 1
        if activity.event_type == EventType.PAGE_VIEW.value:
            summary.page_views += 1
        if activity.is_click:
            summary.clicks += 1

    summary.by_type = dict(by_type.most_common())
    return summary


def summarize_orders(orders: Iterable[Order], top_n: int = 5) -> OrdersSummary:
    """
    Aggregate orders for the dashboard summary.

    Args:
        orders: Order records
        top_n: Number of best-selling products to keep

    Returns:
        OrdersSummary with sales, items, status counts and top products
    """
    summary = OrdersSummary()
    statuses: Counter[str] = Counter()
    products: Counter[str] = Counter()

    for order in orders:
        summary.sales += order.total
        summary.subtotals += order.subtotal
        summary.items += order.item_count
        summary.count += 1
        statuses[order.status] += 1
        for item in order.order_items:
            products[item.product_name or UNKNOWN_PRODUCT] += item.quantity

    summary.status_counts = dict(statuses)
    summary.top_products = [
        ProductSales(name=name, quantity=quantity)
        for name, quantity in products.most_common(top_n)
    ]
    return summary
