# ==============================================================================
# Tests for Admin Analytics
# ==============================================================================
"""
Unit tests for the dashboard aggregations in shoptrack.core.analytics.
"""

from datetime import datetime, timedelta, timezone

import pytest

from shoptrack.core.analytics import filter_activities, summarize_activity, summarize_orders
from shoptrack.core.models import ActivityRecord, Order

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def _activity(event_type: str, hours_ago: float = 1.0, **extra) -> ActivityRecord:
    return ActivityRecord(
        id=f"{event_type}-{hours_ago}",
        event_type=event_type,
        created_at=NOW - timedelta(hours=hours_ago),
        **extra,
    )


# ==============================================================================
# Activity panel
# ==============================================================================


class TestSummarizeActivity:
    def test_counts(self):
        activities = [
            _activity("page_view"),
            _activity("page_view", hours_ago=30),
            _activity("click"),
            _activity("product_click"),
            _activity("add_to_cart", hours_ago=48),
        ]
        summary = summarize_activity(activities, now=NOW)
        assert summary.total == 5
        assert summary.recent == 3
        assert summary.page_views == 2
        assert summary.clicks == 2
        assert summary.by_type == {
            "page_view": 2,
            "click": 1,
            "product_click": 1,
            "add_to_cart": 1,
        }

    def test_empty(self):
        summary = summarize_activity([], now=NOW)
        assert summary.total == 0
        assert summary.by_type == {}

    def test_naive_timestamps_treated_as_utc(self):
        naive = ActivityRecord(
            id="1", event_type="page_view", created_at=datetime(2024, 6, 1, 11, 0)
        )
        assert summarize_activity([naive], now=NOW).recent == 1

    def test_custom_window(self):
        activities = [_activity("page_view", hours_ago=2)]
        assert summarize_activity(activities, now=NOW, window=timedelta(hours=1)).recent == 0


class TestFilterActivities:
    def test_all_keeps_everything(self):
        activities = [_activity("a"), _activity("b")]
        assert filter_activities(activities, "all") == activities
        assert filter_activities(activities, None) == activities

    def test_filters_by_type(self):
        activities = [_activity("a"), _activity("b"), _activity("a", hours_ago=2)]
        assert [x.event_type for x in filter_activities(activities, "a")] == ["a", "a"]


# ==============================================================================
# Orders summary
# ==============================================================================


class TestSummarizeOrders:
    @pytest.fixture()
    def orders(self):
        return [
            Order(
                id="o1",
                status="delivered",
                total=110.0,
                subtotal=100.0,
                order_items=[
                    {"product_name": "Mug", "quantity": 2, "price": 20.0},
                    {"product_name": "Tee", "quantity": 3, "price": 20.0},
                ],
            ),
            Order(
                id="o2",
                status="pending",
                total=55.0,
                subtotal=50.0,
                order_items=[
                    {"product_name": "Mug", "quantity": 4},
                    {"quantity": 1},
                ],
            ),
        ]

    def test_totals(self, orders):
        summary = summarize_orders(orders)
        assert summary.sales == pytest.approx(165.0)
        assert summary.items == 10
        assert summary.count == 2
        assert summary.average_order_value == pytest.approx(82.5)
        assert summary.profit == pytest.approx(15.0)

    def test_status_counts(self, orders):
        assert summarize_orders(orders).status_counts == {"delivered": 1, "pending": 1}

    def test_top_products(self, orders):
        top = summarize_orders(orders).top_products
        assert [(p.name, p.quantity) for p in top] == [("Mug", 6), ("Tee", 3), ("Unknown", 1)]

    def test_top_n_limit(self, orders):
        assert len(summarize_orders(orders, top_n=1).top_products) == 1

    def test_no_orders(self):
        summary = summarize_orders([])
        assert summary.average_order_value == 0.0
        assert summary.profit == 0.0
        assert summary.top_products == []

    def test_null_line_item_numbers_count_as_zero(self):
        order = Order(
            id="o3",
            total=10.0,
            order_items=[
                {"product_name": "Mug", "quantity": None, "price": 1},
                {"product_name": "Tee", "quantity": 2, "price": None},
            ],
        )
        assert order.order_items[0].quantity == 0
        assert order.order_items[1].price == 0.0
        summary = summarize_orders([order])
        assert summary.items == 2
        assert [(p.name, p.quantity) for p in summary.top_products] == [("Tee", 2), ("Mug", 0)]

    def test_to_dict_includes_derived(self, orders):
        data = summarize_orders(orders).to_dict()
        assert data["average_order_value"] == pytest.approx(82.5)
        assert data["profit"] == pytest.approx(15.0)
