# ==============================================================================
# Analytics Commands
# ==============================================================================
"""
Admin dashboard commands for the shoptrack CLI.

Displays the activity panel and the orders summary from the PostgreSQL
database.
"""

import json
from datetime import timedelta
from typing import Annotated, NoReturn, Optional

import typer
from rich.console import Console
from rich.table import Table

from shoptrack.cli.shared import (
    BOX_WIDTH,
    C,
    I,
    _box_bottom,
    _box_header,
    _box_line,
    _empty_line,
    _section_header,
)
from shoptrack.core.analytics import (
    ALL_EVENTS,
    filter_activities,
    summarize_activity,
    summarize_orders,
)
from shoptrack.utils.config import get_settings


def _fail(message: str, json_output: bool) -> NoReturn:
    if json_output:
        print(json.dumps({"error": message}))
    else:
        print(f"\n{C.BRIGHT_RED}{I.CROSS} {message}{C.RESET}\n")
    raise typer.Exit(1)


# ==============================================================================
# Commands
# ==============================================================================


def analytics_activity(
    event_type: Annotated[
        str, typer.Option("--event-type", "-t", help="Only list events of this type")
    ] = ALL_EVENTS,
    limit: Annotated[
        Optional[int], typer.Option("--limit", "-n", help="Number of recent events to load")
    ] = None,
    json_output: Annotated[
        bool, typer.Option("--json", "-j", help="Output as JSON for scripting")
    ] = False,
) -> None:
    """Show the user activity panel.

    Headline counters cover every loaded event; the table lists the events
    matching --event-type, newest first.

    Examples:
        shoptrack analytics activity
        shoptrack analytics activity -t add_to_cart -n 50
        shoptrack analytics activity --json
    """
    from shoptrack.utils.db import load_recent_activities

    settings = get_settings()

    try:
        activities = load_recent_activities(limit or settings.analytics.activity_limit)
    except Exception as e:
        _fail(f"Failed to load activity: {e}", json_output)

    summary = summarize_activity(
        activities, window=timedelta(hours=settings.analytics.recent_window_hours)
    )
    listed = filter_activities(activities, event_type)

    if json_output:
        print(
            json.dumps(
                {
                    "summary": summary.model_dump(),
                    "event_type": event_type,
                    "events": [a.model_dump(mode="json") for a in listed],
                },
                indent=2,
            )
        )
        return

    W = BOX_WIDTH
    window = f"Last {settings.analytics.recent_window_hours}h"

    print()
    print(_box_header("USER ACTIVITY", W))
    print(_empty_line(W))
    print(_box_line(f"  {'Total Events':<26}{summary.total:>12,}", W))
    print(_box_line(f"  {window:<26}{summary.recent:>12,}", W))
    print(_box_line(f"  {'Page Views':<26}{summary.page_views:>12,}", W))
    print(_box_line(f"  {'Clicks':<26}{summary.clicks:>12,}", W))
    if summary.by_type:
        print(_empty_line(W))
        print(_section_header("Events by Type", W))
        for name, count in summary.by_type.items():
            print(_box_line(f"  {name[:26]:<26}{count:>12,}", W))
    print(_empty_line(W))
    print(_box_bottom(W))

    if not listed:
        print(f"\n  {C.BRIGHT_YELLOW}{I.WARN} No activity found{C.RESET}\n")
        return

    # Rich table output
    console = Console()
    table = Table(
        title=f"Recent Activity ({event_type})",
        show_header=True,
        header_style="bold",
    )
    table.add_column("Time", justify="left")
    table.add_column("User", justify="left")
    table.add_column("Event", justify="left")
    table.add_column("Page", justify="left")
    table.add_column("Details", justify="left", overflow="fold")

    for activity in listed:
        table.add_row(
            activity.created_at.strftime("%Y-%m-%d %H:%M:%S"),
            activity.full_name or "Anonymous",
            activity.event_type,
            activity.page_url or "-",
            json.dumps(activity.event_data) if activity.event_data else "",
        )

    print()
    console.print(table)
    print()


def analytics_orders(
    json_output: Annotated[
        bool, typer.Option("--json", "-j", help="Output as JSON for scripting")
    ] = False,
) -> None:
    """Show the orders summary.

    Total sales, items sold, order count, average order value, approximate
    profit (totals minus subtotals), status breakdown and top products.

    Examples:
        shoptrack analytics orders
        shoptrack analytics orders --json
    """
    from shoptrack.utils.db import load_orders

    settings = get_settings()

    try:
        orders = load_orders()
    except Exception as e:
        _fail(f"Failed to load orders: {e}", json_output)

    summary = summarize_orders(orders, top_n=settings.analytics.top_products)

    if json_output:
        print(json.dumps(summary.to_dict(), indent=2))
        return

    W = BOX_WIDTH

    print()
    print(_box_header("ORDERS SUMMARY", W))
    print(_empty_line(W))
    print(_box_line(f"  {'Total Sales':<26}{summary.sales:>12,.2f}", W))
    print(_box_line(f"  {'Items Sold':<26}{summary.items:>12,}", W))
    print(_box_line(f"  {'Orders':<26}{summary.count:>12,}", W))
    print(_box_line(f"  {'Avg Order Value':<26}{summary.average_order_value:>12,.2f}", W))
    print(_box_line(f"  {'Profit (approx.)':<26}{summary.profit:>12,.2f}", W))

    if summary.status_counts:
        print(_empty_line(W))
        print(_section_header("Orders by Status", W))
        for status, count in sorted(summary.status_counts.items()):
            print(_box_line(f"  {status[:26]:<26}{count:>12,}", W))

    if summary.top_products:
        print(_empty_line(W))
        print(_section_header("Top Products", W))
        for rank, product in enumerate(summary.top_products, start=1):
            label = f"{rank}. {product.name}"[:26]
            print(_box_line(f"  {label:<26}{product.quantity:>12,}", W))

    print(_empty_line(W))
    print(_box_bottom(W))
    print()
