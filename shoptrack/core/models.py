# ==============================================================================
# Activity Tracking Domain Models
# ==============================================================================
"""
Pydantic models for storefront activity events.

These models are used for:
- Assembling the canonical record sent to the event sink
- Serializing the unload beacon body
- Reading activity and order rows back for the admin dashboard

This module is part of the core domain layer and has no external dependencies
beyond Pydantic.
"""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator


class EventType(str, Enum):
    """Event types produced by the tracking pipeline itself.

    Click events carry whatever type their marker declares, so event_type
    fields are plain strings; these are the well-known values.
    """

    PAGE_VIEW = "page_view"
    TIME_ON_PAGE = "time_on_page"
    CLICK = "click"


class ActivityEvent(BaseModel):
    """
    A single telemetry record describing a user or system occurrence.

    Attributes:
        user_id: Authenticated principal at emission time, None for anonymous
        session_id: Identifier of the tracker session that emitted the event
        event_type: Short discriminator (page_view, time_on_page, marker value)
        event_data: Optional payload whose shape depends on event_type
        page_url: Path component of the current location at emission time
    """

    user_id: str | None = Field(None, description="Authenticated user id (nullable)")
    session_id: str = Field(..., description="Tracker session identifier")
    event_type: str = Field(..., min_length=1, description="Event type")
    event_data: dict[str, Any] | None = Field(None, description="Event payload")
    page_url: str = Field(..., description="Current location path")

    def to_record(self) -> dict:
        """Serialize to the column layout of the activity table.

        created_at is absent; the sink assigns it on insert.
        """
        return {
            "user_id": self.user_id,
            "session_id": self.session_id,
            "event_type": self.event_type,
            "event_data": self.event_data,
            "page_url": self.page_url,
        }


class BeaconPayload(BaseModel):
    """Body of the unload-time timing beacon."""

    event: str = Field(default=EventType.TIME_ON_PAGE.value)
    ms: int = Field(..., ge=0, description="Elapsed time on the departing page")

    def to_bytes(self) -> bytes:
        """Serialize as a JSON document."""
        return self.model_dump_json().encode("utf-8")


class ClickMarker(BaseModel):
    """Resolved tracking marker of a clicked element.

    Attributes:
        event_type: Marker value, or "click" when the marker is empty
        payload: Event data built from the meta attribute and element metadata
    """

    event_type: str
    payload: dict[str, Any] = Field(default_factory=dict)


class ActivityRecord(BaseModel):
    """An activity row as read back for the admin dashboard."""

    id: str
    event_type: str
    created_at: datetime
    page_url: str | None = None
    event_data: dict[str, Any] | None = None
    user_id: str | None = None
    full_name: str | None = None

    @property
    def is_click(self) -> bool:
        """Whether the event counts as a click on the dashboard."""
        return "click" in self.event_type


class OrderItem(BaseModel):
    """A line item stored inside an order's order_items document."""

    product_id: str | None = None
    product_name: str | None = None
    quantity: int = 0
    price: float = 0.0

    @field_validator("quantity", mode="before")
    @classmethod
    def quantity_or_zero(cls, value: Any) -> int:
        """NULL or non-numeric quantities count as 0."""
        try:
            return int(value)
        except (TypeError, ValueError):
            return 0

    @field_validator("price", mode="before")
    @classmethod
    def price_or_zero(cls, value: Any) -> float:
        """NULL or non-numeric prices count as 0."""
        try:
            return float(value)
        except (TypeError, ValueError):
            return 0.0


class Order(BaseModel):
    """An order row as read back for the admin dashboard."""

    id: str
    status: str = "pending"
    total: float = 0.0
    subtotal: float = 0.0
    order_items: list[OrderItem] = Field(default_factory=list)
    created_at: datetime | None = None

    @property
    def item_count(self) -> int:
        """Total quantity across all line items."""
        return sum(item.quantity for item in self.order_items)
