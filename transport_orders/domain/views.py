"""Read shapes returned by the order service.

Each read operation declares the shape it returns as a projection value.
Storage joins an order with its owner and both locations into an
`OrderRow` and hands it to the projection, which picks the fields.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .models import Order, OrderStatus, User


@dataclass(frozen=True, slots=True)
class LocationView:
    """Projected location: home flag plus city and street names."""

    home: bool
    city: str
    street: str


@dataclass(frozen=True, slots=True)
class OwnerView:
    """Display name of an order owner."""

    first_name: str
    last_name: str


@dataclass(frozen=True, slots=True)
class OrderSummary:
    """Order as returned by the listing and lookup operations.

    Attributes:
        id: Order identifier
        created_at: Creation timestamp
        updated_at: Last write timestamp
        owner: Owner display name
        from_location: Pickup location
        to_location: Drop-off location
        status: Workflow status
    """

    id: int
    created_at: datetime
    updated_at: datetime
    owner: OwnerView
    from_location: LocationView
    to_location: LocationView
    status: OrderStatus


@dataclass(frozen=True, slots=True)
class OrderRow:
    """An order joined with its owner and resolved locations."""

    order: Order
    owner: User
    from_location: LocationView
    to_location: LocationView


@dataclass(frozen=True, slots=True)
class OrderSummaryProjection:
    def apply(self, row: OrderRow) -> OrderSummary:
        order = row.order
        return OrderSummary(
            id=order.id,
            created_at=order.created_at,
            updated_at=order.updated_at,
            owner=OwnerView(
                first_name=row.owner.first_name,
                last_name=row.owner.last_name,
            ),
            from_location=row.from_location,
            to_location=row.to_location,
            status=order.status,
        )


@dataclass(frozen=True, slots=True)
class OrderStatusProjection:
    def apply(self, row: OrderRow) -> OrderStatus:
        return row.order.status


ORDER_SUMMARY = OrderSummaryProjection()
ORDER_STATUS = OrderStatusProjection()
