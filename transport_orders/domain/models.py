"""Immutable domain models for transport orders.

All models are frozen dataclasses with slots. Records are produced by the
storage layer and replaced wholesale on update; descriptions are the inputs
callers hand to the order service.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional


class OrderStatus(str, Enum):
    """Approval workflow status of an order.

    Orders start as PENDING and move to APPROVED or DECLINED.
    """

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    DECLINED = "DECLINED"


class CreationStage(str, Enum):
    """Stage of order creation a failure is attributed to."""

    FROM_LOCATION = "from_location"
    TO_LOCATION = "to_location"
    ORDER_INSERT = "order_insert"
    CARGO = "cargo"


@dataclass(frozen=True, slots=True)
class LocationDescription:
    """Content of a location as supplied by a requester.

    Two descriptions with the same key resolve to the same location.

    Attributes:
        home: Whether the location is a private home address
        city: City name
        street: Street name
    """

    home: bool
    city: str
    street: str

    @property
    def key(self) -> tuple[bool, str, str]:
        """Deduplication key of the location."""
        return (self.home, self.city, self.street)


@dataclass(frozen=True, slots=True)
class CargoDescription:
    """A cargo line item. The order service never inspects its attributes."""

    weight: Optional[float] = None
    size: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True, slots=True)
class CreateOrder:
    """Input of order creation.

    Attributes:
        owner_id: Identifier of the requesting user
        from_location: Pickup location
        to_location: Drop-off location
        cargos: Cargo lines, registered in this order
    """

    owner_id: int
    from_location: LocationDescription
    to_location: LocationDescription
    cargos: tuple[CargoDescription, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class RouteUpdate:
    """New route endpoints for an existing order."""

    from_location: LocationDescription
    to_location: LocationDescription


@dataclass(frozen=True, slots=True)
class User:
    id: int
    first_name: str
    last_name: str


@dataclass(frozen=True, slots=True)
class City:
    id: int
    name: str


@dataclass(frozen=True, slots=True)
class Street:
    id: int
    name: str


@dataclass(frozen=True, slots=True)
class Location:
    """A stored location, referencing its city and street rows."""

    id: int
    home: bool
    city_id: int
    street_id: int


@dataclass(frozen=True, slots=True)
class Order:
    """A stored transport order.

    Attributes:
        id: Identifier assigned by storage
        owner_id: Requesting user, immutable
        from_location_id: Pickup location reference
        to_location_id: Drop-off location reference
        status: Current workflow status
        created_at: Set by storage on insert
        updated_at: Set by storage on every write
    """

    id: int
    owner_id: int
    from_location_id: int
    to_location_id: int
    status: OrderStatus
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True, slots=True)
class Cargo:
    """A stored cargo line, owned by exactly one order."""

    id: int
    order_id: int
    weight: Optional[float] = None
    size: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True, slots=True)
class OrderFilter:
    """Equality filter over orders. Unset fields match everything."""

    status: Optional[OrderStatus] = None
    owner_id: Optional[int] = None

    def matches(self, order: Order) -> bool:
        if self.status is not None and order.status is not self.status:
            return False
        if self.owner_id is not None and order.owner_id != self.owner_id:
            return False
        return True


@dataclass(frozen=True, slots=True)
class OrderUpdate:
    """Fields to write on an existing order. None means unchanged."""

    from_location_id: Optional[int] = None
    to_location_id: Optional[int] = None
    status: Optional[OrderStatus] = None

    def changes(self) -> Dict[str, Any]:
        """Return only the fields that are set."""
        values = {
            "from_location_id": self.from_location_id,
            "to_location_id": self.to_location_id,
            "status": self.status,
        }
        return {name: value for name, value in values.items() if value is not None}
