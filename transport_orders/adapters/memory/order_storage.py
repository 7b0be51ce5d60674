"""In-memory order storage.

This adapter implements OrderStoragePort over an InMemoryStore and adds:
- Reference checks on insert (owner and both locations must exist)
- Joins of owner and location names for projections
- Storage-maintained timestamps
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import ContextManager, List, Optional, TypeVar

from ...domain.errors import OrderNotFoundError, StorageError
from ...domain.models import Order, OrderFilter, OrderStatus, OrderUpdate
from ...domain.views import LocationView, OrderRow
from ...ports.storage import Projection
from .store import InMemoryStore

T = TypeVar("T")


@dataclass
class InMemoryOrderStorage:
    """Order table access with projection support.

    Attributes:
        store: Shared record store
    """

    store: InMemoryStore
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def insert(
        self, owner_id: int, from_location_id: int, to_location_id: int
    ) -> Order:
        """Insert a new PENDING order.

        Raises:
            StorageError: If the owner or a location does not exist.
        """
        with self.store.lock:
            if self.store.get("users", owner_id) is None:
                raise StorageError(f"Unknown owner {owner_id}", table="orders")
            for location_id in (from_location_id, to_location_id):
                if self.store.get("locations", location_id) is None:
                    raise StorageError(
                        f"Unknown location {location_id}", table="orders"
                    )

            now = self.store.now()
            order = self.store.put(
                "orders",
                Order(
                    id=self.store.next_id("orders"),
                    owner_id=owner_id,
                    from_location_id=from_location_id,
                    to_location_id=to_location_id,
                    status=OrderStatus.PENDING,
                    created_at=now,
                    updated_at=now,
                ),
            )

        self._logger.debug("Order inserted", extra={"order_id": order.id})
        return order

    def find_many(self, where: OrderFilter, projection: Projection[T]) -> List[T]:
        with self.store.lock:
            return [
                projection.apply(self._join(order))
                for order in self.store.rows("orders")
                if where.matches(order)
            ]

    def find_unique(self, order_id: int, projection: Projection[T]) -> Optional[T]:
        with self.store.lock:
            order = self.store.get("orders", order_id)
            if order is None:
                return None
            return projection.apply(self._join(order))

    def update(self, order_id: int, fields: OrderUpdate) -> Order:
        """Write the set fields of an update and bump updated_at.

        Raises:
            OrderNotFoundError: If the order does not exist.
            StorageError: If a new location reference does not exist.
        """
        changes = fields.changes()
        with self.store.lock:
            order = self.store.get("orders", order_id)
            if order is None:
                raise OrderNotFoundError(
                    f"Order {order_id} not found", order_id=order_id
                )
            for name in ("from_location_id", "to_location_id"):
                if name in changes and self.store.get("locations", changes[name]) is None:
                    raise StorageError(
                        f"Unknown location {changes[name]}", table="orders"
                    )
            updated = self.store.put(
                "orders", replace(order, updated_at=self.store.now(), **changes)
            )

        self._logger.debug(
            "Order updated",
            extra={"order_id": order_id, "fields": sorted(changes)},
        )
        return updated

    def transaction(self) -> ContextManager[None]:
        return self.store.transaction()

    def _join(self, order: Order) -> OrderRow:
        return OrderRow(
            order=order,
            owner=self.store.get("users", order.owner_id),
            from_location=self._location_view(order.from_location_id),
            to_location=self._location_view(order.to_location_id),
        )

    def _location_view(self, location_id: int) -> LocationView:
        location = self.store.get("locations", location_id)
        return LocationView(
            home=location.home,
            city=self.store.get("cities", location.city_id).name,
            street=self.store.get("streets", location.street_id).name,
        )
