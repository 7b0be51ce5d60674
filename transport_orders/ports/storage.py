"""Storage port - Order record CRUD with projections.

Only the operations the order service needs are part of the contract.
Schema, query language and connection handling belong to the adapter.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ContextManager, List, Optional, Protocol, TypeVar

if TYPE_CHECKING:
    from ..domain.models import Order, OrderFilter, OrderUpdate
    from ..domain.views import OrderRow

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)


class Projection(Protocol[T_co]):
    """A read shape: selects fields from a joined order row.

    Implementations: domain/views.py (ORDER_SUMMARY, ORDER_STATUS)
    """

    def apply(self, row: OrderRow) -> T_co:
        ...


class OrderStoragePort(Protocol):
    """Port for order persistence.

    Implementation: adapters/memory/order_storage.py
    """

    def insert(
        self, owner_id: int, from_location_id: int, to_location_id: int
    ) -> Order:
        """Insert a new PENDING order.

        Returns:
            The stored order with its identifier and timestamps.

        Raises:
            StorageError: If a referenced owner or location does not exist.
        """
        ...

    def find_many(self, where: OrderFilter, projection: Projection[T]) -> List[T]:
        """Return every order matching `where`, shaped by `projection`."""
        ...

    def find_unique(self, order_id: int, projection: Projection[T]) -> Optional[T]:
        """Return one order shaped by `projection`, or None if absent."""
        ...

    def update(self, order_id: int, fields: OrderUpdate) -> Order:
        """Write the set fields of `fields` to an order.

        Raises:
            OrderNotFoundError: If the order does not exist.
        """
        ...

    def transaction(self) -> ContextManager[None]:
        """Group writes so that an exception inside the block undoes them all.

        Covers writes made by collaborators sharing the same store.
        """
        ...
