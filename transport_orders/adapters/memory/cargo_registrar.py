"""In-memory cargo registrar."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ...domain.errors import StorageError
from ...domain.models import Cargo, CargoDescription
from .store import InMemoryStore


@dataclass
class InMemoryCargoRegistrar:
    """Stores cargo rows in an InMemoryStore.

    This adapter implements CargoRegistrarPort. The owning order must
    already exist.
    """

    store: InMemoryStore
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def register(self, order_id: int, cargo: CargoDescription) -> int:
        with self.store.lock:
            if self.store.get("orders", order_id) is None:
                raise StorageError(
                    f"Cannot register cargo for unknown order {order_id}",
                    table="cargos",
                )
            row = self.store.put(
                "cargos",
                Cargo(
                    id=self.store.next_id("cargos"),
                    order_id=order_id,
                    weight=cargo.weight,
                    size=cargo.size,
                    description=cargo.description,
                ),
            )
        self._logger.debug(
            "Cargo registered", extra={"cargo_id": row.id, "order_id": order_id}
        )
        return row.id

    def list_for_order(self, order_id: int) -> list[Cargo]:
        """Return the cargo rows owned by an order, in registration order."""
        return [cargo for cargo in self.store.rows("cargos") if cargo.order_id == order_id]
