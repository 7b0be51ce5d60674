"""Cargo port - Registration of cargo lines against an order."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..domain.models import CargoDescription


class CargoRegistrarPort(Protocol):
    """Port for cargo registration.

    Implementation: adapters/memory/cargo_registrar.py
    """

    def register(self, order_id: int, cargo: CargoDescription) -> int:
        """Persist a cargo row owned by `order_id`.

        Args:
            order_id: The owning order.
            cargo: Cargo attributes.

        Returns:
            Identifier of the new cargo row.

        Raises:
            StorageError: If the order does not exist.
        """
        ...
