"""Order service - Order lifecycle orchestrator.

This service owns creation, retrieval, route updates and approval
status changes of transport orders. It composes the location resolver,
the cargo registrar and order storage, and reports every collaborator
failure with the stage it happened in.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from functools import partial
from typing import Callable, List, Optional, Sequence

from ..config import WorkflowConfig, get_config
from ..domain.errors import (
    CollaboratorError,
    InvalidTransitionError,
    OrderNotFoundError,
    PartialCreationError,
)
from ..domain.models import (
    CargoDescription,
    CreateOrder,
    CreationStage,
    LocationDescription,
    Order,
    OrderFilter,
    OrderStatus,
    OrderUpdate,
    RouteUpdate,
)
from ..domain.views import ORDER_STATUS, ORDER_SUMMARY, OrderSummary
from ..ports.cargo import CargoRegistrarPort
from ..ports.locations import LocationResolverPort
from ..ports.storage import OrderStoragePort


@dataclass
class OrderService:
    """Main service for transport order lifecycle.

    Creation runs in three steps:
    1. Resolve pickup and drop-off locations (get-or-create)
    2. Insert the order as PENDING
    3. Register cargo lines one by one, in input order

    Attributes:
        storage: Order persistence
        location_resolver: Deduplicating location lookup/insert
        cargo_registrar: Cargo row insert
        workflow: Transition and transaction policies
    """

    storage: OrderStoragePort
    location_resolver: LocationResolverPort
    cargo_registrar: CargoRegistrarPort
    workflow: WorkflowConfig = field(default_factory=lambda: get_config().workflow)

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def create_order(self, command: CreateOrder) -> Order:
        """Create an order with its route and cargo lines.

        Args:
            command: Owner, both locations and the cargo lines.

        Returns:
            The stored order.

        Raises:
            CollaboratorError: If a location, the order insert or (with
                transactional_create) a cargo line failed. Nothing is persisted
                apart from locations resolved before the failure.
            PartialCreationError: If a cargo line failed after the order was
                persisted. Carries the order id.
        """
        self._logger.info(
            "Creating order",
            extra={"owner_id": command.owner_id, "cargos": len(command.cargos)},
        )

        from_location_id, to_location_id = self._resolve_location_ids(
            command.from_location, command.to_location
        )

        if self.workflow.transactional_create:
            with self.storage.transaction():
                order = self._insert_order(
                    command.owner_id, from_location_id, to_location_id
                )
                cargo_ids = self._register_cargos(order.id, command.cargos, atomic=True)
        else:
            order = self._insert_order(command.owner_id, from_location_id, to_location_id)
            cargo_ids = self._register_cargos(order.id, command.cargos, atomic=False)

        self._logger.info(
            "Order created",
            extra={"order_id": order.id, "cargo_ids": list(cargo_ids)},
        )
        return order

    def get_not_approved_orders(self) -> List[OrderSummary]:
        """Return every order still waiting for approval."""
        return self.storage.find_many(
            OrderFilter(status=OrderStatus.PENDING), ORDER_SUMMARY
        )

    def get_user_orders(self, owner_id: int) -> List[OrderSummary]:
        """Return every order placed by `owner_id`, possibly none."""
        return self.storage.find_many(OrderFilter(owner_id=owner_id), ORDER_SUMMARY)

    def get_orders_filtered_by(
        self, status: Optional[OrderStatus], owner_id: Optional[int]
    ) -> List[OrderSummary]:
        raise NotImplementedError("Order filtering is not available")

    def get_order(self, order_id: int) -> Optional[OrderSummary]:
        """Return one order, or None if it does not exist."""
        return self.storage.find_unique(order_id, ORDER_SUMMARY)

    def update_order(self, order_id: int, update: RouteUpdate) -> Order:
        """Replace the route endpoints of an order.

        Status, owner and cargo lines are left untouched; cargo lines are
        changed through the cargo registrar.

        Raises:
            CollaboratorError: If a location could not be resolved.
            OrderNotFoundError: If the order does not exist.
        """
        from_location_id, to_location_id = self._resolve_location_ids(
            update.from_location, update.to_location
        )
        order = self.storage.update(
            order_id,
            OrderUpdate(
                from_location_id=from_location_id,
                to_location_id=to_location_id,
            ),
        )
        self._logger.info(
            "Order route updated",
            extra={
                "order_id": order_id,
                "from_location_id": from_location_id,
                "to_location_id": to_location_id,
            },
        )
        return order

    def approve_order(self, order_id: int) -> int:
        """Mark an order APPROVED and return its id."""
        return self._transition(order_id, OrderStatus.APPROVED)

    def decline_order(self, order_id: int) -> int:
        """Mark an order DECLINED and return its id."""
        return self._transition(order_id, OrderStatus.DECLINED)

    def _transition(self, order_id: int, target: OrderStatus) -> int:
        # permissive mode overwrites whatever status the order has
        if self.workflow.transition_mode == "strict":
            # the status check and the write must not interleave with another transition
            with self.storage.transaction():
                self._check_pending(order_id, target)
                order = self.storage.update(order_id, OrderUpdate(status=target))
        else:
            order = self.storage.update(order_id, OrderUpdate(status=target))

        self._logger.info(
            "Order status changed",
            extra={"order_id": order.id, "status": target.value},
        )
        return order.id

    def _check_pending(self, order_id: int, target: OrderStatus) -> None:
        current = self.storage.find_unique(order_id, ORDER_STATUS)
        if current is None:
            raise OrderNotFoundError(f"Order {order_id} not found", order_id=order_id)
        if current is not OrderStatus.PENDING:
            raise InvalidTransitionError(
                f"Order {order_id} is {current.value}, cannot become {target.value}",
                order_id=order_id,
                current=current,
                target=target,
            )

    def _resolve_location_ids(
        self,
        from_location: LocationDescription,
        to_location: LocationDescription,
    ) -> tuple[int, int]:
        """Resolve both route endpoints.

        Both resolutions finish before this returns. When both fail, the
        from-location failure is the one reported.
        """
        resolve = self.location_resolver.resolve

        if self.workflow.concurrent_location_resolution:
            with ThreadPoolExecutor(max_workers=2, thread_name_prefix="location") as pool:
                from_future = pool.submit(resolve, from_location)
                to_future = pool.submit(resolve, to_location)
            calls: Sequence[Callable[[], int]] = (from_future.result, to_future.result)
        else:
            calls = (partial(resolve, from_location), partial(resolve, to_location))

        from_location_id = self._resolve_one(CreationStage.FROM_LOCATION, calls[0])
        to_location_id = self._resolve_one(CreationStage.TO_LOCATION, calls[1])
        return from_location_id, to_location_id

    def _resolve_one(self, stage: CreationStage, call: Callable[[], int]) -> int:
        try:
            return call()
        except Exception as e:
            self._logger.warning(
                "Location resolution failed",
                extra={"stage": stage.value, "error": str(e)},
            )
            raise CollaboratorError(
                f"Could not resolve {stage.value.replace('_', ' ')}",
                stage=stage,
                cause=e,
            )

    def _insert_order(
        self, owner_id: int, from_location_id: int, to_location_id: int
    ) -> Order:
        try:
            return self.storage.insert(owner_id, from_location_id, to_location_id)
        except Exception as e:
            self._logger.error(
                "Order insert failed",
                extra={"owner_id": owner_id, "error": str(e)},
            )
            raise CollaboratorError(
                "Could not insert order",
                stage=CreationStage.ORDER_INSERT,
                cause=e,
            )

    def _register_cargos(
        self,
        order_id: int,
        cargos: Sequence[CargoDescription],
        atomic: bool,
    ) -> tuple[int, ...]:
        """Register cargo lines in order, stopping at the first failure.

        With `atomic`, the caller's transaction undoes the order, so the
        failure is a plain CollaboratorError; otherwise the order and the
        cargo rows before the failing one stay persisted.
        """
        registered: List[int] = []
        for index, cargo in enumerate(cargos):
            try:
                registered.append(self.cargo_registrar.register(order_id, cargo))
            except Exception as e:
                self._logger.error(
                    "Cargo registration failed",
                    extra={
                        "order_id": order_id,
                        "cargo_index": index,
                        "error": str(e),
                    },
                )
                if atomic:
                    raise CollaboratorError(
                        f"Could not register cargo {index}, order creation rolled back",
                        stage=CreationStage.CARGO,
                        cargo_index=index,
                        cause=e,
                    )
                raise PartialCreationError(
                    f"Order {order_id} was created but cargo {index} could not be registered",
                    order_id=order_id,
                    cargo_index=index,
                    registered_cargo_ids=tuple(registered),
                    cause=e,
                )
        return tuple(registered)
