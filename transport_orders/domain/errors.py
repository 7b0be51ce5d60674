"""Typed domain errors for transport orders.

All errors inherit from TransportOrderError and can optionally wrap a
root cause exception for debugging. The order service never swallows
collaborator failures; it re-raises them as one of these types with the
stage that failed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .models import CreationStage, LocationDescription, OrderStatus


@dataclass
class TransportOrderError(Exception):
    """Base error for the transport order domain.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class OrderNotFoundError(TransportOrderError):
    """Referenced order does not exist.

    Attributes:
        order_id: The identifier that was looked up
    """

    order_id: Optional[int] = None


@dataclass
class CollaboratorError(TransportOrderError):
    """Location resolution, order insert or cargo registration failed.

    No order or cargo row from the failing call is kept: either the failure
    happened before the order was inserted, or the insert was rolled back.
    Locations resolved before the failure stay stored.

    Attributes:
        stage: Which step of the operation failed
        cargo_index: Position of the failing cargo line, for the CARGO stage
    """

    stage: Optional[CreationStage] = None
    cargo_index: Optional[int] = None


@dataclass
class PartialCreationError(TransportOrderError):
    """The order was persisted but a cargo line failed to register.

    Cargo lines before `cargo_index` are persisted, the failing line and
    the ones after it are not.

    Attributes:
        order_id: The persisted order
        cargo_index: Position of the failing cargo line
        registered_cargo_ids: Cargo rows created before the failure
    """

    order_id: Optional[int] = None
    cargo_index: Optional[int] = None
    registered_cargo_ids: tuple[int, ...] = ()


@dataclass
class InvalidTransitionError(TransportOrderError):
    """Status change rejected by the strict transition policy."""

    order_id: Optional[int] = None
    current: Optional[OrderStatus] = None
    target: Optional[OrderStatus] = None


@dataclass
class LocationError(TransportOrderError):
    """A location description could not be resolved.

    Attributes:
        description: The offending description
    """

    description: Optional[LocationDescription] = None


@dataclass
class StorageError(TransportOrderError):
    """A record could not be written, e.g. a broken reference.

    Attributes:
        table: Name of the table involved
    """

    table: str = ""


@dataclass
class ConfigurationError(TransportOrderError):
    """Invalid or missing configuration.

    Attributes:
        setting_name: Name of the problematic setting
    """

    setting_name: str = ""
