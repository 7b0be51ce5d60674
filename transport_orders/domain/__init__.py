"""Domain layer - Core business models, read views and errors.

No external dependencies.
"""

from .errors import (
    CollaboratorError,
    ConfigurationError,
    InvalidTransitionError,
    LocationError,
    OrderNotFoundError,
    PartialCreationError,
    StorageError,
    TransportOrderError,
)
from .models import (
    Cargo,
    CargoDescription,
    City,
    CreateOrder,
    CreationStage,
    Location,
    LocationDescription,
    Order,
    OrderFilter,
    OrderStatus,
    OrderUpdate,
    RouteUpdate,
    Street,
    User,
)
from .views import (
    ORDER_STATUS,
    ORDER_SUMMARY,
    LocationView,
    OrderRow,
    OrderSummary,
    OwnerView,
)

__all__ = [
    # Models
    "OrderStatus",
    "CreationStage",
    "LocationDescription",
    "CargoDescription",
    "CreateOrder",
    "RouteUpdate",
    "User",
    "City",
    "Street",
    "Location",
    "Order",
    "Cargo",
    "OrderFilter",
    "OrderUpdate",
    # Views
    "LocationView",
    "OwnerView",
    "OrderSummary",
    "OrderRow",
    "ORDER_SUMMARY",
    "ORDER_STATUS",
    # Errors
    "TransportOrderError",
    "OrderNotFoundError",
    "CollaboratorError",
    "PartialCreationError",
    "InvalidTransitionError",
    "LocationError",
    "StorageError",
    "ConfigurationError",
]
