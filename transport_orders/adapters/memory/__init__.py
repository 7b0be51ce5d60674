"""In-memory adapters sharing one record store.

Available implementations:
- InMemoryStore: Thread-safe tables with transactions
- InMemoryLocationResolver: Get-or-create locations
- InMemoryCargoRegistrar: Cargo rows tied to an order
- InMemoryOrderStorage: Order rows with projections
"""

from .cargo_registrar import InMemoryCargoRegistrar
from .location_resolver import InMemoryLocationResolver
from .order_storage import InMemoryOrderStorage
from .store import InMemoryStore

__all__ = [
    "InMemoryStore",
    "InMemoryLocationResolver",
    "InMemoryCargoRegistrar",
    "InMemoryOrderStorage",
]
