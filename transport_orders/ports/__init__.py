"""Ports layer - Abstract interfaces (Protocols) for the application.

Ports define the contracts between the order service and the systems it
drives: location resolution, cargo registration and order storage.
"""

from .cargo import CargoRegistrarPort
from .locations import LocationResolverPort
from .storage import OrderStoragePort, Projection

__all__ = [
    "LocationResolverPort",
    "CargoRegistrarPort",
    "OrderStoragePort",
    "Projection",
]
