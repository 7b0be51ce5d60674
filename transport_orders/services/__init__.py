"""Services layer - Application orchestration.

This module contains the application services that orchestrate
the flow of data through adapters to fulfill use cases.

Available services:
- OrderService: Order creation, lookup, route updates and approval
"""

from .order_service import OrderService

__all__ = ["OrderService"]
