"""Adapters layer - Concrete implementations of ports.

This module contains implementations of the port interfaces,
connecting the order service to:
- Location resolution (in-memory get-or-create)
- Cargo registration (in-memory)
- Order storage (in-memory, with transactions)
"""
