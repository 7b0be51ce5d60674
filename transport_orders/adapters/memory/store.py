"""Thread-safe in-memory record store.

Holds one table per record type, keyed by integer identifier, and hands
out identifiers from per-table sequences. The location resolver, cargo
registrar and order storage adapters share one store so that a
transaction covers writes made by all of them.

Key properties:
- Thread-safe with RLock
- Storage-maintained timestamps through an injectable clock
- Snapshot/restore transactions
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterator, List, Optional

from ...domain.models import User

TABLES = ("users", "cities", "streets", "locations", "orders", "cargos")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class InMemoryStore:
    """Record store backing the in-memory adapters.

    Attributes:
        name: Store name for logging
        clock: Source of created_at/updated_at timestamps

    Example:
        store = InMemoryStore()
        owner = store.add_user("Anna", "Berzina")
        with store.transaction():
            ...
    """

    name: str = "default"
    clock: Callable[[], datetime] = utcnow

    _tables: Dict[str, Dict[int, Any]] = field(
        default_factory=lambda: {table: {} for table in TABLES}, repr=False
    )
    _sequences: Dict[str, int] = field(
        default_factory=lambda: {table: 0 for table in TABLES}, repr=False
    )
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(f"store.{self.name}")

    @property
    def lock(self) -> threading.RLock:
        """Lock guarding every table; adapters hold it across read-then-write."""
        return self._lock

    def now(self) -> datetime:
        return self.clock()

    def next_id(self, table: str) -> int:
        with self._lock:
            self._sequences[table] += 1
            return self._sequences[table]

    def get(self, table: str, record_id: int) -> Optional[Any]:
        with self._lock:
            return self._tables[table].get(record_id)

    def put(self, table: str, record: Any) -> Any:
        """Insert or replace a record under its `id`."""
        with self._lock:
            self._tables[table][record.id] = record
            return record

    def rows(self, table: str) -> List[Any]:
        """Return a table's records in insertion order."""
        with self._lock:
            return list(self._tables[table].values())

    def count(self, table: str) -> int:
        with self._lock:
            return len(self._tables[table])

    def add_user(
        self, first_name: str, last_name: str, user_id: Optional[int] = None
    ) -> User:
        """Seed a user row. Users are managed outside the order service."""
        with self._lock:
            if user_id is None:
                user_id = self.next_id("users")
            else:
                self._sequences["users"] = max(self._sequences["users"], user_id)
            return self.put("users", User(id=user_id, first_name=first_name, last_name=last_name))

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Undo every write made inside the block if it raises.

        The store lock is held for the whole block, so other threads wait
        until the transaction commits or rolls back.
        """
        with self._lock:
            tables = {table: dict(rows) for table, rows in self._tables.items()}
            sequences = dict(self._sequences)
            self._logger.debug("Transaction started")
            try:
                yield
            except BaseException:
                self._tables = tables
                self._sequences = sequences
                self._logger.info("Transaction rolled back")
                raise
            self._logger.debug("Transaction committed")
