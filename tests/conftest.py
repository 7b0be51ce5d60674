"""Shared fixtures: an in-memory store with one seeded owner and the adapters over it."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from transport_orders.adapters.memory import (
    InMemoryCargoRegistrar,
    InMemoryLocationResolver,
    InMemoryOrderStorage,
    InMemoryStore,
)
from transport_orders.config import WorkflowConfig, reset_config
from transport_orders.container import reset_container
from transport_orders.services import OrderService

OWNER_ID = 7


class TickingClock:
    """Clock that advances one second per reading."""

    def __init__(self) -> None:
        self.current = datetime(2026, 1, 1, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        self.current += timedelta(seconds=1)
        return self.current


@pytest.fixture(autouse=True)
def fresh_globals():
    reset_config()
    reset_container()
    yield
    reset_config()
    reset_container()


@pytest.fixture
def store():
    store = InMemoryStore(name="test", clock=TickingClock())
    store.add_user("Anna", "Berzina", user_id=OWNER_ID)
    return store


@pytest.fixture
def resolver(store):
    return InMemoryLocationResolver(store)


@pytest.fixture
def registrar(store):
    return InMemoryCargoRegistrar(store)


@pytest.fixture
def storage(store):
    return InMemoryOrderStorage(store)


@pytest.fixture
def make_service(storage, resolver, registrar):
    """Build an OrderService with workflow overrides, e.g. make_service(transition_mode="strict")."""

    def factory(cargo_registrar=None, **workflow) -> OrderService:
        return OrderService(
            storage=storage,
            location_resolver=resolver,
            cargo_registrar=cargo_registrar or registrar,
            workflow=WorkflowConfig(**workflow),
        )

    return factory


@pytest.fixture
def service(make_service):
    return make_service()
