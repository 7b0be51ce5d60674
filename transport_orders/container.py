"""Wiring of the order service onto one shared in-memory store.

The API resolves OrderService from the process-wide container; tests build
their own with Container.create_default() and override single ports.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from .config import AppConfig, get_config


@dataclass
class Container:
    """Factories keyed by port type, cached per type unless registered with
    singleton=False.

    Attributes:
        config: Configuration handed to the default wiring
    """

    config: AppConfig = field(default_factory=get_config)

    _factories: Dict[type[Any], Callable[[], Any]] = field(
        default_factory=dict, repr=False
    )
    _singletons: Dict[type[Any], Any] = field(default_factory=dict, repr=False)
    _singleton_types: set[type[Any]] = field(default_factory=set, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def register(
        self,
        port_type: type[Any],
        factory: Callable[[], Any],
        singleton: bool = True,
    ) -> None:
        """Bind `factory` to `port_type`, dropping any instance cached for it."""
        with self._lock:
            self._factories[port_type] = factory
            self._singletons.pop(port_type, None)
            if singleton:
                self._singleton_types.add(port_type)
            else:
                self._singleton_types.discard(port_type)

    def resolve(self, port_type: type[Any]) -> Any:
        """Build or return the cached instance bound to `port_type`.

        Raises:
            KeyError: If the type is not registered.
        """
        with self._lock:
            if port_type not in self._factories:
                raise KeyError(f"Type not registered: {port_type}")

            if port_type in self._singleton_types:
                if port_type not in self._singletons:
                    self._singletons[port_type] = self._factories[port_type]()
                return self._singletons[port_type]

            return self._factories[port_type]()

    @classmethod
    def create_default(cls, config: Optional[AppConfig] = None) -> Container:
        """Bind the in-memory adapters and OrderService.

        All adapters share one in-memory store, so storage transactions
        also cover cargo rows and locations. The service takes its workflow
        from `config`, or from get_config() when none is given.
        """
        from .adapters.memory import (
            InMemoryCargoRegistrar,
            InMemoryLocationResolver,
            InMemoryOrderStorage,
            InMemoryStore,
        )
        from .ports.cargo import CargoRegistrarPort
        from .ports.locations import LocationResolverPort
        from .ports.storage import OrderStoragePort
        from .services import OrderService

        container = cls(config=config or get_config())

        container.register(InMemoryStore, lambda: InMemoryStore())
        container.register(
            LocationResolverPort,
            lambda: InMemoryLocationResolver(container.resolve(InMemoryStore)),
        )
        container.register(
            CargoRegistrarPort,
            lambda: InMemoryCargoRegistrar(container.resolve(InMemoryStore)),
        )
        container.register(
            OrderStoragePort,
            lambda: InMemoryOrderStorage(container.resolve(InMemoryStore)),
        )

        def create_order_service() -> OrderService:
            return OrderService(
                storage=container.resolve(OrderStoragePort),
                location_resolver=container.resolve(LocationResolverPort),
                cargo_registrar=container.resolve(CargoRegistrarPort),
                workflow=container.config.workflow,
            )

        container.register(OrderService, create_order_service)

        return container


_default_container: Optional[Container] = None
_container_lock = threading.Lock()


def get_container() -> Container:
    """Return the process-wide container, building it on first use."""
    global _default_container
    if _default_container is None:
        with _container_lock:
            if _default_container is None:
                _default_container = Container.create_default()
    return _default_container


def reset_container() -> None:
    """Drop the process-wide container; the next get_container() rebuilds it."""
    global _default_container
    with _container_lock:
        _default_container = None
