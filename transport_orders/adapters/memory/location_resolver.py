"""In-memory location resolver.

Locations reference a city row and a street row; both are looked up by
name and created on first use, then the location itself is looked up by
(home, city, street). The whole get-or-create runs under the store lock,
so concurrent calls with the same description return one identifier.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from ...domain.errors import LocationError
from ...domain.models import City, Location, LocationDescription, Street
from .store import InMemoryStore


@dataclass
class InMemoryLocationResolver:
    """Get-or-create location resolution over an InMemoryStore.

    This adapter implements LocationResolverPort.
    """

    store: InMemoryStore
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def resolve(self, description: LocationDescription) -> int:
        """Return the id of the location matching `description`, creating it if needed.

        Raises:
            LocationError: If the city or street name is blank.
        """
        if not description.city.strip() or not description.street.strip():
            raise LocationError(
                "City and street names must not be blank",
                description=description,
            )

        with self.store.lock:
            city = self._get_or_create_city(description.city)
            street = self._get_or_create_street(description.street)
            existing = self._find_location(description.home, city.id, street.id)
            if existing is not None:
                self._logger.debug(
                    "Location reused",
                    extra={"location_id": existing.id, "key": description.key},
                )
                return existing.id

            location = self.store.put(
                "locations",
                Location(
                    id=self.store.next_id("locations"),
                    home=description.home,
                    city_id=city.id,
                    street_id=street.id,
                ),
            )
            self._logger.info(
                "Location created",
                extra={"location_id": location.id, "key": description.key},
            )
            return location.id

    def _get_or_create_city(self, name: str) -> City:
        for city in self.store.rows("cities"):
            if city.name == name:
                return city
        return self.store.put("cities", City(id=self.store.next_id("cities"), name=name))

    def _get_or_create_street(self, name: str) -> Street:
        for street in self.store.rows("streets"):
            if street.name == name:
                return street
        return self.store.put(
            "streets", Street(id=self.store.next_id("streets"), name=name)
        )

    def _find_location(
        self, home: bool, city_id: int, street_id: int
    ) -> Optional[Location]:
        for location in self.store.rows("locations"):
            if (
                location.home == home
                and location.city_id == city_id
                and location.street_id == street_id
            ):
                return location
        return None
