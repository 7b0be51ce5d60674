"""Location port - Deduplicating lookup/insert of locations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..domain.models import LocationDescription


class LocationResolverPort(Protocol):
    """Port for location resolution.

    Implementation: adapters/memory/location_resolver.py

    Resolution has get-or-create semantics: a description whose
    (home, city, street) matches an existing location returns that
    location's identifier, otherwise a new location is stored.
    """

    def resolve(self, description: LocationDescription) -> int:
        """Return the identifier of the location matching `description`.

        Must be safe to call concurrently for the same description
        without creating duplicates.

        Args:
            description: Location content to look up or create.

        Returns:
            Identifier of the existing or newly created location.

        Raises:
            LocationError: If the description is malformed.
        """
        ...
