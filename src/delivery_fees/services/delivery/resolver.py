"""Zone resolution and the location listings behind client dropdowns."""

from __future__ import annotations

from typing import Optional

from ...data.base import DeliveryRepository, sort_zones, unique_sorted
from ...models.domain import DeliveryZone


class ZoneResolver:
    def __init__(self, repository: DeliveryRepository) -> None:
        self.repository = repository

    def resolve(self, region: str, city: str, commune: Optional[str] = None) -> DeliveryZone | None:
        """Return the zone covering the location, or ``None`` when none is registered.

        A blank commune means the city-wide zone.
        """
        commune = (commune or "").strip() or None
        return self.repository.find_zone_by_location(region.strip(), city.strip(), commune)

    def list_zones(self) -> list[DeliveryZone]:
        return sort_zones(self.repository.find_active_zones())

    def list_regions(self) -> list[str]:
        return unique_sorted(self.repository.find_available_regions())

    def list_cities(self, region: str) -> list[str]:
        return unique_sorted(self.repository.find_cities_by_region(region.strip()))

    def list_communes(self, region: str, city: str) -> list[str]:
        return unique_sorted(self.repository.find_communes_by_city(region.strip(), city.strip()))
