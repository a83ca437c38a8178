"""Storage contract for delivery zone and pricing lookups."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, Optional

from ..models.domain import DeliveryCost, DeliveryZone


class DeliveryRepository(ABC):
    """Read-only access to zones and their pricing.

    Zone lookups walk the geography strictly: region, then city within the
    region, then commune within the city. A commune that is not registered
    under the city yields ``None`` rather than the city-wide zone.
    """

    @abstractmethod
    def find_zone_by_location(
        self,
        region: str,
        city: str,
        commune: Optional[str] = None,
    ) -> DeliveryZone | None:
        raise NotImplementedError

    @abstractmethod
    def get_cost_by_zone_id(self, zone_id: str) -> DeliveryCost | None:
        raise NotImplementedError

    @abstractmethod
    def find_active_zones(self) -> list[DeliveryZone]:
        raise NotImplementedError

    @abstractmethod
    def find_available_regions(self) -> list[str]:
        raise NotImplementedError

    @abstractmethod
    def find_cities_by_region(self, region: str) -> list[str]:
        raise NotImplementedError

    @abstractmethod
    def find_communes_by_city(self, region: str, city: str) -> list[str]:
        raise NotImplementedError


def pick_zone(candidates: Iterable[DeliveryZone]) -> DeliveryZone | None:
    """Prefer the active zone when stale inactive rows share a location."""
    fallback: DeliveryZone | None = None
    for zone in candidates:
        if zone.is_active:
            return zone
        if fallback is None:
            fallback = zone
    return fallback


def sort_zones(zones: Iterable[DeliveryZone]) -> list[DeliveryZone]:
    # city-wide zone sorts ahead of its communes
    return sorted(zones, key=lambda z: (z.region, z.city, z.commune is not None, z.commune or ""))


def unique_sorted(names: Iterable[Optional[str]]) -> list[str]:
    return sorted({name for name in names if name})
