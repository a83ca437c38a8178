"""In-memory delivery repository backed by plain zone and cost sequences."""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..models.domain import DeliveryCost, DeliveryZone
from .base import DeliveryRepository, pick_zone, sort_zones, unique_sorted


class InMemoryDeliveryRepository(DeliveryRepository):
    """Holds zones, costs and the region/city/commune geography in memory.

    ``locations`` registers geography that has no zone of its own, as
    ``(region, city, commune)`` tuples where commune may be ``None``.
    """

    def __init__(
        self,
        zones: Sequence[DeliveryZone] = (),
        costs: Sequence[DeliveryCost] = (),
        locations: Iterable[tuple[str, str, Optional[str]]] = (),
    ) -> None:
        self._zones: tuple[DeliveryZone, ...] = tuple(zones)
        self._costs: dict[str, list[DeliveryCost]] = {}
        for cost in costs:
            self._costs.setdefault(cost.zone_id, []).append(cost)

        self._cities: dict[str, set[str]] = {}
        self._communes: dict[tuple[str, str], set[str]] = {}
        for region, city, commune in [z.location_key for z in self._zones] + list(locations):
            self._cities.setdefault(region, set()).add(city)
            communes = self._communes.setdefault((region, city), set())
            if commune:
                communes.add(commune)

    @property
    def zones(self) -> tuple[DeliveryZone, ...]:
        return self._zones

    def find_zone_by_location(
        self,
        region: str,
        city: str,
        commune: Optional[str] = None,
    ) -> DeliveryZone | None:
        cities = self._cities.get(region)
        if cities is None or city not in cities:
            return None
        if commune and commune not in self._communes.get((region, city), set()):
            return None
        key = (region, city, commune or None)
        return pick_zone(zone for zone in self._zones if zone.location_key == key)

    def get_cost_by_zone_id(self, zone_id: str) -> DeliveryCost | None:
        candidates = self._costs.get(zone_id, [])
        for cost in candidates:
            if cost.is_active:
                return cost
        return candidates[0] if candidates else None

    def find_active_zones(self) -> list[DeliveryZone]:
        return sort_zones(zone for zone in self._zones if zone.is_active)

    def find_available_regions(self) -> list[str]:
        return unique_sorted(zone.region for zone in self._zones)

    def find_cities_by_region(self, region: str) -> list[str]:
        return unique_sorted(zone.city for zone in self._zones if zone.region == region)

    def find_communes_by_city(self, region: str, city: str) -> list[str]:
        return unique_sorted(
            zone.commune for zone in self._zones if zone.region == region and zone.city == city
        )
