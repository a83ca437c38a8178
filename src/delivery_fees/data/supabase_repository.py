"""Delivery repository reading zones and pricing from Supabase tables."""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx
from supabase import Client

from ..models.domain import DeliveryCost, DeliveryZone
from .base import DeliveryRepository, pick_zone, sort_zones, unique_sorted

logger = logging.getLogger(__name__)

REGIONS_TABLE = "regions"
CITIES_TABLE = "cities"
COMMUNES_TABLE = "communes"
ZONES_TABLE = "delivery_zones"
COSTS_TABLE = "delivery_costs"

# PostgREST embeds the location names alongside each zone row
ZONE_COLUMNS = "id, is_active, region_id, city_id, commune_id, regions(name), cities(name), communes(name)"


def _embedded_name(row: dict[str, Any], relation: str) -> Optional[str]:
    related = row.get(relation)
    if isinstance(related, list):
        related = related[0] if related else None
    if not related:
        return None
    return related.get("name")


def _row_to_zone(row: dict[str, Any]) -> DeliveryZone:
    region = _embedded_name(row, "regions")
    city = _embedded_name(row, "cities")
    if not region or not city:
        raise ValueError(f"Zone {row.get('id')} is missing its region or city")
    return DeliveryZone(
        id=str(row["id"]),
        region=region,
        city=city,
        commune=_embedded_name(row, "communes"),
        is_active=bool(row.get("is_active", True)),
    )


def _row_to_cost(row: dict[str, Any]) -> DeliveryCost:
    return DeliveryCost(
        id=str(row["id"]),
        zone_id=str(row["zone_id"]),
        base_fee=float(row["base_fee"]),
        weight_multiplier=float(row["weight_multiplier"]),
        distance_multiplier=float(row["distance_multiplier"]),
        min_fee=float(row["min_fee"]),
        max_fee=float(row["max_fee"]),
        is_active=bool(row.get("is_active", True)),
    )


class SupabaseDeliveryRepository(DeliveryRepository):
    """Reads the ``regions``/``cities``/``communes`` geography and the zone tables."""

    def __init__(self, client: Client) -> None:
        self.client = client

    def _execute(self, query, *, table: str) -> list[dict[str, Any]]:
        try:
            response = query.execute()
        except httpx.HTTPError as exc:
            raise ConnectionError(f"Cannot reach Supabase while reading '{table}': {exc}") from exc
        except Exception as exc:
            logger.error(f"Supabase query on '{table}' failed: {exc}")
            raise ConnectionError(f"Supabase query on '{table}' failed: {exc}") from exc
        return response.data or []

    def _map_zones(self, rows: list[dict[str, Any]]) -> list[DeliveryZone]:
        zones: list[DeliveryZone] = []
        for row in rows:
            try:
                zones.append(_row_to_zone(row))
            except (KeyError, ValueError, TypeError) as e:
                logger.warning(f"Skipping invalid delivery zone row: {e}")
        return zones

    def _region_id(self, region: str) -> Any | None:
        rows = self._execute(
            self.client.table(REGIONS_TABLE).select("id").eq("name", region).limit(1),
            table=REGIONS_TABLE,
        )
        return rows[0]["id"] if rows else None

    def _city_id(self, region_id: Any, city: str) -> Any | None:
        rows = self._execute(
            self.client.table(CITIES_TABLE).select("id").eq("name", city).eq("region_id", region_id).limit(1),
            table=CITIES_TABLE,
        )
        return rows[0]["id"] if rows else None

    def _commune_id(self, city_id: Any, commune: str) -> Any | None:
        rows = self._execute(
            self.client.table(COMMUNES_TABLE).select("id").eq("name", commune).eq("city_id", city_id).limit(1),
            table=COMMUNES_TABLE,
        )
        return rows[0]["id"] if rows else None

    def find_zone_by_location(
        self,
        region: str,
        city: str,
        commune: Optional[str] = None,
    ) -> DeliveryZone | None:
        region_id = self._region_id(region)
        if region_id is None:
            return None
        city_id = self._city_id(region_id, city)
        if city_id is None:
            return None

        query = (
            self.client.table(ZONES_TABLE)
            .select(ZONE_COLUMNS)
            .eq("region_id", region_id)
            .eq("city_id", city_id)
        )
        if commune:
            commune_id = self._commune_id(city_id, commune)
            if commune_id is None:
                return None
            query = query.eq("commune_id", commune_id)
        else:
            query = query.is_("commune_id", "null")

        return pick_zone(self._map_zones(self._execute(query, table=ZONES_TABLE)))

    def get_cost_by_zone_id(self, zone_id: str) -> DeliveryCost | None:
        rows = self._execute(
            self.client.table(COSTS_TABLE)
            .select("*")
            .eq("zone_id", zone_id)
            .order("is_active", desc=True)
            .limit(1),
            table=COSTS_TABLE,
        )
        if not rows:
            return None
        try:
            return _row_to_cost(rows[0])
        except (KeyError, ValueError, TypeError) as e:
            logger.warning(f"Invalid delivery cost row for zone {zone_id}: {e}")
            return None

    def find_active_zones(self) -> list[DeliveryZone]:
        rows = self._execute(
            self.client.table(ZONES_TABLE).select(ZONE_COLUMNS).eq("is_active", True),
            table=ZONES_TABLE,
        )
        return sort_zones(self._map_zones(rows))

    def find_available_regions(self) -> list[str]:
        rows = self._execute(self.client.table(ZONES_TABLE).select("regions(name)"), table=ZONES_TABLE)
        return unique_sorted(_embedded_name(row, "regions") for row in rows)

    def find_cities_by_region(self, region: str) -> list[str]:
        region_id = self._region_id(region)
        if region_id is None:
            return []
        rows = self._execute(
            self.client.table(ZONES_TABLE).select("cities(name)").eq("region_id", region_id),
            table=ZONES_TABLE,
        )
        return unique_sorted(_embedded_name(row, "cities") for row in rows)

    def find_communes_by_city(self, region: str, city: str) -> list[str]:
        region_id = self._region_id(region)
        if region_id is None:
            return []
        city_id = self._city_id(region_id, city)
        if city_id is None:
            return []
        rows = self._execute(
            self.client.table(ZONES_TABLE).select("communes(name)").eq("city_id", city_id),
            table=ZONES_TABLE,
        )
        return unique_sorted(_embedded_name(row, "communes") for row in rows)

    def count_zones(self) -> int:
        rows = self._execute(self.client.table(ZONES_TABLE).select("id"), table=ZONES_TABLE)
        return len(rows)
