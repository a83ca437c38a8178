"""High-level orchestration for delivery fee requests."""

from __future__ import annotations

import functools
import logging
import math
from typing import Optional

from ...config import settings
from ...data import get_delivery_repository
from ...data.base import DeliveryRepository
from ...models.domain import DeliveryCalculation, DeliveryRequest, DeliveryZone
from .errors import (
    DeliveryError,
    InvalidDeliveryRequest,
    PricingNotConfigured,
    ZoneInactive,
    ZoneNotFound,
)
from .fees import compute_fee
from .lead_time import LeadTimePolicy
from .resolver import ZoneResolver

logger = logging.getLogger(__name__)


def _require(value: Optional[str], message: str) -> str:
    if not value or not value.strip():
        raise InvalidDeliveryRequest(message)
    return value.strip()


class DeliveryService:
    """Resolves the zone for a request, prices it and estimates the lead time."""

    def __init__(
        self,
        repository: DeliveryRepository,
        lead_time_policy: LeadTimePolicy | None = None,
        free_weight_kg: float | None = None,
        free_distance_km: float | None = None,
    ) -> None:
        self.repository = repository
        self.resolver = ZoneResolver(repository)
        self.lead_time_policy = lead_time_policy or LeadTimePolicy.from_settings()
        self.free_weight_kg = free_weight_kg if free_weight_kg is not None else settings.free_weight_kg
        self.free_distance_km = free_distance_km if free_distance_km is not None else settings.free_distance_km

    def _validate(self, request: DeliveryRequest) -> None:
        _require(request.region, "Region is required")
        _require(request.city, "City is required")
        if request.weight is not None:
            if not math.isfinite(request.weight):
                raise InvalidDeliveryRequest("Weight must be a finite number")
            if request.weight < 0:
                raise InvalidDeliveryRequest("Weight cannot be negative")
        if request.distance is not None:
            if not math.isfinite(request.distance):
                raise InvalidDeliveryRequest("Distance must be a finite number")
            if request.distance < 0:
                raise InvalidDeliveryRequest("Distance cannot be negative")

    def calculate_fee(self, request: DeliveryRequest) -> DeliveryCalculation:
        self._validate(request)

        zone = self.resolver.resolve(request.region, request.city, request.commune)
        if zone is None:
            raise ZoneNotFound(request.region, request.city, request.commune)
        if not zone.is_active:
            raise ZoneInactive(zone.id)

        cost = self.repository.get_cost_by_zone_id(zone.id)
        if cost is None or not cost.is_active:
            raise PricingNotConfigured(zone.id)

        breakdown = compute_fee(
            cost,
            request.weight,
            request.distance,
            free_kg=self.free_weight_kg,
            free_km=self.free_distance_km,
        )
        estimated_days = self.lead_time_policy.estimate(request.region.strip(), request.city.strip())

        return DeliveryCalculation(
            zone_id=zone.id,
            region=zone.region,
            city=zone.city,
            commune=zone.commune,
            base_fee=breakdown.base_fee,
            weight_fee=breakdown.weight_fee,
            distance_fee=breakdown.distance_fee,
            total_fee=breakdown.total_fee,
            estimated_days=estimated_days,
        )

    def is_delivery_available(self, region: str, city: str, commune: Optional[str] = None) -> bool:
        try:
            self.calculate_fee(DeliveryRequest(region=region, city=city, commune=commune))
        except DeliveryError as exc:
            logger.info(f"Delivery unavailable for {region}, {city}, {commune or '-'}: {exc}")
            return False
        return True

    def list_zones(self) -> list[DeliveryZone]:
        return self.resolver.list_zones()

    def list_regions(self) -> list[str]:
        return self.resolver.list_regions()

    def list_cities_by_region(self, region: str) -> list[str]:
        region = _require(region, "Region is required")
        return self.resolver.list_cities(region)

    def list_communes_by_city(self, region: str, city: str) -> list[str]:
        region = _require(region, "Region is required")
        city = _require(city, "City is required")
        return self.resolver.list_communes(region, city)


@functools.lru_cache(maxsize=1)
def get_delivery_service() -> DeliveryService:
    return DeliveryService(get_delivery_repository())
