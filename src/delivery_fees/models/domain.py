"""Domain models for delivery zones, pricing and fee calculations."""

from dataclasses import dataclass
from typing import Optional


@dataclass(slots=True)
class DeliveryZone:
    """A deliverable geographic unit. ``commune=None`` covers the whole city."""

    id: str
    region: str
    city: str
    commune: Optional[str] = None
    is_active: bool = True

    @property
    def location_key(self) -> tuple[str, str, Optional[str]]:
        return (self.region, self.city, self.commune)


@dataclass(slots=True)
class DeliveryCost:
    """Pricing parameters attached to a single zone."""

    id: str
    zone_id: str
    base_fee: float
    weight_multiplier: float
    distance_multiplier: float
    min_fee: float
    max_fee: float
    is_active: bool = True

    @property
    def has_valid_bounds(self) -> bool:
        return self.min_fee <= self.max_fee


@dataclass(slots=True)
class DeliveryRequest:
    region: str
    city: str
    commune: Optional[str] = None
    weight: Optional[float] = None  # kg
    distance: Optional[float] = None  # km


@dataclass(slots=True)
class DeliveryCalculation:
    zone_id: str
    region: str
    city: str
    commune: Optional[str]
    base_fee: float
    weight_fee: float
    distance_fee: float
    total_fee: int
    estimated_days: int
