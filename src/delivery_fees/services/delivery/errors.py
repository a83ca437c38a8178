"""Domain failures raised while pricing a delivery."""

from __future__ import annotations


class DeliveryError(ValueError):
    """Base class for recoverable delivery pricing failures."""


class InvalidDeliveryRequest(DeliveryError):
    pass


class ZoneNotFound(DeliveryError):
    def __init__(self, region: str, city: str, commune: str | None = None) -> None:
        location = ", ".join(part for part in (region, city, commune) if part)
        super().__init__(f"Delivery zone not available for {location}")
        self.region = region
        self.city = city
        self.commune = commune


class ZoneInactive(DeliveryError):
    def __init__(self, zone_id: str) -> None:
        super().__init__("Delivery is temporarily unavailable for this zone")
        self.zone_id = zone_id


class PricingNotConfigured(DeliveryError):
    def __init__(self, zone_id: str) -> None:
        super().__init__("Delivery pricing is not configured for this zone")
        self.zone_id = zone_id
