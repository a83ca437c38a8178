"""Delivery pricing services."""

from .errors import (
    DeliveryError,
    InvalidDeliveryRequest,
    PricingNotConfigured,
    ZoneInactive,
    ZoneNotFound,
)
from .lead_time import LeadTimePolicy
from .service import DeliveryService, get_delivery_service

__all__ = [
    "DeliveryError",
    "DeliveryService",
    "InvalidDeliveryRequest",
    "LeadTimePolicy",
    "PricingNotConfigured",
    "ZoneInactive",
    "ZoneNotFound",
    "get_delivery_service",
]
