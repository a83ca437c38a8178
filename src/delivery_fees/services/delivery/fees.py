"""Fee arithmetic for a zone's pricing parameters."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional

from ...config import DEFAULT_FREE_DISTANCE_KM, DEFAULT_FREE_WEIGHT_KG
from ...models.domain import DeliveryCost
from .errors import InvalidDeliveryRequest

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class FeeBreakdown:
    base_fee: float
    weight_fee: float
    distance_fee: float
    total_fee: int


def weight_fee(weight: Optional[float], multiplier: float, free_kg: float = DEFAULT_FREE_WEIGHT_KG) -> float:
    """Surcharge for the weight above the free allowance. Missing weight counts as zero."""
    weight = weight or 0.0
    if weight <= free_kg:
        return 0.0
    return (weight - free_kg) * multiplier


def distance_fee(distance: Optional[float], multiplier: float, free_km: float = DEFAULT_FREE_DISTANCE_KM) -> float:
    """Surcharge for the distance above the free allowance. Missing distance counts as zero."""
    distance = distance or 0.0
    if distance <= free_km:
        return 0.0
    return (distance - free_km) * multiplier


def clamp_fee(total: float, min_fee: float, max_fee: float) -> float:
    # min_fee wins when the bounds are inverted
    return max(min_fee, min(max_fee, total))


def round_fee(total: float) -> int:
    """Round half up to a whole currency unit."""
    return int(math.floor(total + 0.5))


def compute_fee(
    cost: DeliveryCost,
    weight: Optional[float] = None,
    distance: Optional[float] = None,
    *,
    free_kg: float = DEFAULT_FREE_WEIGHT_KG,
    free_km: float = DEFAULT_FREE_DISTANCE_KM,
) -> FeeBreakdown:
    """Price a parcel: base fee plus surcharges, clamped as a whole to the zone bounds."""
    if not cost.has_valid_bounds:
        logger.warning(
            f"Delivery cost {cost.id} for zone {cost.zone_id} has min_fee {cost.min_fee:g} "
            f"above max_fee {cost.max_fee:g}; min_fee will always apply"
        )

    w_fee = weight_fee(weight, cost.weight_multiplier, free_kg)
    d_fee = distance_fee(distance, cost.distance_multiplier, free_km)
    if not math.isfinite(w_fee):
        raise InvalidDeliveryRequest("Weight is too large to price")
    if not math.isfinite(d_fee):
        raise InvalidDeliveryRequest("Distance is too large to price")
    total = clamp_fee(cost.base_fee + w_fee + d_fee, cost.min_fee, cost.max_fee)
    return FeeBreakdown(
        base_fee=cost.base_fee,
        weight_fee=w_fee,
        distance_fee=d_fee,
        total_fee=round_fee(total),
    )
