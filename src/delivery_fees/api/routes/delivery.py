"""API routes for delivery fee calculation and zone listings."""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, HTTPException, Query, status

from ...models.domain import DeliveryRequest, DeliveryZone
from ...schemas.delivery import (
    CalculateDeliveryFeeRequest,
    CheckDeliveryAvailabilityRequest,
    DeliveryAvailabilityResponse,
    DeliveryCalculationResponse,
    DeliveryZoneModel,
)
from ...services.delivery import (
    DeliveryError,
    InvalidDeliveryRequest,
    PricingNotConfigured,
    ZoneInactive,
    ZoneNotFound,
    get_delivery_service,
)

router = APIRouter(prefix="/delivery", tags=["delivery"])

_ERROR_STATUS: dict[type[DeliveryError], int] = {
    InvalidDeliveryRequest: status.HTTP_400_BAD_REQUEST,
    ZoneNotFound: status.HTTP_404_NOT_FOUND,
    ZoneInactive: status.HTTP_409_CONFLICT,
    PricingNotConfigured: status.HTTP_409_CONFLICT,
}


def _to_http_error(exc: Exception) -> HTTPException:
    if isinstance(exc, ConnectionError):
        logging.warning(f"Delivery store unavailable: {exc}")
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Database connection error: {exc}",
        )
    status_code = _ERROR_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST)
    logging.info(f"Delivery request rejected ({status_code}): {exc}")
    return HTTPException(status_code=status_code, detail=str(exc))


def _zone_model(zone: DeliveryZone) -> DeliveryZoneModel:
    return DeliveryZoneModel(
        id=zone.id,
        region=zone.region,
        city=zone.city,
        commune=zone.commune,
        isActive=zone.is_active,
    )


@router.post("/calculate-fee", response_model=DeliveryCalculationResponse, status_code=status.HTTP_200_OK)
def calculate_delivery_fee(payload: CalculateDeliveryFeeRequest) -> DeliveryCalculationResponse:
    request = DeliveryRequest(
        region=payload.region,
        city=payload.city,
        commune=payload.commune,
        weight=payload.weight,
        distance=payload.distance,
    )
    try:
        calculation = get_delivery_service().calculate_fee(request)
    except (DeliveryError, ConnectionError) as exc:
        raise _to_http_error(exc) from exc
    return DeliveryCalculationResponse(
        zoneId=calculation.zone_id,
        region=calculation.region,
        city=calculation.city,
        commune=calculation.commune,
        baseFee=calculation.base_fee,
        weightFee=calculation.weight_fee,
        distanceFee=calculation.distance_fee,
        totalFee=calculation.total_fee,
        estimatedDays=calculation.estimated_days,
    )


@router.post("/check-availability", response_model=DeliveryAvailabilityResponse, status_code=status.HTTP_200_OK)
def check_delivery_availability(payload: CheckDeliveryAvailabilityRequest) -> DeliveryAvailabilityResponse:
    try:
        available = get_delivery_service().is_delivery_available(payload.region, payload.city, payload.commune)
    except ConnectionError as exc:
        raise _to_http_error(exc) from exc
    return DeliveryAvailabilityResponse(available=available)


@router.get("/zones", response_model=List[DeliveryZoneModel], status_code=status.HTTP_200_OK)
def list_zones() -> List[DeliveryZoneModel]:
    try:
        zones = get_delivery_service().list_zones()
    except ConnectionError as exc:
        raise _to_http_error(exc) from exc
    return [_zone_model(zone) for zone in zones]


@router.get("/regions", response_model=List[str], status_code=status.HTTP_200_OK)
def list_regions() -> List[str]:
    try:
        return get_delivery_service().list_regions()
    except ConnectionError as exc:
        raise _to_http_error(exc) from exc


@router.get("/cities", response_model=List[str], status_code=status.HTTP_200_OK)
def list_cities(region: str = Query(default="", description="Region to list cities for")) -> List[str]:
    try:
        return get_delivery_service().list_cities_by_region(region)
    except (DeliveryError, ConnectionError) as exc:
        raise _to_http_error(exc) from exc


@router.get("/communes", response_model=List[str], status_code=status.HTTP_200_OK)
def list_communes(
    region: str = Query(default="", description="Region of the city"),
    city: str = Query(default="", description="City to list communes for"),
) -> List[str]:
    try:
        return get_delivery_service().list_communes_by_city(region, city)
    except (DeliveryError, ConnectionError) as exc:
        raise _to_http_error(exc) from exc
