"""Pydantic request/response models for delivery endpoints."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class CalculateDeliveryFeeRequest(BaseModel):
    region: str = Field(..., description="Delivery region.", examples=["Centre"])
    city: str = Field(..., description="Delivery city.", examples=["Yaoundé"])
    commune: Optional[str] = Field(default=None, description="Delivery commune.", examples=["Mfoundi"])
    weight: Optional[float] = Field(default=None, allow_inf_nan=False, description="Parcel weight in kg.", examples=[2.5])
    distance: Optional[float] = Field(default=None, allow_inf_nan=False, description="Distance in km.", examples=[10])


class CheckDeliveryAvailabilityRequest(BaseModel):
    region: str
    city: str
    commune: Optional[str] = None


class DeliveryAvailabilityResponse(BaseModel):
    available: bool


class DeliveryCalculationResponse(BaseModel):
    zoneId: str
    region: str
    city: str
    commune: Optional[str] = None
    baseFee: float
    weightFee: float
    distanceFee: float
    totalFee: int
    estimatedDays: int


class DeliveryZoneModel(BaseModel):
    id: str
    region: str
    city: str
    commune: Optional[str] = None
    isActive: bool
