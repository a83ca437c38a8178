"""Delivery zone and pricing data sources."""

from __future__ import annotations

import functools
import logging

from ..db.supabase import get_supabase_client
from .base import DeliveryRepository
from .memory import InMemoryDeliveryRepository
from .supabase_repository import SupabaseDeliveryRepository
from .tariff_workbook import load_tariff_workbook


@functools.lru_cache(maxsize=1)
def get_delivery_repository() -> DeliveryRepository:
    """Use Supabase when configured, otherwise fall back to the tariff workbook."""
    supabase = get_supabase_client()
    if supabase:
        logging.info("Reading delivery zones from Supabase")
        return SupabaseDeliveryRepository(supabase)

    logging.info("Supabase not configured - reading delivery zones from tariff workbook")
    return load_tariff_workbook()


__all__ = [
    "DeliveryRepository",
    "InMemoryDeliveryRepository",
    "SupabaseDeliveryRepository",
    "get_delivery_repository",
    "load_tariff_workbook",
]
