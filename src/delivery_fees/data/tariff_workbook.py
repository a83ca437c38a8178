"""Tariff workbook loader used when no database is configured."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

from openpyxl import load_workbook

from ..config import settings
from ..models.domain import DeliveryCost, DeliveryZone
from .memory import InMemoryDeliveryRepository

REQUIRED_COLUMNS = {
    "Region",
    "City",
    "Commune",
    "BaseFee",
    "WeightMultiplier",
    "DistanceMultiplier",
    "MinFee",
    "MaxFee",
}

_TRUE_VALUES = {"1", "true", "yes", "y", "oui", "active"}
_FALSE_VALUES = {"0", "false", "no", "n", "non", "inactive"}


def _clean_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _coerce_bool(value: Any, default: bool = True) -> bool:
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ValueError(f"Unable to parse boolean from value '{value}'")


def _coerce_float(value: Any, column: str, row_number: int) -> float:
    if value is None or value == "":
        raise ValueError(f"Row {row_number}: missing value for '{column}'")
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(str(value).replace(",", "").strip())
    except ValueError as exc:
        raise ValueError(f"Row {row_number}: unable to parse '{column}' from '{value}'") from exc


def load_tariff_workbook(source: Path | None = None) -> InMemoryDeliveryRepository:
    """Load zones and their pricing from an Excel workbook.

    One row per zone. A blank ``Commune`` cell declares the city-wide zone.
    Optional ``ZoneId``, ``ZoneActive`` and ``CostActive`` columns override the
    generated identifier and the activity flags.
    """
    workbook_path = source or settings.tariff_file
    if not workbook_path.exists():
        raise FileNotFoundError(f"Tariff workbook not found: {workbook_path}")

    wb = load_workbook(workbook_path, data_only=True, read_only=True)
    try:
        sheet = wb.active
        rows = sheet.iter_rows(min_row=1, values_only=True)
        header = next(rows, None)
        if header is None:
            raise ValueError(f"Tariff workbook '{workbook_path}' is empty.")

        header_map = {str(name).strip(): idx for idx, name in enumerate(header) if name is not None}
        missing_columns = REQUIRED_COLUMNS - set(header_map)
        if missing_columns:
            raise ValueError(f"Tariff workbook missing columns: {', '.join(sorted(missing_columns))}")

        def cell(row: tuple, column: str) -> Any:
            idx = header_map.get(column)
            if idx is None or idx >= len(row):
                return None
            return row[idx]

        zones: list[DeliveryZone] = []
        costs: list[DeliveryCost] = []
        active_keys: set[tuple[str, str, Optional[str]]] = set()
        for row_number, row in enumerate(rows, start=2):
            region = _clean_text(cell(row, "Region"))
            city = _clean_text(cell(row, "City"))
            if not region and not city:
                continue  # blank line
            if not region or not city:
                raise ValueError(f"Row {row_number}: both 'Region' and 'City' are required")

            zone_id = _clean_text(cell(row, "ZoneId")) or f"zone-{row_number - 1}"
            zone = DeliveryZone(
                id=zone_id,
                region=region,
                city=city,
                commune=_clean_text(cell(row, "Commune")),
                is_active=_coerce_bool(cell(row, "ZoneActive")),
            )
            if zone.is_active:
                if zone.location_key in active_keys:
                    raise ValueError(
                        f"Row {row_number}: duplicate active zone for {region}, {city}, {zone.commune or '(city-wide)'}"
                    )
                active_keys.add(zone.location_key)

            cost = DeliveryCost(
                id=f"cost-{zone_id}",
                zone_id=zone_id,
                base_fee=_coerce_float(cell(row, "BaseFee"), "BaseFee", row_number),
                weight_multiplier=_coerce_float(cell(row, "WeightMultiplier"), "WeightMultiplier", row_number),
                distance_multiplier=_coerce_float(cell(row, "DistanceMultiplier"), "DistanceMultiplier", row_number),
                min_fee=_coerce_float(cell(row, "MinFee"), "MinFee", row_number),
                max_fee=_coerce_float(cell(row, "MaxFee"), "MaxFee", row_number),
                is_active=_coerce_bool(cell(row, "CostActive")),
            )
            if not cost.has_valid_bounds:
                raise ValueError(
                    f"Row {row_number}: MinFee ({cost.min_fee:g}) exceeds MaxFee ({cost.max_fee:g})"
                )

            zones.append(zone)
            costs.append(cost)
    finally:
        wb.close()

    logging.info(f"Loaded {len(zones)} delivery zones from {workbook_path}")
    return InMemoryDeliveryRepository(zones=zones, costs=costs)
