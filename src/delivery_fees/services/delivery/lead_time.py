"""Coarse delivery lead-time estimates."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

from ...config import (
    DEFAULT_FAST_PATH_CITIES,
    DEFAULT_FAST_PATH_DAYS,
    DEFAULT_LEAD_DAYS,
    DEFAULT_REGION_LEAD_DAYS,
    settings,
)


@dataclass(frozen=True, slots=True)
class LeadTimePolicy:
    """Static lookup: fast-path cities first, then the region table, then the default."""

    fast_path_cities: frozenset[str] = frozenset(DEFAULT_FAST_PATH_CITIES)
    region_days: Mapping[str, int] = field(default_factory=lambda: dict(DEFAULT_REGION_LEAD_DAYS))
    default_days: int = DEFAULT_LEAD_DAYS
    fast_path_days: int = DEFAULT_FAST_PATH_DAYS

    @classmethod
    def from_settings(cls) -> "LeadTimePolicy":
        return cls(
            fast_path_cities=frozenset(settings.fast_path_cities),
            region_days=dict(settings.region_lead_days),
            default_days=settings.default_lead_days,
            fast_path_days=settings.fast_path_days,
        )

    def estimate(self, region: str, city: str) -> int:
        if city in self.fast_path_cities:
            return self.fast_path_days
        return self.region_days.get(region, self.default_days)
