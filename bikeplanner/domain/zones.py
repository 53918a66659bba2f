from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Iterator, List, Optional, Tuple

from .models import DistanceZone

DEFAULT_ZONES: Tuple[DistanceZone, ...] = (
    DistanceZone(10, enabled=True, color="#22C55E"),
    DistanceZone(25, enabled=True, color="#3B82F6"),
    DistanceZone(50, enabled=False, color="#EF4444"),
)

CUSTOM_ZONE_COLORS: Tuple[str, ...] = ("#8B5CF6", "#EC4899", "#F59E0B", "#06B6D4")


class ZoneSet:
    """Ordered distance zones as configured by the user."""

    def __init__(self, zones: Optional[Iterable[DistanceZone]] = None) -> None:
        self._zones: List[DistanceZone] = list(DEFAULT_ZONES if zones is None else zones)

    def __iter__(self) -> Iterator[DistanceZone]:
        return iter(self._zones)

    def __len__(self) -> int:
        return len(self._zones)

    def add(self, distance_km: float) -> DistanceZone:
        color = CUSTOM_ZONE_COLORS[len(self._zones) % len(CUSTOM_ZONE_COLORS)]
        zone = DistanceZone(distance_km, enabled=True, color=color)
        self._zones.append(zone)
        return zone

    def toggle(self, index: int) -> DistanceZone:
        zone = self._zones[index]
        self._zones[index] = replace(zone, enabled=not zone.enabled)
        return self._zones[index]

    def remove(self, index: int) -> DistanceZone:
        return self._zones.pop(index)

    def enabled(self) -> List[DistanceZone]:
        return [zone for zone in self._zones if zone.enabled]

    def as_list(self) -> List[DistanceZone]:
        return list(self._zones)
