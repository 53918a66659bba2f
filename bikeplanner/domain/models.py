from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from .estimates import (
    DIRECT_SPEED_KMH,
    REALISTIC_SPEED_KMH,
    Difficulty,
    direct_difficulty,
    direction_name,
    estimate_riding_time,
    realistic_difficulty,
)
from .exceptions import InvalidDistanceZone

MAX_ZONE_DISTANCE_KM = 200.0


@dataclass(frozen=True)
class Coordinate:
    lat: float
    lon: float

    def __post_init__(self) -> None:
        if not -90.0 <= self.lat <= 90.0:
            raise ValueError(f"Latitude out of range: {self.lat}")
        if not -180.0 <= self.lon <= 180.0:
            raise ValueError(f"Longitude out of range: {self.lon}")

    def as_tuple(self) -> Tuple[float, float]:
        return (self.lat, self.lon)


@dataclass(frozen=True)
class DistanceZone:
    distance_km: float
    enabled: bool = True
    color: str = "#22C55E"

    def __post_init__(self) -> None:
        if not 0 < self.distance_km <= MAX_ZONE_DISTANCE_KM:
            raise InvalidDistanceZone(self.distance_km, MAX_ZONE_DISTANCE_KM)


class RouteKind(str, Enum):
    DIRECT = "direct"
    REALISTIC = "realistic"


@dataclass(frozen=True)
class RouteOptions:
    include_direct: bool = True
    include_realistic: bool = True


@dataclass(frozen=True)
class BikeRoute:
    """A synthesized route candidate.

    ``distance_km`` is what the rider actually covers: the zone distance for
    direct routes, the detour-inflated distance for realistic ones. Riding
    time and difficulty are derived from it and from ``elevation_meters``.
    """

    id: str
    name: str
    requested_distance_km: float
    distance_km: float
    bearing_degrees: float
    coordinates: Tuple[Coordinate, ...]
    elevation_meters: float
    kind: RouteKind

    @property
    def estimated_time(self) -> str:
        speed = DIRECT_SPEED_KMH if self.kind is RouteKind.DIRECT else REALISTIC_SPEED_KMH
        return estimate_riding_time(self.distance_km, speed)

    @property
    def difficulty(self) -> Difficulty:
        if self.kind is RouteKind.DIRECT:
            return direct_difficulty(self.distance_km)
        return realistic_difficulty(self.distance_km, self.elevation_meters)

    @property
    def direction(self) -> str:
        return direction_name(self.bearing_degrees)

    @property
    def start(self) -> Coordinate:
        return self.coordinates[0]

    @property
    def end(self) -> Coordinate:
        return self.coordinates[-1]


@dataclass(frozen=True)
class AutocompleteSuggestion:
    display_name: str
    coordinate: Coordinate
    provider_id: str
    place_kind: str


@dataclass(frozen=True)
class GeocodeCacheEntry:
    coordinate: Coordinate
    display_name: str
    resolved_at_ms: int


class LocationSource(str, Enum):
    LITERAL = "literal"
    CACHE = "cache"
    PROVIDER = "provider"
    GAZETTEER = "gazetteer"
    SUGGESTION = "suggestion"
    GPS = "gps"


@dataclass(frozen=True)
class ResolvedLocation:
    coordinate: Coordinate
    display_name: str
    source: LocationSource


@dataclass(frozen=True)
class RoutePlan:
    origin: Coordinate
    origin_label: str
    routes: Tuple[BikeRoute, ...] = field(default_factory=tuple)
    source: Optional[LocationSource] = None
