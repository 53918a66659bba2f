from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from bikeplanner.domain.models import (
    AutocompleteSuggestion,
    BikeRoute,
    Coordinate,
    DistanceZone,
    MAX_ZONE_DISTANCE_KM,
    ResolvedLocation,
    RouteOptions,
    RoutePlan,
)
from bikeplanner.domain.geodesy import path_length_km
from bikeplanner.domain.zones import ZoneSet


class CoordinatePoint(BaseModel):
    lat: float = Field(..., ge=-90.0, le=90.0)
    lon: float = Field(..., ge=-180.0, le=180.0)

    @classmethod
    def from_coordinate(cls, coordinate: Coordinate) -> "CoordinatePoint":
        return cls(lat=coordinate.lat, lon=coordinate.lon)

    def to_coordinate(self) -> Coordinate:
        return Coordinate(self.lat, self.lon)


class DistanceZoneSchema(BaseModel):
    distance_km: float = Field(..., gt=0, le=MAX_ZONE_DISTANCE_KM)
    enabled: bool = True
    color: str = Field(default="#22C55E", max_length=32)

    @classmethod
    def from_zone(cls, zone: DistanceZone) -> "DistanceZoneSchema":
        return cls(distance_km=zone.distance_km, enabled=zone.enabled, color=zone.color)

    def to_zone(self) -> DistanceZone:
        return DistanceZone(self.distance_km, enabled=self.enabled, color=self.color)


class PlanRequest(BaseModel):
    location: Optional[str] = Field(default=None, max_length=255)
    start_lat: Optional[float] = Field(default=None, ge=-90.0, le=90.0)
    start_lon: Optional[float] = Field(default=None, ge=-180.0, le=180.0)
    start_label: Optional[str] = Field(default=None, max_length=255)
    zones: Optional[List[DistanceZoneSchema]] = None
    include_direct: bool = True
    include_realistic: bool = True

    @field_validator("location", mode="before")
    @classmethod
    def _blank_location_is_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @model_validator(mode="after")
    def _coordinates_come_in_pairs(self) -> "PlanRequest":
        if (self.start_lat is None) != (self.start_lon is None):
            raise ValueError("start_lat and start_lon must be provided together")
        return self

    def start_coordinate(self) -> Optional[Coordinate]:
        if self.start_lat is None or self.start_lon is None:
            return None
        return Coordinate(self.start_lat, self.start_lon)

    def distance_zones(self) -> Optional[List[DistanceZone]]:
        if self.zones is None:
            return None
        return [zone.to_zone() for zone in self.zones]

    def route_options(self) -> RouteOptions:
        return RouteOptions(
            include_direct=self.include_direct,
            include_realistic=self.include_realistic,
        )


class RouteSchema(BaseModel):
    id: str
    name: str
    requested_distance_km: float
    distance_km: float
    path_length_km: float
    bearing_degrees: float
    direction: str
    coordinates: List[CoordinatePoint]
    estimated_time: str
    elevation_meters: float
    kind: Literal["direct", "realistic"]
    difficulty: Literal["easy", "medium", "hard"]

    @classmethod
    def from_route(cls, route: BikeRoute) -> "RouteSchema":
        return cls(
            id=route.id,
            name=route.name,
            requested_distance_km=route.requested_distance_km,
            distance_km=round(route.distance_km, 1),
            path_length_km=round(path_length_km(route.coordinates), 1),
            bearing_degrees=route.bearing_degrees,
            direction=route.direction,
            coordinates=[CoordinatePoint.from_coordinate(point) for point in route.coordinates],
            estimated_time=route.estimated_time,
            elevation_meters=round(route.elevation_meters),
            kind=route.kind.value,
            difficulty=route.difficulty.value,
        )


class PlanResponse(BaseModel):
    origin: CoordinatePoint
    origin_label: str
    source: Optional[str] = None
    routes: List[RouteSchema]

    @classmethod
    def from_plan(cls, plan: RoutePlan) -> "PlanResponse":
        return cls(
            origin=CoordinatePoint.from_coordinate(plan.origin),
            origin_label=plan.origin_label,
            source=plan.source.value if plan.source else None,
            routes=[RouteSchema.from_route(route) for route in plan.routes],
        )


class ResolveResponse(BaseModel):
    lat: float
    lon: float
    display_name: str
    source: str

    @classmethod
    def from_location(cls, location: ResolvedLocation) -> "ResolveResponse":
        return cls(
            lat=location.coordinate.lat,
            lon=location.coordinate.lon,
            display_name=location.display_name,
            source=location.source.value,
        )


class SuggestionSchema(BaseModel):
    display_name: str
    lat: float = Field(..., ge=-90.0, le=90.0)
    lon: float = Field(..., ge=-180.0, le=180.0)
    provider_id: str = ""
    place_kind: str = ""

    @classmethod
    def from_suggestion(cls, suggestion: AutocompleteSuggestion) -> "SuggestionSchema":
        return cls(
            display_name=suggestion.display_name,
            lat=suggestion.coordinate.lat,
            lon=suggestion.coordinate.lon,
            provider_id=suggestion.provider_id,
            place_kind=suggestion.place_kind,
        )

    def to_suggestion(self) -> AutocompleteSuggestion:
        return AutocompleteSuggestion(
            display_name=self.display_name,
            coordinate=Coordinate(self.lat, self.lon),
            provider_id=self.provider_id,
            place_kind=self.place_kind,
        )


class ZoneEditRequest(BaseModel):
    """Current zone list as held by the client; defaults when omitted."""

    zones: Optional[List[DistanceZoneSchema]] = None

    def zone_set(self) -> ZoneSet:
        if self.zones is None:
            return ZoneSet()
        return ZoneSet(zone.to_zone() for zone in self.zones)


class ZoneAddRequest(ZoneEditRequest):
    distance_km: float


class ZoneIndexRequest(ZoneEditRequest):
    index: int = Field(..., ge=0)


class ZoneEditResponse(BaseModel):
    zone: DistanceZoneSchema
    zones: List[DistanceZoneSchema]

    @classmethod
    def from_edit(cls, zone: DistanceZone, zone_set: ZoneSet) -> "ZoneEditResponse":
        return cls(
            zone=DistanceZoneSchema.from_zone(zone),
            zones=[DistanceZoneSchema.from_zone(item) for item in zone_set],
        )
