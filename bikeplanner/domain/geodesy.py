"""Spherical-earth projections shared by every route kind."""

from __future__ import annotations

import math
from typing import Sequence

from .models import Coordinate

EARTH_RADIUS_KM = 6371.0


def normalize_longitude(lon: float) -> float:
    if lon > 180.0:
        return lon - 360.0
    if lon < -180.0:
        return lon + 360.0
    return lon


def longitude_delta(start_lon: float, end_lon: float) -> float:
    """Signed eastward offset from ``start_lon`` to ``end_lon`` in [-180, 180)."""
    return ((end_lon - start_lon + 540.0) % 360.0) - 180.0


def destination_point(origin: Coordinate, distance_km: float, bearing_degrees: float) -> Coordinate:
    """Point reached after ``distance_km`` along the initial ``bearing_degrees``.

    Uses the direct great-circle formula on a sphere of radius 6371 km.
    """
    if distance_km < 0:
        raise ValueError(f"Distance must be non-negative, got {distance_km}")

    angular = distance_km / EARTH_RADIUS_KM
    bearing = math.radians(bearing_degrees % 360.0)
    lat1 = math.radians(origin.lat)
    lon1 = math.radians(origin.lon)

    lat2 = math.asin(
        math.sin(lat1) * math.cos(angular)
        + math.cos(lat1) * math.sin(angular) * math.cos(bearing)
    )
    lon2 = lon1 + math.atan2(
        math.sin(bearing) * math.sin(angular) * math.cos(lat1),
        math.cos(angular) - math.sin(lat1) * math.sin(lat2),
    )

    lat = max(-90.0, min(90.0, math.degrees(lat2)))
    return Coordinate(lat, normalize_longitude(math.degrees(lon2)))


def haversine_km(a: Coordinate, b: Coordinate) -> float:
    phi1 = math.radians(a.lat)
    phi2 = math.radians(b.lat)
    d_phi = math.radians(b.lat - a.lat)
    d_lambda = math.radians(b.lon - a.lon)
    h = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    h = min(1.0, h)
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def path_length_km(points: Sequence[Coordinate]) -> float:
    total = 0.0
    for previous, current in zip(points, points[1:]):
        total += haversine_km(previous, current)
    return total
