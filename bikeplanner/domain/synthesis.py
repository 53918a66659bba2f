from __future__ import annotations

import asyncio
import logging
import math
import random
from typing import List, Optional, Sequence

from .estimates import direction_name
from .geodesy import destination_point, longitude_delta, normalize_longitude
from .models import BikeRoute, Coordinate, DistanceZone, RouteKind, RouteOptions

logger = logging.getLogger(__name__)

ROUTES_PER_ZONE = 8

DIRECT_MAX_ELEVATION_M = 200.0

DETOUR_FACTOR_MIN = 1.3
DETOUR_FACTOR_SPREAD = 0.5
MIN_PATH_STEPS = 20
PATH_STEP_SPREAD = 15
JITTER_MIN_DEG = 0.02
JITTER_SPREAD_DEG = 0.03
CLIMB_MIN_M_PER_KM = 5.0
CLIMB_SPREAD_M_PER_KM = 15.0


def bearings(num_points: int) -> List[float]:
    step = 360 / num_points
    return [i * step for i in range(num_points)]


class RouteSynthesizer:
    """Builds direct and realistic route candidates around an origin.

    All randomness is drawn from ``rng`` so a seeded ``random.Random``
    reproduces a batch exactly. The optional delays are cooperative pauses
    that mimic generation latency for interactive clients.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        *,
        num_points: int = ROUTES_PER_ZONE,
        direct_delay: float = 0.0,
        realistic_delay: float = 0.0,
    ) -> None:
        if num_points <= 0:
            raise ValueError("num_points must be positive")
        self.rng = rng or random.Random()
        self.num_points = num_points
        self.direct_delay = direct_delay
        self.realistic_delay = realistic_delay

    async def synthesize(
        self,
        origin: Coordinate,
        zones: Sequence[DistanceZone],
        options: RouteOptions,
    ) -> List[BikeRoute]:
        routes: List[BikeRoute] = []
        for index, zone in enumerate(zones):
            if not zone.enabled:
                continue
            routes.extend(await self.synthesize_zone(origin, zone, options, zone_index=index))
        return routes

    async def synthesize_zone(
        self,
        origin: Coordinate,
        zone: DistanceZone,
        options: RouteOptions,
        zone_index: int = 0,
    ) -> List[BikeRoute]:
        routes: List[BikeRoute] = []
        if options.include_direct:
            await self._pause(self.direct_delay)
            routes.extend(self.direct_routes(origin, zone.distance_km, zone_index=zone_index))
        if options.include_realistic:
            await self._pause(self.realistic_delay)
            routes.extend(self.realistic_routes(origin, zone.distance_km, zone_index=zone_index))
        logger.debug(
            "Synthesized %s routes for %.1f km zone around %s",
            len(routes),
            zone.distance_km,
            origin.as_tuple(),
        )
        return routes

    def direct_routes(self, origin: Coordinate, distance_km: float, zone_index: int = 0) -> List[BikeRoute]:
        routes: List[BikeRoute] = []
        for i, bearing in enumerate(bearings(self.num_points)):
            end = destination_point(origin, distance_km, bearing)
            routes.append(
                BikeRoute(
                    id=f"direct-{zone_index}-{distance_km:g}km-{i}",
                    name=f"Direct {distance_km:g} km {direction_name(bearing)} ({bearing:g}°)",
                    requested_distance_km=distance_km,
                    distance_km=distance_km,
                    bearing_degrees=bearing,
                    coordinates=(origin, end),
                    elevation_meters=self.rng.random() * DIRECT_MAX_ELEVATION_M,
                    kind=RouteKind.DIRECT,
                )
            )
        return routes

    def realistic_routes(self, origin: Coordinate, distance_km: float, zone_index: int = 0) -> List[BikeRoute]:
        routes: List[BikeRoute] = []
        for i, bearing in enumerate(bearings(self.num_points)):
            path = self.realistic_path(origin, distance_km, bearing)
            actual_km = distance_km * (DETOUR_FACTOR_MIN + self.rng.random() * DETOUR_FACTOR_SPREAD)
            climb = CLIMB_MIN_M_PER_KM + self.rng.random() * CLIMB_SPREAD_M_PER_KM
            routes.append(
                BikeRoute(
                    id=f"realistic-{zone_index}-{distance_km:g}km-{i}",
                    name=f"Cycling route {distance_km:g} km {direction_name(bearing)} ({bearing:g}°)",
                    requested_distance_km=distance_km,
                    distance_km=actual_km,
                    bearing_degrees=bearing,
                    coordinates=tuple(path),
                    elevation_meters=actual_km * climb,
                    kind=RouteKind.REALISTIC,
                )
            )
        return routes

    def realistic_path(self, origin: Coordinate, distance_km: float, bearing: float) -> List[Coordinate]:
        """Jittered straight line from ``origin`` to the great-circle destination.

        One jitter amplitude is drawn per route; every intermediate point then
        gets its own offset within that amplitude. Longitude is interpolated
        over the short way round, so paths crossing 180° stay local.
        """
        end = destination_point(origin, distance_km, bearing)
        steps = MIN_PATH_STEPS + math.floor(self.rng.random() * PATH_STEP_SPREAD)
        variation = JITTER_MIN_DEG + self.rng.random() * JITTER_SPREAD_DEG
        d_lon = longitude_delta(origin.lon, end.lon)

        path = [origin]
        for step in range(1, steps):
            progress = step / steps
            lat = origin.lat + (end.lat - origin.lat) * progress + (self.rng.random() - 0.5) * variation
            lon = origin.lon + d_lon * progress + (self.rng.random() - 0.5) * variation
            path.append(Coordinate(max(-90.0, min(90.0, lat)), normalize_longitude(lon)))
        path.append(end)
        return path

    @staticmethod
    async def _pause(delay: float) -> None:
        if delay > 0:
            await asyncio.sleep(delay)
