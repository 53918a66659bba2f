from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence

from bikeplanner.core.config import settings
from bikeplanner.services.geocoding import GeocodingResolver, geocoding_resolver

from .exceptions import MissingOrigin
from .models import (
    BikeRoute,
    Coordinate,
    DistanceZone,
    LocationSource,
    RouteKind,
    RouteOptions,
    RoutePlan,
)
from .synthesis import RouteSynthesizer
from .zones import ZoneSet

logger = logging.getLogger(__name__)


def gps_label(coordinate: Coordinate) -> str:
    return f"GPS: {coordinate.lat:.4f}, {coordinate.lon:.4f}"


def filter_routes(
    routes: Iterable[BikeRoute],
    show_direct: bool = True,
    show_realistic: bool = True,
) -> List[BikeRoute]:
    visible = {RouteKind.DIRECT: show_direct, RouteKind.REALISTIC: show_realistic}
    return [route for route in routes if visible[route.kind]]


class PlanningOrchestrator:
    def __init__(
        self,
        resolver: Optional[GeocodingResolver] = None,
        synthesizer: Optional[RouteSynthesizer] = None,
    ) -> None:
        self.resolver = resolver if resolver is not None else geocoding_resolver
        self.synthesizer = synthesizer if synthesizer is not None else RouteSynthesizer()

    async def plan(
        self,
        location_text: Optional[str] = None,
        coordinate: Optional[Coordinate] = None,
        zones: Optional[Sequence[DistanceZone]] = None,
        options: Optional[RouteOptions] = None,
        *,
        coordinate_label: Optional[str] = None,
    ) -> List[BikeRoute]:
        result = await self.build_plan(
            location_text, coordinate, zones, options, coordinate_label=coordinate_label
        )
        return list(result.routes)

    async def build_plan(
        self,
        location_text: Optional[str] = None,
        coordinate: Optional[Coordinate] = None,
        zones: Optional[Sequence[DistanceZone]] = None,
        options: Optional[RouteOptions] = None,
        *,
        coordinate_label: Optional[str] = None,
    ) -> RoutePlan:
        """Resolve the origin and synthesize routes for every enabled zone.

        A supplied ``coordinate`` wins over ``location_text``. Without a
        ``coordinate_label`` it is treated as a GPS fix; with one it is a
        picked suggestion and keeps that name. Resolver errors propagate
        unchanged.
        """
        zone_set = ZoneSet(zones)
        options = options or RouteOptions()

        if coordinate is not None:
            origin = coordinate
            if coordinate_label and coordinate_label.strip():
                label = coordinate_label.strip()
                source = LocationSource.SUGGESTION
            else:
                label = gps_label(coordinate)
                source = LocationSource.GPS
        else:
            if not location_text or not location_text.strip():
                raise MissingOrigin()
            location = await self.resolver.resolve_location(location_text)
            origin = location.coordinate
            label = location.display_name
            source = location.source

        routes = await self.synthesizer.synthesize(origin, zone_set.as_list(), options)

        logger.info(
            "Planned %s routes from %s (%s) across %s enabled zones",
            len(routes),
            label,
            source.value,
            len(zone_set.enabled()),
        )
        return RoutePlan(origin=origin, origin_label=label, routes=tuple(routes), source=source)


planning_orchestrator = PlanningOrchestrator(
    synthesizer=RouteSynthesizer(
        num_points=settings.ROUTES_PER_ZONE,
        direct_delay=settings.DIRECT_ROUTE_DELAY_SECONDS,
        realistic_delay=settings.REALISTIC_ROUTE_DELAY_SECONDS,
    )
)
