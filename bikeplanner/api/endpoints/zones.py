from typing import List

from fastapi import APIRouter, HTTPException

from bikeplanner.domain.exceptions import BikePlannerError
from bikeplanner.domain.zones import DEFAULT_ZONES
from bikeplanner.models.schemas import (
    DistanceZoneSchema,
    ZoneAddRequest,
    ZoneEditResponse,
    ZoneIndexRequest,
)

router = APIRouter()


@router.get("/defaults", response_model=List[DistanceZoneSchema])
async def default_zones() -> List[DistanceZoneSchema]:
    return [DistanceZoneSchema.from_zone(zone) for zone in DEFAULT_ZONES]


@router.post("/add", response_model=ZoneEditResponse)
async def add_zone(request: ZoneAddRequest) -> ZoneEditResponse:
    """Append a custom zone; its colour depends on how many zones exist."""
    zone_set = request.zone_set()
    try:
        zone = zone_set.add(request.distance_km)
    except BikePlannerError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc
    return ZoneEditResponse.from_edit(zone, zone_set)


@router.post("/toggle", response_model=ZoneEditResponse)
async def toggle_zone(request: ZoneIndexRequest) -> ZoneEditResponse:
    zone_set = request.zone_set()
    if request.index >= len(zone_set):
        raise HTTPException(status_code=404, detail=f"No zone at index {request.index}")
    zone = zone_set.toggle(request.index)
    return ZoneEditResponse.from_edit(zone, zone_set)


@router.post("/remove", response_model=ZoneEditResponse)
async def remove_zone(request: ZoneIndexRequest) -> ZoneEditResponse:
    zone_set = request.zone_set()
    if request.index >= len(zone_set):
        raise HTTPException(status_code=404, detail=f"No zone at index {request.index}")
    zone = zone_set.remove(request.index)
    return ZoneEditResponse.from_edit(zone, zone_set)
