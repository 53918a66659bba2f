from fastapi import APIRouter

from bikeplanner.api.endpoints import geocode, routes, zones

api_router = APIRouter()

api_router.include_router(routes.router, prefix="/routes", tags=["routes"])
api_router.include_router(geocode.router, prefix="/geocode", tags=["geocoding"])
api_router.include_router(zones.router, prefix="/zones", tags=["zones"])
