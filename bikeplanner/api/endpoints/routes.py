import logging

from fastapi import APIRouter, HTTPException

from bikeplanner.domain import planner
from bikeplanner.domain.exceptions import BikePlannerError
from bikeplanner.models.schemas import PlanRequest, PlanResponse

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/plan", response_model=PlanResponse)
async def plan_routes(request: PlanRequest) -> PlanResponse:
    """Resolve the start and generate route candidates for the enabled zones."""
    try:
        plan = await planner.planning_orchestrator.build_plan(
            location_text=request.location,
            coordinate=request.start_coordinate(),
            zones=request.distance_zones(),
            options=request.route_options(),
            coordinate_label=request.start_label,
        )
    except BikePlannerError as exc:
        logger.info("Route planning rejected: %s", exc.message)
        raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc

    return PlanResponse.from_plan(plan)
