import logging
from typing import List

from fastapi import APIRouter, HTTPException, Query

from bikeplanner.domain.exceptions import BikePlannerError
from bikeplanner.models.schemas import CoordinatePoint, ResolveResponse, SuggestionSchema
from bikeplanner.services import autocomplete, geocoding

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/resolve", response_model=ResolveResponse)
async def resolve_location(q: str = Query(..., min_length=1, max_length=255)) -> ResolveResponse:
    try:
        location = await geocoding.geocoding_resolver.resolve_location(q)
    except BikePlannerError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc
    return ResolveResponse.from_location(location)


@router.get("/suggest", response_model=List[SuggestionSchema])
async def suggest_locations(q: str = Query("", max_length=255)) -> List[SuggestionSchema]:
    """Autocomplete suggestions; empty on short input or provider trouble."""
    suggestions = await autocomplete.autocomplete_suggester.suggest(q)
    return [SuggestionSchema.from_suggestion(item) for item in suggestions]


@router.post("/select", response_model=CoordinatePoint)
async def select_suggestion(suggestion: SuggestionSchema) -> CoordinatePoint:
    coordinate = autocomplete.autocomplete_suggester.select(suggestion.to_suggestion())
    return CoordinatePoint.from_coordinate(coordinate)
