"""
Flight search endpoint
"""

from typing import Any
from fastapi import APIRouter, Depends

from flightbook.api.dependencies import get_flight_search_service
from flightbook.schemas.flight import FlightSearchRequest
from flightbook.services.flight_search import FlightSearchService

router = APIRouter()


@router.post("/search")
async def search_flights(
    search: FlightSearchRequest,
    service: FlightSearchService = Depends(get_flight_search_service)
) -> Any:
    """
    Outbound flights for the route and day, plus return flights when a
    return date is given, each with its current fare
    """
    result = await service.search(search)
    return result.model_dump(by_alias=True, mode="json")
