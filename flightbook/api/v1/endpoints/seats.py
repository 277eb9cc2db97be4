"""
Seat map and seat reservation endpoint
"""

from typing import Any
import logging
from fastapi import APIRouter, Depends

from flightbook.api.dependencies import get_seat_service
from flightbook.schemas.seat import GetSeatMapRequest, SeatActionRequest
from flightbook.services.seat_service import SeatInventoryService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("")
async def seat_action(
    payload: SeatActionRequest,
    service: SeatInventoryService = Depends(get_seat_service)
) -> Any:
    """
    Dispatch on ``action``:

    - ``getSeatMap``: ``{flightId}`` -> ``{seats, emergencyExitRows, premiumSeats}``
    - ``reserveSeats``: ``{flightId, seats, passengers}`` ->
      ``{success, seatAssignments, additionalCost}``
    """
    request = payload.root
    logger.info(f"Seat action {request.action} for flight {request.flight_id}")

    if isinstance(request, GetSeatMapRequest):
        result = await service.get_seat_map(request.flight_id)
    else:
        result = await service.reserve_seats(request.flight_id, request.seats, request.passengers)

    return result.model_dump(by_alias=True, mode="json")
