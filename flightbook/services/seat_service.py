"""
Seat map and seat reservation use cases
"""

from datetime import date
from typing import List, Optional, Sequence
import logging

from flightbook.schemas.seat import PassengerRef, ReservationResponse, SeatMapResponse
from flightbook.services.flight_repository import FlightRepository
from flightbook.services.pricing import PricingEngine
from flightbook.services.reservation import ReservationCoordinator
from flightbook.services.seat_layout import SeatLayoutGenerator
from flightbook.services.seat_validator import SeatSelectionValidator

logger = logging.getLogger(__name__)


class SeatInventoryService:
    """Backs the ``getSeatMap`` and ``reserveSeats`` actions"""

    def __init__(
        self,
        repository: FlightRepository,
        layout: Optional[SeatLayoutGenerator] = None,
        validator: Optional[SeatSelectionValidator] = None,
        pricing: Optional[PricingEngine] = None,
        coordinator: Optional[ReservationCoordinator] = None
    ):
        self.repository = repository
        self.layout = layout or SeatLayoutGenerator()
        self.validator = validator or SeatSelectionValidator()
        self.pricing = pricing or PricingEngine()
        self.coordinator = coordinator or ReservationCoordinator(repository)

    async def get_seat_map(self, flight_id: str) -> SeatMapResponse:
        flight = await self.repository.get(flight_id)
        return SeatMapResponse(
            seats=self.layout.generate(flight),
            emergency_exit_rows=flight.emergency_exit_rows,
            premium_seats=flight.premium_seats,
        )

    async def reserve_seats(
        self,
        flight_id: str,
        seats: List[str],
        passengers: Sequence[PassengerRef],
        today: Optional[date] = None
    ) -> ReservationResponse:
        # Input-only checks first so malformed selections never hit the store
        self.validator.validate_selection(seats, passengers)

        flight = await self.repository.get(flight_id)
        self.validator.validate(seats, passengers, flight, today=today)

        if seats:
            await self.coordinator.reserve(flight_id, seats)
        else:
            logger.debug(f"No seats selected for flight {flight_id}, nothing to commit")

        return ReservationResponse(
            seat_assignments=list(seats),
            additional_cost=self.pricing.price_seats(seats, flight),
        )
