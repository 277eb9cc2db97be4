"""
Flight search with dynamic pricing
"""

from datetime import date, datetime, timezone
from typing import Iterable, List, Optional
import logging

from flightbook.config import settings
from flightbook.core.exceptions import ValidationError
from flightbook.schemas.flight import (
    Flight,
    FlightSearchRequest,
    FlightSearchResponse,
    PricedFlight,
)
from flightbook.services.flight_repository import FlightRepository
from flightbook.services.pricing import PricingEngine

logger = logging.getLogger(__name__)


class FlightSearchService:

    def __init__(
        self,
        repository: FlightRepository,
        pricing: Optional[PricingEngine] = None,
        valid_airports: Optional[Iterable[str]] = None
    ):
        self.repository = repository
        self.pricing = pricing or PricingEngine()
        self.valid_airports = {code.upper() for code in (valid_airports or settings.VALID_IATA_CODES)}

    def validate_airport(self, code: str) -> bool:
        return code.upper() in self.valid_airports

    @staticmethod
    def validate_dates(depart_date: date, return_date: Optional[date], today: date) -> bool:
        if depart_date < today:
            return False
        if return_date and return_date < depart_date:
            return False
        return True

    async def search(self, request: FlightSearchRequest, now: Optional[datetime] = None) -> FlightSearchResponse:
        now = now or datetime.now(timezone.utc)

        if not self.validate_airport(request.origin) or not self.validate_airport(request.destination):
            raise ValidationError("Invalid airport code", field="origin/destination")

        if not self.validate_dates(request.depart_date, request.return_date, now.date()):
            raise ValidationError("Invalid dates", field="departDate/returnDate")

        outbound = await self._priced(request.origin, request.destination, request.depart_date, now)

        return_flights = None
        if request.return_date:
            return_flights = await self._priced(request.destination, request.origin, request.return_date, now)

        logger.info(
            f"Search {request.origin}-{request.destination} on {request.depart_date}: "
            f"{len(outbound)} outbound, {len(return_flights or [])} return"
        )
        return FlightSearchResponse(outbound=outbound, return_flights=return_flights)

    async def _priced(self, origin: str, destination: str, day: date, now: datetime) -> List[PricedFlight]:
        flights = await self.repository.search(origin, destination, day)
        return [self._apply_pricing(flight, now) for flight in flights]

    def _apply_pricing(self, flight: Flight, now: datetime) -> PricedFlight:
        data = flight.model_dump()
        data["price"] = self.pricing.price_fare(flight, now=now)
        return PricedFlight.model_validate(data)
