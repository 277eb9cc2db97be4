"""
Flight record schemas
"""

from typing import List, Optional
from datetime import date, datetime
from pydantic import Field, computed_field, field_validator

from flightbook.schemas.base import BaseSchema


class Flight(BaseSchema):
    """
    A flight record as held in the flight store.

    ``available_seats`` is derived from ``occupied_seats`` on every read; a
    stored ``availableSeats`` value is ignored.
    """
    flight_id: str = Field(..., alias="flightId", min_length=1)
    flight_number: Optional[str] = Field(None, alias="flightNumber")
    origin: Optional[str] = None
    destination: Optional[str] = None
    departure_time: Optional[datetime] = Field(None, alias="departureTime")
    total_seats: int = Field(..., alias="totalSeats", ge=0)
    occupied_seats: List[str] = Field(default_factory=list, alias="occupiedSeats")
    emergency_exit_rows: List[int] = Field(default_factory=list, alias="emergencyExitRows")
    premium_seats: List[str] = Field(default_factory=list, alias="premiumSeats")
    premium_seat_cost: float = Field(0.0, alias="premiumSeatCost", ge=0)
    base_price: float = Field(0.0, alias="basePrice", ge=0)

    # Cabin layout
    seat_rows: int = Field(30, alias="seatRows", ge=1, le=99)
    seat_columns: str = Field("ABCDEF", alias="seatColumns", min_length=1)

    @field_validator("origin", "destination")
    @classmethod
    def upper_airport_code(cls, v: Optional[str]) -> Optional[str]:
        return v.upper() if v else v

    @computed_field(alias="availableSeats")
    @property
    def available_seats(self) -> int:
        return max(self.total_seats - len(set(self.occupied_seats)), 0)

    @property
    def route_date(self) -> Optional[str]:
        """Search index value, e.g. ``JFK-LAX-2026-11-02``"""
        if not (self.origin and self.destination and self.departure_time):
            return None
        return route_date_key(self.origin, self.destination, self.departure_time.date())


def route_date_key(origin: str, destination: str, day: date) -> str:
    return f"{origin.upper()}-{destination.upper()}-{day.isoformat()}"


class PricedFlight(Flight):
    """Flight search result with its dynamic fare"""
    price: float


class FlightSearchRequest(BaseSchema):
    origin: str = Field(..., min_length=1)
    destination: str = Field(..., min_length=1)
    depart_date: date = Field(..., alias="departDate")
    return_date: Optional[date] = Field(None, alias="returnDate")


class FlightSearchResponse(BaseSchema):
    outbound: List[PricedFlight]
    return_flights: Optional[List[PricedFlight]] = Field(None, alias="return")
