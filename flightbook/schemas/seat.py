"""
Seat map and seat reservation schemas
"""

from typing import Annotated, List, Literal, Union
from datetime import date
from pydantic import Field, RootModel, field_validator
import enum

from flightbook.schemas.base import BaseSchema


SEAT_ACTIONS = ("getSeatMap", "reserveSeats")


class SeatStatus(str, enum.Enum):
    AVAILABLE = "available"
    OCCUPIED = "occupied"


class Seat(BaseSchema):
    """One entry of a derived seat map"""
    id: str
    number: str
    status: SeatStatus
    is_emergency_exit: bool = Field(..., alias="isEmergencyExit")
    is_premium: bool = Field(..., alias="isPremium")


class SeatMapResponse(BaseSchema):
    seats: List[Seat]
    emergency_exit_rows: List[int] = Field(..., alias="emergencyExitRows")
    premium_seats: List[str] = Field(..., alias="premiumSeats")


class PassengerRef(BaseSchema):
    """Passenger fields the seat rules look at"""
    date_of_birth: date = Field(..., alias="dateOfBirth")


class GetSeatMapRequest(BaseSchema):
    action: Literal["getSeatMap"]
    flight_id: str = Field(..., alias="flightId", min_length=1)


class ReserveSeatsRequest(BaseSchema):
    action: Literal["reserveSeats"]
    flight_id: str = Field(..., alias="flightId", min_length=1)
    seats: List[str]
    passengers: List[PassengerRef]

    @field_validator("seats")
    @classmethod
    def validate_unique_seats(cls, v):
        if len(v) != len(set(v)):
            raise ValueError("Duplicate seat IDs not allowed")
        return v


class SeatActionRequest(RootModel):
    """Request body for the seat endpoint, tagged by ``action``"""
    root: Annotated[
        Union[GetSeatMapRequest, ReserveSeatsRequest],
        Field(discriminator="action"),
    ]


class ReservationResponse(BaseSchema):
    success: bool = True
    seat_assignments: List[str] = Field(..., alias="seatAssignments")
    additional_cost: float = Field(..., alias="additionalCost")
