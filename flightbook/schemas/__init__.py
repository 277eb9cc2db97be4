"""
Pydantic schemas for request and response validation
"""

from flightbook.schemas.flight import (
    Flight,
    FlightSearchRequest,
    FlightSearchResponse,
    PricedFlight
)
from flightbook.schemas.seat import (
    GetSeatMapRequest,
    PassengerRef,
    ReservationResponse,
    ReserveSeatsRequest,
    Seat,
    SeatActionRequest,
    SeatMapResponse,
    SeatStatus
)
from flightbook.schemas.passenger import (
    PassengerDetails,
    PassengerManifest,
    PassengerTypes,
    PassengerValidationResponse
)
from flightbook.schemas.payment import (
    BookingData,
    PaymentRequest,
    PaymentResponse,
    PaymentResult
)
from flightbook.schemas.response import ErrorResponse

__all__ = [
    "Flight",
    "FlightSearchRequest",
    "FlightSearchResponse",
    "PricedFlight",
    "GetSeatMapRequest",
    "PassengerRef",
    "ReservationResponse",
    "ReserveSeatsRequest",
    "Seat",
    "SeatActionRequest",
    "SeatMapResponse",
    "SeatStatus",
    "PassengerDetails",
    "PassengerManifest",
    "PassengerTypes",
    "PassengerValidationResponse",
    "BookingData",
    "PaymentRequest",
    "PaymentResponse",
    "PaymentResult",
    "ErrorResponse",
]
