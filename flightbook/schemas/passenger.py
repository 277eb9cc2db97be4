"""
Passenger manifest schemas
"""

from typing import List
from datetime import date
from pydantic import Field

from flightbook.schemas.base import BaseSchema


class PassengerDetails(BaseSchema):
    first_name: str = Field(..., alias="firstName")
    last_name: str = Field(..., alias="lastName")
    email: str
    date_of_birth: date = Field(..., alias="dateOfBirth")


class PassengerManifest(BaseSchema):
    passengers: List[PassengerDetails]


class PassengerTypes(BaseSchema):
    adults: int = 0
    children: int = 0
    infants: int = 0


class PassengerValidationResponse(BaseSchema):
    success: bool = True
    passenger_types: PassengerTypes = Field(..., alias="passengerTypes")
