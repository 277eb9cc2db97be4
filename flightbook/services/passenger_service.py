"""
Passenger manifest validation
"""

from datetime import date, datetime, timezone
from typing import List, Optional
import logging
import re

from flightbook.config import settings
from flightbook.core.exceptions import ValidationError
from flightbook.schemas.passenger import PassengerDetails, PassengerTypes

logger = logging.getLogger(__name__)

NAME_PATTERN = re.compile(r"^[A-Za-z\s-]{2,50}$")
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

ADULT_MIN_AGE = 12
CHILD_MIN_AGE = 2


def today_utc() -> date:
    return datetime.now(timezone.utc).date()


def calculate_age(date_of_birth: date, today: Optional[date] = None) -> int:
    """Whole years elapsed; the birthday must have been reached this year to count"""
    today = today or today_utc()
    age = today.year - date_of_birth.year
    if (today.month, today.day) < (date_of_birth.month, date_of_birth.day):
        age -= 1
    return age


class PassengerValidator:
    """Checks a passenger manifest and counts passengers by fare type"""

    def __init__(self, max_passengers: Optional[int] = None):
        self.max_passengers = settings.MAX_PASSENGERS if max_passengers is None else max_passengers

    def validate(self, passengers: List[PassengerDetails], today: Optional[date] = None) -> PassengerTypes:
        if not passengers or len(passengers) > self.max_passengers:
            raise ValidationError(
                f"Invalid number of passengers. Must be between 1 and {self.max_passengers}.",
                field="passengers"
            )

        types = PassengerTypes()
        for passenger in passengers:
            if not NAME_PATTERN.match(passenger.first_name) or not NAME_PATTERN.match(passenger.last_name):
                raise ValidationError(
                    "Invalid name format. Names must be 2-50 characters long and contain "
                    "only letters, spaces, and hyphens.",
                    field="name"
                )

            if not EMAIL_PATTERN.match(passenger.email):
                raise ValidationError("Invalid email format.", field="email")

            age = calculate_age(passenger.date_of_birth, today)
            if age < 0:
                raise ValidationError("Invalid date of birth.", field="dateOfBirth")

            if age >= ADULT_MIN_AGE:
                types.adults += 1
            elif age >= CHILD_MIN_AGE:
                types.children += 1
            else:
                types.infants += 1

        if types.adults == 0:
            raise ValidationError("At least one adult passenger is required.", field="passengers")

        if types.infants > types.adults:
            raise ValidationError("Maximum one infant per adult allowed.", field="passengers")

        logger.debug(f"Validated manifest: {types.model_dump()}")
        return types
