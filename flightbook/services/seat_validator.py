"""
Seat selection rules
"""

from datetime import date
from typing import Any, Optional, Sequence
import logging
import re

from flightbook.core.exceptions import (
    EmergencyRowIneligibleError,
    InvalidSeatFormatError,
    SeatUnavailableError,
    TooManySeatsError,
)
from flightbook.schemas.flight import Flight
from flightbook.services.passenger_service import calculate_age

logger = logging.getLogger(__name__)

# Row 1-99 followed by a column letter, e.g. 1A, 14C, 30F
SEAT_PATTERN = re.compile(r"[1-9][0-9]?[A-F]")

EMERGENCY_ROW_MIN_AGE = 15
EMERGENCY_ROW_MAX_AGE = 75


def seat_row(seat_id: str) -> int:
    return int(seat_id[:-1])


class SeatSelectionValidator:
    """
    Checks a seat selection against passengers and a flight snapshot.

    Checks run in a fixed order and stop at the first failure, which
    decides the error the client sees:

    1. the selection is a list
    2. an empty selection passes
    3. no more seats than passengers
    4. every seat id is well formed (and exists on the aircraft, when the
       flight is known)
    5. no seat is already occupied
    6. passengers in emergency exit rows are 15 to 75 years old

    Nothing is mutated. Failures raise; success returns None.
    """

    def validate_selection(self, selection: Any, passengers: Optional[Sequence[Any]]) -> None:
        """Checks 1-4, which do not need the flight record"""
        if not isinstance(selection, (list, tuple)):
            logger.info(f"Seat selection is not a list: {selection!r}")
            raise InvalidSeatFormatError("Seat selection must be a list of seat identifiers")

        if not selection:
            return

        passenger_count = len(passengers) if passengers is not None else 0
        if len(selection) > passenger_count:
            logger.info(f"Too many seats selected: {len(selection)} for {passenger_count} passengers")
            raise TooManySeatsError(len(selection), passenger_count)

        for seat in selection:
            if not isinstance(seat, str) or not SEAT_PATTERN.fullmatch(seat):
                logger.info(f"Invalid seat format: {seat!r}")
                raise InvalidSeatFormatError(f"Invalid seat format: {seat}")

    def validate(
        self,
        selection: Any,
        passengers: Optional[Sequence[Any]],
        flight: Flight,
        today: Optional[date] = None
    ) -> None:
        """All checks against the given flight snapshot"""
        self.validate_selection(selection, passengers)
        if not selection:
            return

        for seat in selection:
            if seat_row(seat) > flight.seat_rows or seat[-1] not in flight.seat_columns:
                raise InvalidSeatFormatError(f"Seat {seat} does not exist on this aircraft")

        occupied = set(flight.occupied_seats)
        unavailable = [seat for seat in selection if seat in occupied]
        if unavailable:
            logger.info(f"Seats already occupied on flight {flight.flight_id}: {unavailable}")
            raise SeatUnavailableError(unavailable)

        exit_rows = set(flight.emergency_exit_rows)
        for index, seat in enumerate(selection):
            if seat_row(seat) not in exit_rows:
                continue
            age = calculate_age(passengers[index].date_of_birth, today)
            if not EMERGENCY_ROW_MIN_AGE <= age <= EMERGENCY_ROW_MAX_AGE:
                raise EmergencyRowIneligibleError(
                    seat, index, EMERGENCY_ROW_MIN_AGE, EMERGENCY_ROW_MAX_AGE
                )
