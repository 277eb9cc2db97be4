"""
Seat map generation
"""

from typing import List

from flightbook.schemas.flight import Flight
from flightbook.schemas.seat import Seat, SeatStatus


class SeatLayoutGenerator:
    """Derives a flight's full seat grid from its cabin layout"""

    def generate(self, flight: Flight) -> List[Seat]:
        """
        One seat per (row, column), ordered 1A, 1B, ... 1F, 2A, ...

        Status and flags come from the snapshot passed in; nothing is cached.
        """
        occupied = set(flight.occupied_seats)
        exit_rows = set(flight.emergency_exit_rows)
        premium = set(flight.premium_seats)

        seats = []
        for row in range(1, flight.seat_rows + 1):
            for letter in flight.seat_columns:
                seat_id = f"{row}{letter}"
                seats.append(Seat(
                    id=seat_id,
                    number=seat_id,
                    status=SeatStatus.OCCUPIED if seat_id in occupied else SeatStatus.AVAILABLE,
                    is_emergency_exit=row in exit_rows,
                    is_premium=seat_id in premium,
                ))
        return seats
