"""
Dynamic fare and seat surcharge pricing
"""

from datetime import datetime, timezone
from typing import Iterable, Optional
import math

from flightbook.schemas.flight import Flight

SECONDS_PER_DAY = 24 * 60 * 60

# (max days to departure, multiplier), checked in order
TIME_MULTIPLIERS = ((7, 1.3), (14, 1.2), (30, 1.1))

# (occupancy strictly above, multiplier), checked in order
OCCUPANCY_MULTIPLIERS = ((0.8, 1.4), (0.6, 1.2))


def round_half_up(value: float) -> float:
    """Round to cents, halves going up"""
    return math.floor(value * 100 + 0.5) / 100


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


class PricingEngine:

    @staticmethod
    def days_until_departure(departure_time: datetime, now: datetime) -> int:
        elapsed = (_as_utc(departure_time) - _as_utc(now)).total_seconds()
        return math.ceil(elapsed / SECONDS_PER_DAY)

    @staticmethod
    def occupancy(flight: Flight) -> float:
        if flight.total_seats <= 0:
            return 0.0
        return (flight.total_seats - flight.available_seats) / flight.total_seats

    def fare_multiplier(self, flight: Flight, departure_time: Optional[datetime], now: datetime) -> float:
        multiplier = 1.0

        if departure_time is not None:
            days = self.days_until_departure(departure_time, now)
            for max_days, time_multiplier in TIME_MULTIPLIERS:
                if days <= max_days:
                    multiplier *= time_multiplier
                    break

        occupancy = self.occupancy(flight)
        for threshold, occupancy_multiplier in OCCUPANCY_MULTIPLIERS:
            if occupancy > threshold:
                multiplier *= occupancy_multiplier
                break

        return multiplier

    def price_fare(
        self,
        flight: Flight,
        departure_time: Optional[datetime] = None,
        now: Optional[datetime] = None
    ) -> float:
        """
        Base price scaled by time to departure and occupancy.

        ``departure_time`` defaults to the flight's own; a flight without
        one gets no time-based adjustment.
        """
        departure_time = departure_time or flight.departure_time
        now = now or datetime.now(timezone.utc)
        multiplier = self.fare_multiplier(flight, departure_time, now)
        return round_half_up(flight.base_price * multiplier)

    @staticmethod
    def price_seats(selection: Iterable[str], flight: Flight) -> float:
        """Premium seat surcharge for a selection"""
        premium = set(flight.premium_seats)
        return float(sum(flight.premium_seat_cost for seat in selection if seat in premium))
