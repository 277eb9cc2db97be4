"""
Seat reservation commit
"""

from typing import List
import logging

from flightbook.core.exceptions import (
    ConcurrencyError,
    NotFoundError,
    SeatUnavailableError,
    StorageError,
)
from flightbook.core.metrics import SEAT_RESERVATIONS
from flightbook.schemas.flight import Flight
from flightbook.services.flight_repository import FlightRepository

logger = logging.getLogger(__name__)


class ReservationCoordinator:
    """
    Commits an already-validated seat selection to the flight record.

    Committed seats are never rolled back here. Storage failures are not
    retried; that is left to the caller.
    """

    def __init__(self, repository: FlightRepository):
        self.repository = repository

    async def reserve(self, flight_id: str, seats: List[str]) -> Flight:
        try:
            flight = await self.repository.append_occupied_seats(flight_id, seats)
        except SeatUnavailableError as e:
            SEAT_RESERVATIONS.labels(outcome="seat_unavailable").inc()
            logger.warning(f"Seats taken before commit on flight {flight_id}: {e.seat_ids}")
            raise
        except NotFoundError:
            SEAT_RESERVATIONS.labels(outcome="not_found").inc()
            logger.warning(f"Flight {flight_id} disappeared before seats could be committed")
            raise
        except ConcurrencyError:
            SEAT_RESERVATIONS.labels(outcome="watch_exhausted").inc()
            logger.warning(f"Gave up committing seats on contended flight {flight_id}")
            raise
        except StorageError:
            SEAT_RESERVATIONS.labels(outcome="storage_error").inc()
            raise

        SEAT_RESERVATIONS.labels(outcome="committed").inc()
        logger.info(
            f"Reserved seats {seats} on flight {flight_id}",
            extra={"context": {"flight_id": flight_id, "seats": seats,
                               "available_seats": flight.available_seats}}
        )
        return flight
