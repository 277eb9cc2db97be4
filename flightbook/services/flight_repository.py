"""
Flight record store backed by Redis

Each flight is one JSON value under ``flight:{flightId}``; a set per
route and departure day (``flights:route:JFK-LAX-2026-11-02``) indexes
flights for search. Seat commits are single-key conditional updates done
with WATCH/MULTI/EXEC.
"""

from datetime import date
from typing import List, Optional
import logging

import redis.asyncio as redis
from redis.exceptions import RedisError, WatchError

from flightbook.config import settings
from flightbook.core.exceptions import (
    ConcurrencyError,
    NotFoundError,
    SeatUnavailableError,
    StorageError,
)
from flightbook.core.metrics import RESERVATION_WATCH_RETRIES
from flightbook.schemas.flight import Flight, route_date_key

logger = logging.getLogger(__name__)


def flight_key(flight_id: str) -> str:
    return f"flight:{flight_id}"


def route_index_key(route_date: str) -> str:
    return f"flights:route:{route_date}"


class FlightRepository:
    """Fetch, store and conditionally update flight records"""

    def __init__(
        self,
        client: redis.Redis,
        strict_commit: Optional[bool] = None,
        max_retries: Optional[int] = None
    ):
        self.client = client
        self.strict_commit = settings.STRICT_SEAT_COMMIT if strict_commit is None else strict_commit
        self.max_retries = settings.RESERVATION_MAX_RETRIES if max_retries is None else max_retries
        if self.max_retries < 1:
            raise ValueError("max_retries must be at least 1")

    async def get(self, flight_id: str) -> Flight:
        """Return the current flight snapshot or raise NotFoundError"""
        try:
            raw = await self.client.get(flight_key(flight_id))
        except RedisError as e:
            logger.error(f"Failed to read flight {flight_id}: {e}")
            raise StorageError("Failed to read flight record") from e

        if raw is None:
            raise NotFoundError("Flight", flight_id)
        return Flight.model_validate_json(raw)

    async def save(self, flight: Flight) -> None:
        """Create or replace a flight record and index it for search"""
        try:
            async with self.client.pipeline(transaction=True) as pipe:
                pipe.set(flight_key(flight.flight_id), flight.model_dump_json(by_alias=True))
                if flight.route_date:
                    pipe.sadd(route_index_key(flight.route_date), flight.flight_id)
                await pipe.execute()
        except RedisError as e:
            logger.error(f"Failed to save flight {flight.flight_id}: {e}")
            raise StorageError("Failed to save flight record") from e

    async def search(self, origin: str, destination: str, day: date) -> List[Flight]:
        """Flights on a route departing on the given day, ordered by id"""
        index = route_index_key(route_date_key(origin, destination, day))
        try:
            flight_ids = await self.client.smembers(index)
            if not flight_ids:
                return []
            raws = await self.client.mget([flight_key(fid) for fid in sorted(flight_ids)])
        except RedisError as e:
            logger.error(f"Flight search failed for {index}: {e}")
            raise StorageError("Failed to search flights") from e

        # Index entries can outlive their flight record
        return [Flight.model_validate_json(raw) for raw in raws if raw is not None]

    async def append_occupied_seats(self, flight_id: str, seats: List[str]) -> Flight:
        """
        Append ``seats`` to the flight's occupied seats.

        The write only lands if the flight record is unchanged since it was
        read; a concurrent write to the same flight makes EXEC fail and the
        read-check-write is retried against the fresh record. Appends from
        concurrent requests are therefore never lost.

        In strict mode the seats must still be free at commit time,
        otherwise SeatUnavailableError is raised. With strict mode off only
        the existence of the flight is checked and overlapping seats are
        appended as-is.

        Raises:
            NotFoundError: the flight record no longer exists
            SeatUnavailableError: strict mode and a seat was taken meanwhile
            ConcurrencyError: still contended after ``max_retries`` attempts
            StorageError: Redis failure
        """
        key = flight_key(flight_id)

        try:
            async with self.client.pipeline(transaction=True) as pipe:
                for attempt in range(1, self.max_retries + 1):
                    try:
                        await pipe.watch(key)
                        raw = await pipe.get(key)
                        if raw is None:
                            raise NotFoundError("Flight", flight_id)

                        flight = Flight.model_validate_json(raw)
                        if self.strict_commit:
                            occupied = set(flight.occupied_seats)
                            taken = [seat for seat in seats if seat in occupied]
                            if taken:
                                raise SeatUnavailableError(taken)

                        flight.occupied_seats.extend(seats)
                        pipe.multi()
                        pipe.set(key, flight.model_dump_json(by_alias=True))
                        await pipe.execute()
                        return flight
                    except WatchError:
                        await pipe.reset()
                        RESERVATION_WATCH_RETRIES.inc()
                        logger.info(
                            f"Flight {flight_id} changed during seat commit, "
                            f"retrying (attempt {attempt}/{self.max_retries})"
                        )
        except RedisError as e:
            logger.error(f"Seat commit failed for flight {flight_id}: {e}")
            raise StorageError("Failed to reserve seats") from e

        raise ConcurrencyError(
            f"Flight {flight_id} is being updated by other requests, please try again"
        )
