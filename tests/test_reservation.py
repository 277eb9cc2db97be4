"""
Concurrent seat reservation tests
"""

import asyncio
import pytest

from flightbook.core.exceptions import NotFoundError, SeatUnavailableError, StorageError
from flightbook.services.flight_repository import FlightRepository, flight_key
from flightbook.services.reservation import ReservationCoordinator
from flightbook.services.seat_service import SeatInventoryService
from flightbook.schemas.seat import PassengerRef


@pytest.mark.concurrency
@pytest.mark.asyncio
class TestConcurrentReservations:
    """Test that concurrent commits on one flight never lose each other"""

    async def test_disjoint_reservations_all_land(self, flight_repository, test_flight):
        """Ten concurrent single-seat reservations on different seats"""
        coordinator = ReservationCoordinator(flight_repository)
        seats = [f"{row}D" for row in range(20, 30)]

        results = await asyncio.gather(
            *[coordinator.reserve(test_flight.flight_id, [seat]) for seat in seats],
            return_exceptions=True
        )

        assert not [r for r in results if isinstance(r, Exception)]
        stored = await flight_repository.get(test_flight.flight_id)
        assert set(seats) <= set(stored.occupied_seats)
        assert stored.available_seats == test_flight.available_seats - len(seats)

    async def test_same_seat_race_has_one_winner(self, flight_repository, test_flight):
        """Only one of several requests for the same seat commits"""
        coordinator = ReservationCoordinator(flight_repository)

        results = await asyncio.gather(
            *[coordinator.reserve(test_flight.flight_id, ["2C"]) for _ in range(8)],
            return_exceptions=True
        )

        winners = [r for r in results if not isinstance(r, Exception)]
        losers = [r for r in results if isinstance(r, Exception)]
        assert len(winners) == 1
        assert all(isinstance(r, SeatUnavailableError) for r in losers)

        stored = await flight_repository.get(test_flight.flight_id)
        assert stored.occupied_seats.count("2C") == 1

    async def test_concurrent_service_calls(self, flight_repository, test_flight, dob_for_age):
        """Full reserve path: validation, commit and pricing"""
        service = SeatInventoryService(flight_repository)
        passengers = [PassengerRef(date_of_birth=dob_for_age(30))]

        results = await asyncio.gather(
            service.reserve_seats(test_flight.flight_id, ["1A"], passengers),
            service.reserve_seats(test_flight.flight_id, ["2C"], passengers),
            service.reserve_seats(test_flight.flight_id, ["2C"], passengers),
            return_exceptions=True
        )

        assert results[0].additional_cost == 50.0
        outcomes = results[1:]
        assert sum(1 for r in outcomes if isinstance(r, SeatUnavailableError)) == 1
        assert sum(1 for r in outcomes if not isinstance(r, Exception)) == 1


@pytest.mark.unit
@pytest.mark.asyncio
class TestReservationFailures:
    """Test commit failures surface unchanged"""

    async def test_flight_deleted_before_commit(self, flight_repository, redis_client, test_flight):
        coordinator = ReservationCoordinator(flight_repository)
        await redis_client.delete(flight_key(test_flight.flight_id))

        with pytest.raises(NotFoundError):
            await coordinator.reserve(test_flight.flight_id, ["2C"])

    async def test_storage_failure_propagates(self, test_flight):
        class BrokenRepository(FlightRepository):
            async def append_occupied_seats(self, flight_id, seats):
                raise StorageError("Failed to reserve seats")

        coordinator = ReservationCoordinator(BrokenRepository(client=None))

        with pytest.raises(StorageError):
            await coordinator.reserve(test_flight.flight_id, ["2C"])
