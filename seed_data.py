#!/usr/bin/env python3
"""
Seed Redis with demo flights
"""
import asyncio
import os
import sys
from datetime import datetime, timedelta, timezone

# Add project root to path
sys.path.insert(0, os.path.dirname(__file__))

from flightbook.core.redis import init_redis, close_redis, get_redis
from flightbook.schemas.flight import Flight
from flightbook.services.flight_repository import FlightRepository

ROUTES = [
    ("JFK", "LAX", 320.0),
    ("LAX", "JFK", 310.0),
    ("SFO", "ORD", 240.0),
    ("ORD", "SFO", 235.0),
    ("BOS", "MIA", 180.0),
    ("MIA", "BOS", 175.0),
]

# Departures this many days out exercise each fare band
DEPARTURE_OFFSETS = [3, 10, 21, 45]


def build_demo_flights(now: datetime):
    flights = []
    for route_index, (origin, destination, base_price) in enumerate(ROUTES):
        for offset in DEPARTURE_OFFSETS:
            departure = (now + timedelta(days=offset)).replace(hour=8 + route_index, minute=0, second=0, microsecond=0)
            flight_number = f"FB{100 + route_index * 10 + DEPARTURE_OFFSETS.index(offset)}"
            flights.append(Flight(
                flight_id=f"{flight_number}-{departure.date().isoformat()}",
                flight_number=flight_number,
                origin=origin,
                destination=destination,
                departure_time=departure,
                total_seats=180,
                occupied_seats=["1A", "1B", "7C", "12F", "20D"],
                emergency_exit_rows=[12, 13],
                premium_seats=[f"{row}{letter}" for row in range(1, 4) for letter in "ABCDEF"],
                premium_seat_cost=45.0,
                base_price=base_price,
            ))
    return flights


async def main():
    await init_redis()
    try:
        repository = FlightRepository(await get_redis())
        flights = build_demo_flights(datetime.now(timezone.utc))
        for flight in flights:
            await repository.save(flight)
        print(f"✅ Seeded {len(flights)} flights")
    finally:
        await close_redis()


if __name__ == "__main__":
    asyncio.run(main())
