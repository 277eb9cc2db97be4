"""
Test configuration and fixtures
"""

import pytest
import pytest_asyncio
from typing import AsyncGenerator
from datetime import date, datetime, timedelta, timezone
import os

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool
import fakeredis
from httpx import AsyncClient, ASGITransport

# Set test environment
os.environ["APP_ENV"] = "testing"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["REDIS_URL"] = "redis://localhost:6379/1"

# Import all models BEFORE creating fixtures (create_all needs them registered)
from flightbook.core.database import Base
from flightbook.models.booking import Booking
from flightbook.schemas.flight import Flight
from flightbook.services.flight_repository import FlightRepository
from flightbook.services.passenger_service import today_utc


@pytest_asyncio.fixture(scope="function")
async def test_db():
    """In-memory SQLite engine shared across the test's connections"""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(test_db) -> AsyncGenerator[AsyncSession, None]:
    """Create database session for tests"""
    async_session_maker = async_sessionmaker(
        test_db,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session_maker() as session:
        try:
            yield session
        finally:
            if session.in_transaction():
                await session.rollback()


@pytest_asyncio.fixture
async def redis_client():
    """In-process Redis for tests"""
    client = fakeredis.FakeAsyncRedis(decode_responses=True)

    await client.flushall()
    yield client

    await client.flushall()
    await client.aclose()


@pytest_asyncio.fixture
async def flight_repository(redis_client) -> FlightRepository:
    return FlightRepository(redis_client, strict_commit=True, max_retries=50)


@pytest.fixture
def payment_success_rate():
    """Gateway approval rate used by the client fixture; override per test"""
    return 1.0


@pytest_asyncio.fixture
async def client(db_session, redis_client, payment_success_rate):
    """Create test client with dependency overrides"""
    from flightbook.main import app
    from flightbook.core.database import get_session
    from flightbook.core.redis import get_redis
    from flightbook.api.dependencies import get_payment_gateway
    from flightbook.services.payment_service import MockPaymentGateway

    def override_get_session():
        yield db_session

    def override_get_redis():
        return redis_client

    def override_get_payment_gateway():
        return MockPaymentGateway(success_rate=payment_success_rate)

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_redis] = override_get_redis
    app.dependency_overrides[get_payment_gateway] = override_get_payment_gateway

    try:
        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()


# Flight fixtures
@pytest.fixture
def now() -> datetime:
    return datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def flight_factory():
    """Build a Flight with sensible defaults; keyword overrides use field names"""
    def _make(**overrides) -> Flight:
        data = {
            "flight_id": "FB100-2026-11-08",
            "flight_number": "FB100",
            "origin": "JFK",
            "destination": "LAX",
            "departure_time": datetime.now(timezone.utc) + timedelta(days=20),
            "total_seats": 180,
            "occupied_seats": ["3A", "3B", "5C", "7D", "9E", "10F", "14A", "20B", "25C", "30F"],
            "emergency_exit_rows": [1, 12],
            "premium_seats": ["1A", "1B", "1C", "1D", "1E", "1F", "2A", "2B"],
            "premium_seat_cost": 50.0,
            "base_price": 200.0,
        }
        data.update(overrides)
        return Flight(**data)

    return _make


@pytest_asyncio.fixture
async def test_flight(flight_repository, flight_factory) -> Flight:
    """A stored flight departing 20 days from now"""
    flight = flight_factory()
    await flight_repository.save(flight)
    return flight


# Passenger fixtures
@pytest.fixture
def dob_for_age():
    """Date of birth making a passenger exactly ``age`` today (or on ``today``)"""
    def _dob(age: int, today: date = None) -> date:
        today = today or today_utc()
        try:
            return today.replace(year=today.year - age)
        except ValueError:
            # Feb 29 in a non-leap year
            return today.replace(year=today.year - age, day=28)

    return _dob


@pytest.fixture
def valid_payment_data():
    return {
        "cardNumber": "4111 1111 1111 1111",
        "expiryDate": "12/30",
        "cvv": "123",
        "cardName": "Ada Lovelace",
        "billingAddress": "12 Analytical Way, London",
        "bookingData": {
            "flights": [{"flightId": "FB100-2026-11-08"}],
            "seats": ["2A"],
            "passengers": [{"firstName": "Ada", "lastName": "Lovelace"}],
            "totalPrice": 310.5,
        },
    }
