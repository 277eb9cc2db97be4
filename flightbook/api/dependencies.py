"""
FastAPI dependency providers
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from flightbook.core.database import get_session
from flightbook.core.redis import get_redis
from flightbook.services.flight_repository import FlightRepository
from flightbook.services.flight_search import FlightSearchService
from flightbook.services.payment_service import BookingRepository, MockPaymentGateway, PaymentService
from flightbook.services.seat_service import SeatInventoryService


async def get_flight_repository(redis_client=Depends(get_redis)) -> FlightRepository:
    return FlightRepository(redis_client)


async def get_seat_service(
    repository: FlightRepository = Depends(get_flight_repository)
) -> SeatInventoryService:
    return SeatInventoryService(repository)


async def get_flight_search_service(
    repository: FlightRepository = Depends(get_flight_repository)
) -> FlightSearchService:
    return FlightSearchService(repository)


def get_payment_gateway() -> MockPaymentGateway:
    return MockPaymentGateway()


async def get_payment_service(
    gateway: MockPaymentGateway = Depends(get_payment_gateway),
    db: AsyncSession = Depends(get_session)
) -> PaymentService:
    return PaymentService(gateway, BookingRepository(db))
