"""
Main API Router
Aggregates all API endpoints for v1
"""

from fastapi import APIRouter
from flightbook.api.v1.endpoints import (
    flights,
    passengers,
    seats,
    payment,
    health
)

api_router = APIRouter()

# Include all routers
api_router.include_router(flights.router, prefix="/flights", tags=["flights"])
api_router.include_router(passengers.router, prefix="/passengers", tags=["passengers"])
api_router.include_router(seats.router, prefix="/seats", tags=["seats"])
api_router.include_router(payment.router, prefix="/payments", tags=["payments"])
api_router.include_router(health.router, prefix="/health", tags=["health"])
