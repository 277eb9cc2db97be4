"""
Database models
"""

from flightbook.models.base import BaseModel
from flightbook.models.booking import Booking, BookingStatus

__all__ = [
    "BaseModel",
    "Booking",
    "BookingStatus",
]
