"""
Booking model
"""

from sqlalchemy import Column, String, Enum, Numeric, JSON
import enum

from flightbook.models.base import BaseModel


class BookingStatus(str, enum.Enum):
    CONFIRMED = "CONFIRMED"


class Booking(BaseModel):
    """
    A paid booking. The reference doubles as primary key so a duplicate
    reference fails the insert instead of overwriting an existing booking.
    """
    __tablename__ = "bookings"

    booking_ref = Column(String(6), primary_key=True)
    payment_id = Column(String(64), nullable=False, index=True)
    flights = Column(JSON, nullable=False)
    seats = Column(JSON, nullable=False)
    passengers = Column(JSON, nullable=False)
    total_price = Column(Numeric(10, 2), nullable=False)
    status = Column(
        Enum(BookingStatus),
        default=BookingStatus.CONFIRMED,
        nullable=False
    )

    def __repr__(self):
        return f"<Booking(ref={self.booking_ref}, payment_id={self.payment_id}, status={self.status})>"
