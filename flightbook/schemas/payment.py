"""
Payment schemas for request/response models
"""

from typing import Any, List, Optional, Union
from pydantic import Field, StrictFloat, StrictInt

from flightbook.schemas.base import BaseSchema


class BookingData(BaseSchema):
    """Booking being paid for; checked field by field by PaymentValidator"""
    flights: Optional[List[Any]] = None
    seats: Optional[List[Any]] = None
    passengers: Optional[List[Any]] = None
    total_price: Optional[Union[StrictInt, StrictFloat]] = Field(None, alias="totalPrice")


class PaymentRequest(BaseSchema):
    card_number: Optional[str] = Field(None, alias="cardNumber")
    expiry_date: Optional[str] = Field(None, alias="expiryDate")
    cvv: Optional[str] = None
    card_name: Optional[str] = Field(None, alias="cardName")
    billing_address: Optional[str] = Field(None, alias="billingAddress")
    booking_data: Optional[BookingData] = Field(None, alias="bookingData")


class PaymentResult(BaseSchema):
    """Outcome of a gateway charge"""
    success: bool
    payment_id: Optional[str] = Field(None, alias="paymentId")
    error: Optional[str] = None


class PaymentResponse(BaseSchema):
    success: bool = True
    booking_reference: str = Field(..., alias="bookingReference")
    payment_id: str = Field(..., alias="paymentId")
