"""
Payment processing and booking persistence

The payment gateway is an external collaborator; MockPaymentGateway stands
in for it and approves a configurable share of charges.
"""

from typing import Callable, Optional
from datetime import datetime, timezone
from decimal import Decimal
import logging
import random
import re
import secrets
import string
import time

from sqlalchemy import insert
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from flightbook.config import settings
from flightbook.core.exceptions import PaymentDeclinedError, StorageError, ValidationError
from flightbook.core.metrics import PAYMENTS
from flightbook.models.booking import Booking, BookingStatus
from flightbook.schemas.payment import BookingData, PaymentRequest, PaymentResponse, PaymentResult

logger = logging.getLogger(__name__)

BOOKING_REF_CHARSET = string.ascii_uppercase + string.digits
BOOKING_REF_LENGTH = 6
PAYMENT_ID_CHARSET = string.digits + string.ascii_lowercase


def generate_booking_reference() -> str:
    return "".join(secrets.choice(BOOKING_REF_CHARSET) for _ in range(BOOKING_REF_LENGTH))


class PaymentValidator:
    """Validator for payment-related operations"""

    @staticmethod
    def validate_card_number(card_number: str) -> bool:
        """16 digits (spaces and dashes ignored) passing the Luhn check"""
        card_number = re.sub(r"[\s-]", "", card_number)
        if not re.fullmatch(r"[0-9]{16}", card_number):
            return False

        digits = [int(d) for d in card_number]

        # Double every second digit from right
        for i in range(len(digits) - 2, -1, -2):
            digits[i] *= 2
            if digits[i] > 9:
                digits[i] -= 9

        return sum(digits) % 10 == 0

    @staticmethod
    def validate_expiry(expiry_date: str, now: Optional[datetime] = None) -> bool:
        """MM/YY; a card is good through the end of its expiry month"""
        match = re.fullmatch(r"([0-9]{1,2})/([0-9]{2})", expiry_date)
        if not match:
            return False
        month = int(match.group(1))
        year = 2000 + int(match.group(2))

        if not 1 <= month <= 12:
            return False

        now = now or datetime.now(timezone.utc)
        if year < now.year:
            return False
        if year == now.year and month < now.month:
            return False
        return True

    @staticmethod
    def validate_cvv(cvv: str) -> bool:
        """Validate CVV code"""
        return re.fullmatch(r"[0-9]{3,4}", cvv) is not None

    @classmethod
    def validate(cls, payment: PaymentRequest, now: Optional[datetime] = None) -> None:
        """Raise ValidationError for the first problem found"""
        if not payment.card_number or not cls.validate_card_number(payment.card_number):
            raise ValidationError("Invalid card number", field="cardNumber")

        if not payment.expiry_date or not cls.validate_expiry(payment.expiry_date, now):
            raise ValidationError("Invalid or expired card", field="expiryDate")

        if not payment.cvv or not cls.validate_cvv(payment.cvv):
            raise ValidationError("Invalid CVV", field="cvv")

        if not payment.card_name or len(payment.card_name) < 2:
            raise ValidationError("Invalid cardholder name", field="cardName")

        if not payment.billing_address or len(payment.billing_address) < 5:
            raise ValidationError("Invalid billing address", field="billingAddress")

        booking = payment.booking_data
        if not booking or not booking.flights or not booking.seats or not booking.passengers:
            raise ValidationError("Missing booking information", field="bookingData")

        if booking.total_price is None or booking.total_price <= 0:
            raise ValidationError("Invalid booking price", field="bookingData.totalPrice")


class MockPaymentGateway:
    """Approves ``success_rate`` of charges and returns an opaque payment id"""

    def __init__(self, success_rate: Optional[float] = None, rng: Optional[random.Random] = None):
        self.success_rate = settings.PAYMENT_MOCK_SUCCESS_RATE if success_rate is None else success_rate
        self.rng = rng or random.Random()

    def _payment_id(self) -> str:
        suffix = "".join(self.rng.choice(PAYMENT_ID_CHARSET) for _ in range(9))
        return f"PAY-{int(time.time() * 1000)}-{suffix}"

    async def charge(self, amount: float, payment: PaymentRequest) -> PaymentResult:
        if self.rng.random() < self.success_rate:
            return PaymentResult(success=True, payment_id=self._payment_id())
        return PaymentResult(success=False, error="Payment declined. Please try a different card.")


class BookingRepository:
    """Stores confirmed bookings; an insert never overwrites an existing reference"""

    def __init__(
        self,
        session: AsyncSession,
        reference_factory: Callable[[], str] = generate_booking_reference,
        max_attempts: Optional[int] = None
    ):
        self.session = session
        self.reference_factory = reference_factory
        self.max_attempts = settings.BOOKING_REF_MAX_ATTEMPTS if max_attempts is None else max_attempts
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

    async def create(self, payment_id: str, booking_data: BookingData) -> str:
        """Insert a CONFIRMED booking and return its reference"""
        for attempt in range(1, self.max_attempts + 1):
            booking_ref = self.reference_factory()
            stmt = insert(Booking).values(
                booking_ref=booking_ref,
                payment_id=payment_id,
                flights=booking_data.flights,
                seats=booking_data.seats,
                passengers=booking_data.passengers,
                total_price=Decimal(str(booking_data.total_price)),
                status=BookingStatus.CONFIRMED,
            )
            try:
                await self.session.execute(stmt)
                await self.session.commit()
                return booking_ref
            except IntegrityError:
                await self.session.rollback()
                logger.warning(
                    f"Booking reference {booking_ref} already taken "
                    f"(attempt {attempt}/{self.max_attempts})"
                )
            except SQLAlchemyError as e:
                await self.session.rollback()
                logger.error(f"Error saving booking: {e}")
                raise StorageError("Failed to save booking details") from e

        raise StorageError("Failed to save booking details")

    async def get(self, booking_ref: str) -> Optional[Booking]:
        return await self.session.get(Booking, booking_ref)


class PaymentService:
    """Validates card data, charges it and records the booking"""

    def __init__(self, gateway: MockPaymentGateway, bookings: BookingRepository):
        self.gateway = gateway
        self.bookings = bookings

    async def process(self, payment: PaymentRequest) -> PaymentResponse:
        try:
            PaymentValidator.validate(payment)
        except ValidationError as e:
            PAYMENTS.labels(outcome="invalid").inc()
            logger.info(f"Payment validation failed: {e.message}")
            raise

        result = await self.gateway.charge(payment.booking_data.total_price, payment)
        if not result.success:
            PAYMENTS.labels(outcome="declined").inc()
            logger.info(f"Payment declined: {result.error}")
            raise PaymentDeclinedError(result.error or "Payment declined")

        try:
            booking_ref = await self.bookings.create(result.payment_id, payment.booking_data)
        except StorageError:
            PAYMENTS.labels(outcome="storage_error").inc()
            logger.error(f"Payment {result.payment_id} captured but booking was not saved")
            raise

        PAYMENTS.labels(outcome="confirmed").inc()
        logger.info(f"Booking {booking_ref} confirmed with payment {result.payment_id}")
        return PaymentResponse(booking_reference=booking_ref, payment_id=result.payment_id)
