"""
Custom application exceptions
"""

from typing import Optional, Dict, Any, List


class FlightBookingException(Exception):
    """Base exception for FlightBook application"""

    def __init__(
        self,
        message: str,
        code: str,
        status_code: int = 400,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(FlightBookingException):
    """Malformed or missing input"""

    def __init__(self, message: str, field: Optional[str] = None, code: str = "VALIDATION_ERROR"):
        details = {"field": field} if field else {}
        super().__init__(
            message=message,
            code=code,
            status_code=400,
            details=details
        )


class InvalidSeatFormatError(ValidationError):
    """Seat selection is not a list, or a seat id is malformed"""

    def __init__(self, message: str = "Invalid seat selection"):
        super().__init__(message=message, field="seats", code="INVALID_FORMAT")


class TooManySeatsError(ValidationError):
    """More seats selected than passengers travelling"""

    def __init__(self, seat_count: int, passenger_count: int):
        super().__init__(
            message=f"Too many seats selected: {seat_count} seats for {passenger_count} passengers",
            field="seats",
            code="TOO_MANY_SEATS"
        )


class BusinessRuleViolation(FlightBookingException):
    """Well-formed request that breaks a business rule"""

    def __init__(self, message: str, code: str = "BUSINESS_RULE_VIOLATION", details: Optional[Dict] = None):
        super().__init__(
            message=message,
            code=code,
            status_code=400,
            details=details
        )


class EmergencyRowIneligibleError(BusinessRuleViolation):
    """Passenger may not sit in an emergency exit row"""

    def __init__(self, seat_id: str, passenger_index: int, min_age: int, max_age: int):
        super().__init__(
            message=(
                f"Invalid emergency exit row selection: passenger {passenger_index + 1} "
                f"must be between {min_age} and {max_age} years old to sit in seat {seat_id}"
            ),
            code="INELIGIBLE_FOR_EMERGENCY_ROW",
            details={"seat": seat_id, "passenger_index": passenger_index}
        )


class NotFoundError(FlightBookingException):
    """Resource not found errors"""

    def __init__(self, resource: str, identifier: Any = None):
        message = f"{resource} not found"
        if identifier:
            message = f"{resource} with id {identifier} not found"
        super().__init__(
            message=message,
            code="NOT_FOUND",
            status_code=404
        )


class ConflictError(FlightBookingException):
    """Resource conflict errors"""

    def __init__(self, message: str, code: str = "CONFLICT", details: Optional[Dict] = None):
        super().__init__(
            message=message,
            code=code,
            status_code=409,
            details=details
        )


class SeatUnavailableError(ConflictError):
    """Seat unavailable error"""

    def __init__(self, seat_ids: List[str]):
        super().__init__(
            message=f"Selected seats are no longer available: {', '.join(seat_ids)}",
            code="SEAT_UNAVAILABLE",
            details={"unavailable_seats": list(seat_ids)}
        )
        self.seat_ids = list(seat_ids)


class ConcurrencyError(ConflictError):
    """Concurrency conflict error"""

    def __init__(self, message: str = "Resource was modified by another process"):
        super().__init__(
            message=message,
            code="CONCURRENCY_ERROR"
        )


class StorageError(FlightBookingException):
    """Backing store failed; reported as an internal error"""

    def __init__(self, message: str = "Storage backend unavailable", details: Optional[Dict] = None):
        super().__init__(
            message=message,
            code="STORAGE_ERROR",
            status_code=500,
            details=details
        )


class PaymentDeclinedError(FlightBookingException):
    """Payment gateway refused the charge"""

    def __init__(self, message: str = "Payment declined. Please try a different card."):
        super().__init__(
            message=message,
            code="PAYMENT_DECLINED",
            status_code=400
        )
