"""
Payment API Endpoints
"""

from typing import Any
from fastapi import APIRouter, Depends

from flightbook.api.dependencies import get_payment_service
from flightbook.schemas.payment import PaymentRequest
from flightbook.services.payment_service import PaymentService

router = APIRouter()


@router.post("")
async def process_payment(
    payment: PaymentRequest,
    service: PaymentService = Depends(get_payment_service)
) -> Any:
    """Charge the card and record the booking"""
    result = await service.process(payment)
    return result.model_dump(by_alias=True)
