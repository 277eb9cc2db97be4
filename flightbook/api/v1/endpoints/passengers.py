"""
Passenger manifest validation endpoint
"""

from typing import Any
from fastapi import APIRouter

from flightbook.schemas.passenger import PassengerManifest, PassengerValidationResponse
from flightbook.services.passenger_service import PassengerValidator

router = APIRouter()


@router.post("/validate")
async def validate_passengers(manifest: PassengerManifest) -> Any:
    passenger_types = PassengerValidator().validate(manifest.passengers)
    return PassengerValidationResponse(passenger_types=passenger_types).model_dump(by_alias=True)
