from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ecotrack.core.security import TokenData, get_current_user
from ecotrack.db.session import get_db
from ecotrack.schemas.emission import EmissionCalculationRequest, EmissionResult
from ecotrack.services.emission_service import calculate_emission

router = APIRouter()

@router.post(
    "/calculate",
    response_model=EmissionResult,
    responses={400: {"description": "Invalid input or no matching emission factor"}},
)
def calculate_emission_endpoint(
    request: EmissionCalculationRequest,
    current_user: TokenData = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> EmissionResult:
    """
    Estimate the CO2 emission of a trip.

    Car and motorcycle need the id of the user's vehicle in `vehicleDetails`;
    its fuel type and engine size select the emission factor. Failures return
    400 with a message naming what is missing.
    """
    return calculate_emission(db, request.mode, request.distance, request.vehicleDetails)
