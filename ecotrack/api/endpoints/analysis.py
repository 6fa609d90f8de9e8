from typing import List
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ecotrack.core.security import TokenData, get_current_user
from ecotrack.db.session import get_db
from ecotrack.schemas.analysis import CommunityImpact, ModeBreakdown, TrendPoint, TripSummary, VehicleUsage
from ecotrack.services import analysis_service

router = APIRouter()

@router.get("/summary", response_model=TripSummary)
def get_summary(
    current_user: TokenData = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> TripSummary:
    """Totals over all trips of the authenticated user."""
    return analysis_service.get_summary(db, current_user.user_id)

@router.get("/mode-breakdown", response_model=List[ModeBreakdown])
def get_mode_breakdown(
    current_user: TokenData = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> List[ModeBreakdown]:
    return analysis_service.get_mode_breakdown(db, current_user.user_id)

@router.get("/trend", response_model=List[TrendPoint])
def get_emission_trend(
    days: int = Query(30, ge=1, le=366),
    current_user: TokenData = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> List[TrendPoint]:
    """Daily emission totals for the last `days` days."""
    return analysis_service.get_emission_trend(db, current_user.user_id, days=days)

@router.get("/vehicle-usage", response_model=List[VehicleUsage])
def get_vehicle_usage(
    current_user: TokenData = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> List[VehicleUsage]:
    return analysis_service.get_vehicle_usage(db, current_user.user_id)

@router.get("/impact", response_model=CommunityImpact)
def get_community_impact(
    current_user: TokenData = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> CommunityImpact:
    """How much CO2 the user saved and where that places them among all users."""
    return analysis_service.get_community_impact(db, current_user.user_id)
