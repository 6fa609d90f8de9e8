from typing import List, Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ecotrack.core.config import settings
from ecotrack.core.security import TokenData, admin_required, get_current_user
from ecotrack.db.session import get_db
from ecotrack.schemas.grade import (
    GradeUpdateRequest,
    GradeUpdateResponse,
    LeaderboardEntry,
    UserGradeResponse,
)
from ecotrack.services import user_grade_service

router = APIRouter()

@router.get("/leaderboard", response_model=List[LeaderboardEntry])
def get_leaderboard(
    current_user: TokenData = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> List[LeaderboardEntry]:
    """Users with the most points."""
    return user_grade_service.get_leaderboard(db, limit=settings.LEADERBOARD_SIZE)

@router.get("/{user_id}", response_model=UserGradeResponse)
def get_user_grade(
    user_id: str,
    current_user: TokenData = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> UserGradeResponse:
    return user_grade_service.get_user_grade(db, user_id)

@router.post("/update/{user_id}", response_model=Optional[GradeUpdateResponse])
def update_user_grade(
    user_id: str,
    update: GradeUpdateRequest,
    admin: TokenData = Depends(admin_required),
    db: Session = Depends(get_db)
) -> Optional[GradeUpdateResponse]:
    """
    Manually credit a trip to a user. Admin only.

    Returns null when the mode earns no points.
    """
    return user_grade_service.update_user_grade(db, user_id, update.mode, update.distance)
