from typing import List
from fastapi import APIRouter, BackgroundTasks, Depends, status
from sqlalchemy.orm import Session, sessionmaker

from ecotrack.core.security import TokenData, get_current_user
from ecotrack.db.session import get_db, get_session_factory
from ecotrack.schemas.travel import (
    HistoryEntry,
    TravelDataCreate,
    TravelDetailResponse,
    TripDeleteResponse,
    TripResponse,
    TripUpdate,
)
from ecotrack.services import travel_service
from ecotrack.services.events import TripCreated, handle_trip_created

import logging

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("/add", response_model=TravelDetailResponse, status_code=status.HTTP_201_CREATED)
def add_travel_data(
    travel_data: TravelDataCreate,
    background_tasks: BackgroundTasks,
    current_user: TokenData = Depends(get_current_user),
    db: Session = Depends(get_db),
    session_factory: sessionmaker = Depends(get_session_factory),
) -> TravelDetailResponse:
    """
    Log a trip for the authenticated user.

    Creates the trip and its travel detail, then schedules the gamification
    update, which cannot fail this request.
    """
    travel_detail = travel_service.create_travel_data(db, current_user.user_id, travel_data)

    event = TripCreated(
        user_id=current_user.user_id,
        trip_id=travel_detail.tripId,
        mode=travel_detail.mode,
        distance_km=travel_detail.distanceKm,
    )
    background_tasks.add_task(handle_trip_created, event, session_factory)

    return travel_detail

@router.get("/history", response_model=List[HistoryEntry])
def get_travel_history(
    current_user: TokenData = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> List[HistoryEntry]:
    """Travel history of the authenticated user, newest first."""
    return travel_service.get_travel_history(db, current_user.user_id)

@router.put("/update/{trip_id}", response_model=TripResponse)
def update_trip(
    trip_id: int,
    changes: TripUpdate,
    current_user: TokenData = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> TripResponse:
    """
    Edit a trip owned by the authenticated user.

    `distance` and `emission` must be recalculated by the client and sent with
    every update; they are stored as given.
    """
    return travel_service.update_trip(db, trip_id, current_user.user_id, changes)

@router.delete("/delete/{trip_id}", response_model=TripDeleteResponse)
def delete_trip(
    trip_id: int,
    current_user: TokenData = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> TripDeleteResponse:
    """Delete a trip owned by the authenticated user, with its travel detail."""
    return travel_service.delete_trip(db, trip_id, current_user.user_id)
