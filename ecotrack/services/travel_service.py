"""
Trip / travel detail dual-write protocol.

A logged journey is stored twice: the canonical ``Trip`` and the
``TravelDetail`` projection used for history. Create, update and delete touch
both records inside a single transaction, so after any call either both
writes are committed or neither is.
"""

from datetime import datetime
from typing import Any, Dict, List
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ecotrack.core.exceptions import DualWriteError, Forbidden, NotFound
from ecotrack.models.travel import TravelDetail, Trip
from ecotrack.models.vehicle import Vehicle
from ecotrack.schemas.travel import (
    HistoryEntry,
    TravelDataCreate,
    TravelDetailResponse,
    TripSnapshot,
    TripUpdate,
    VehicleSnapshot,
)

logger = logging.getLogger(__name__)

# Update payload field -> Trip column
TRIP_UPDATE_FIELDS = {
    "source": "source",
    "sourceDisplayName": "sourceDisplayName",
    "destination": "destination",
    "destinationDisplayName": "destinationDisplayName",
    "mode": "mode",
    "vehicleId": "vehicleId",
    "distance": "distanceKm",
    "emission": "emissionKg",
}

# Trip columns mirrored on the travel detail
MIRRORED_FIELDS = ("mode", "distanceKm", "emissionKg", "vehicleId")


def _commit_pair(db: Session, action: str, trip_id: Any) -> None:
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Dual-write {action} failed for trip {trip_id}, rolled back: {e}")
        raise DualWriteError(f"Could not {action} trip; no changes were saved")


def create_travel_data(db: Session, user_id: str, data: TravelDataCreate) -> TravelDetail:
    """
    Persist a new trip and its travel detail.

    The trip is flushed first so its id exists before the travel detail that
    links to it is written; both are committed together.
    """
    travel_date = data.date or datetime.utcnow()
    mode = data.mode.value

    trip = Trip(
        userId=user_id,
        vehicleId=data.vehicleId,
        source=data.source,
        sourceDisplayName=data.sourceDisplayName or data.source,
        destination=data.destination,
        destinationDisplayName=data.destinationDisplayName or data.destination,
        distanceKm=data.distance,
        mode=mode,
        emissionKg=data.emission,
        date=travel_date,
    )

    try:
        db.add(trip)
        db.flush()

        travel_detail = TravelDetail(
            userId=user_id,
            tripId=trip.id,
            vehicleId=data.vehicleId,
            mode=mode,
            distanceKm=data.distance,
            emissionKg=data.emission,
            date=travel_date,
        )
        db.add(travel_detail)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Dual-write create failed for user {user_id}, rolled back: {e}")
        raise DualWriteError("Could not create trip; no changes were saved")

    _commit_pair(db, "create", trip.id)
    db.refresh(travel_detail)
    logger.info(f"Trip {travel_detail.tripId} created for user {user_id}")
    return travel_detail


def _get_owned_trip(db: Session, trip_id: int, user_id: str) -> Trip:
    trip = db.query(Trip).filter(Trip.id == trip_id).first()
    if trip is None:
        raise NotFound("Trip not found")
    if trip.userId != user_id:
        logger.warning(f"User {user_id} attempted to modify trip {trip_id} of another user")
        raise Forbidden("Not authorized to modify this trip")
    return trip


def update_trip(db: Session, trip_id: int, user_id: str, changes: TripUpdate) -> Trip:
    """
    Apply a partial update to a trip and mirror it onto its travel detail.

    Distance and emission are stored exactly as supplied; recalculating them
    after a mode, route or vehicle change is the caller's job.
    """
    trip = _get_owned_trip(db, trip_id, user_id)

    payload = changes.model_dump(exclude_unset=True)
    for field, column in TRIP_UPDATE_FIELDS.items():
        if field in payload:
            value = payload[field]
            setattr(trip, column, getattr(value, "value", value))
    trip.lastUpdatedAt = datetime.utcnow()

    travel_detail = db.query(TravelDetail).filter(TravelDetail.tripId == trip.id).first()
    if travel_detail is None:
        logger.warning(f"Trip {trip.id} has no travel detail to update")
    else:
        for column in MIRRORED_FIELDS:
            setattr(travel_detail, column, getattr(trip, column))

    _commit_pair(db, "update", trip.id)
    db.refresh(trip)
    logger.info(f"Trip {trip.id} updated: {sorted(payload)}")
    return trip


def delete_trip(db: Session, trip_id: int, user_id: str) -> Dict[str, Any]:
    """Delete a trip together with its travel detail."""
    trip = _get_owned_trip(db, trip_id, user_id)

    travel_detail = db.query(TravelDetail).filter(TravelDetail.tripId == trip.id).first()
    if travel_detail is None:
        logger.warning(f"Trip {trip.id} has no travel detail to delete")
    else:
        db.delete(travel_detail)
    db.delete(trip)

    _commit_pair(db, "delete", trip_id)
    logger.info(f"Trip {trip_id} deleted for user {user_id}")
    return {"message": "Trip deleted successfully", "tripId": trip_id}


def get_travel_history(db: Session, user_id: str) -> List[HistoryEntry]:
    """Travel details of a user, newest first, with vehicle and trip display data."""
    rows = db.query(TravelDetail, Vehicle, Trip)\
        .outerjoin(Vehicle, Vehicle.id == TravelDetail.vehicleId)\
        .outerjoin(Trip, Trip.id == TravelDetail.tripId)\
        .filter(TravelDetail.userId == user_id)\
        .order_by(TravelDetail.date.desc(), TravelDetail.id.desc())\
        .all()

    history = []
    for travel_detail, vehicle, trip in rows:
        history.append(HistoryEntry(
            **TravelDetailResponse.model_validate(travel_detail).model_dump(),
            vehicle=VehicleSnapshot.model_validate(vehicle) if vehicle is not None else None,
            trip=TripSnapshot.model_validate(trip) if trip is not None else None,
        ))
    return history
