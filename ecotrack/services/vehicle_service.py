"""
Per-user vehicle profiles. Every query is scoped to the owning user.
"""

from typing import List
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ecotrack.core.exceptions import NotFound
from ecotrack.models.vehicle import Vehicle
from ecotrack.schemas.vehicle import VehicleCreate, VehicleUpdate

logger = logging.getLogger(__name__)


def _column_value(value):
    # Enum members are stored by their display value
    return getattr(value, "value", value)


def create_vehicle(db: Session, user_id: str, data: VehicleCreate) -> Vehicle:
    fields = {name: _column_value(value) for name, value in data.model_dump().items()}
    vehicle = Vehicle(userId=user_id, **fields)

    db.add(vehicle)
    db.commit()
    db.refresh(vehicle)
    logger.info(f"Vehicle {vehicle.id} created for user {user_id}")
    return vehicle


def list_vehicles(db: Session, user_id: str) -> List[Vehicle]:
    vehicles = db.query(Vehicle).filter(Vehicle.userId == user_id).order_by(Vehicle.id).all()
    if not vehicles:
        raise NotFound("No vehicles found for this user")
    return vehicles


def get_vehicles(db: Session, user_id: str, identifier: str) -> List[Vehicle]:
    """Look vehicles up by numeric id, or by name otherwise."""
    query = db.query(Vehicle).filter(Vehicle.userId == user_id)
    if identifier.isdigit():
        query = query.filter(Vehicle.id == int(identifier))
    else:
        query = query.filter(Vehicle.vehicleName == identifier)

    vehicles = query.order_by(Vehicle.id).all()
    if not vehicles:
        raise NotFound(f"No vehicle '{identifier}' found for this user")
    return vehicles


def _get_owned_vehicle(db: Session, user_id: str, vehicle_id: int) -> Vehicle:
    vehicle = db.query(Vehicle).filter(
        Vehicle.id == vehicle_id,
        Vehicle.userId == user_id,
    ).first()
    if vehicle is None:
        raise NotFound(f"Vehicle with id {vehicle_id} not found")
    return vehicle


def update_vehicle(db: Session, user_id: str, vehicle_id: int, data: VehicleUpdate) -> Vehicle:
    vehicle = _get_owned_vehicle(db, user_id, vehicle_id)

    changes = data.model_dump(exclude_unset=True)
    for field, value in changes.items():
        setattr(vehicle, field, _column_value(value))

    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error updating vehicle {vehicle_id}: {e}")
        raise
    db.refresh(vehicle)
    logger.info(f"Vehicle {vehicle_id} updated: {sorted(changes)}")
    return vehicle


def delete_vehicle(db: Session, user_id: str, vehicle_id: int) -> None:
    """Delete a vehicle. Trips that used it keep their dangling reference."""
    vehicle = _get_owned_vehicle(db, user_id, vehicle_id)
    db.delete(vehicle)
    db.commit()
    logger.info(f"Vehicle {vehicle_id} deleted for user {user_id}")
