from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ecotrack.core.security import TokenData, get_current_user
from ecotrack.db.session import get_db
from ecotrack.schemas.vehicle import (
    VehicleCreate,
    VehicleDeleteResponse,
    VehicleResponse,
    VehicleUpdate,
)
from ecotrack.services import vehicle_service

router = APIRouter()

@router.post("/create", response_model=VehicleResponse, status_code=status.HTTP_201_CREATED)
def create_vehicle(
    vehicle_data: VehicleCreate,
    current_user: TokenData = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> VehicleResponse:
    """Register a vehicle for the authenticated user."""
    return vehicle_service.create_vehicle(db, current_user.user_id, vehicle_data)

@router.get("/get/all", response_model=List[VehicleResponse])
def list_vehicles(
    current_user: TokenData = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> List[VehicleResponse]:
    return vehicle_service.list_vehicles(db, current_user.user_id)

@router.get("/get/{identifier}", response_model=List[VehicleResponse])
def get_vehicles(
    identifier: str,
    current_user: TokenData = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> List[VehicleResponse]:
    """Get the user's vehicles matching an id or a vehicle name."""
    return vehicle_service.get_vehicles(db, current_user.user_id, identifier)

@router.put("/update/{vehicle_id}", response_model=VehicleResponse)
def update_vehicle(
    vehicle_id: int,
    changes: VehicleUpdate,
    current_user: TokenData = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> VehicleResponse:
    return vehicle_service.update_vehicle(db, current_user.user_id, vehicle_id, changes)

@router.delete("/delete/{vehicle_id}", response_model=VehicleDeleteResponse)
def delete_vehicle(
    vehicle_id: int,
    current_user: TokenData = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> VehicleDeleteResponse:
    """Delete a vehicle. Trips logged with it are kept."""
    vehicle_service.delete_vehicle(db, current_user.user_id, vehicle_id)
    return VehicleDeleteResponse(message="Vehicle deleted successfully", vehicleId=vehicle_id)
