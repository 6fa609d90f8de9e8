from typing import Optional
from datetime import datetime, timezone
from pydantic import BaseModel, Field, field_validator

from ecotrack.core.transport import TripMode

def _as_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value

class TravelDataCreate(BaseModel):
    """Schema for logging a new trip. Any client-supplied trip id is ignored."""
    mode: TripMode = Field(..., description="Transport mode used for the trip")
    distance: float = Field(..., gt=0, le=50000, description="Distance travelled in km")
    emission: float = Field(..., ge=0, le=100000, description="Emission of the trip in kg CO2")
    source: str = Field(..., min_length=2, max_length=200, description="Origin of the trip")
    destination: str = Field(..., min_length=2, max_length=200, description="Destination of the trip")
    vehicleId: Optional[int] = Field(None, description="Vehicle used, if any")
    sourceDisplayName: Optional[str] = Field(None, max_length=200)
    destinationDisplayName: Optional[str] = Field(None, max_length=200)
    date: Optional[datetime] = Field(None, description="When the trip happened; defaults to now")

    @field_validator("source", "destination", "sourceDisplayName", "destinationDisplayName", mode="before")
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("date")
    @classmethod
    def date_not_in_future(cls, v: Optional[datetime]) -> Optional[datetime]:
        if v is None:
            return v
        v = _as_naive_utc(v)
        if v > datetime.utcnow():
            raise ValueError("Trip date cannot be in the future")
        return v

class TripUpdate(BaseModel):
    """
    Schema for editing a trip.
    Distance and emission must always be recalculated by the client and sent.
    """
    distance: float = Field(..., gt=0, le=50000, description="Recalculated distance in km")
    emission: float = Field(..., ge=0, le=100000, description="Recalculated emission in kg CO2")
    source: Optional[str] = Field(None, min_length=2, max_length=200)
    sourceDisplayName: Optional[str] = Field(None, max_length=200)
    destination: Optional[str] = Field(None, min_length=2, max_length=200)
    destinationDisplayName: Optional[str] = Field(None, max_length=200)
    mode: Optional[TripMode] = None
    vehicleId: Optional[int] = None

    @field_validator("source", "destination", "sourceDisplayName", "destinationDisplayName", mode="before")
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("source", "destination", "mode")
    @classmethod
    def not_null(cls, v):
        # Omit a field to keep it; null would clear a required column
        if v is None:
            raise ValueError("Field cannot be null")
        return v

class TravelDetailResponse(BaseModel):
    id: int
    userId: str
    vehicleId: Optional[int] = None
    tripId: int
    date: datetime
    mode: str
    distanceKm: float
    emissionKg: float

    model_config = {"from_attributes": True}

class TripResponse(BaseModel):
    id: int
    userId: str
    vehicleId: Optional[int] = None
    source: str
    sourceDisplayName: Optional[str] = None
    destination: str
    destinationDisplayName: Optional[str] = None
    distanceKm: float
    mode: str
    emissionKg: float
    date: datetime
    lastUpdatedAt: Optional[datetime] = None

    model_config = {"from_attributes": True}

class VehicleSnapshot(BaseModel):
    id: int
    vehicleName: str
    vehicleType: str

    model_config = {"from_attributes": True}

class TripSnapshot(BaseModel):
    id: int
    source: str
    destination: str

    model_config = {"from_attributes": True}

class HistoryEntry(TravelDetailResponse):
    """A travel detail joined with display data of its vehicle and trip."""
    vehicle: Optional[VehicleSnapshot] = None
    trip: Optional[TripSnapshot] = None

class TripDeleteResponse(BaseModel):
    message: str
    tripId: int
