from typing import Optional
from datetime import date
from pydantic import BaseModel, Field, field_validator

from ecotrack.core.transport import EngineSize, FuelType, VehicleType

class VehicleBase(BaseModel):
    """Base schema for vehicle profiles."""
    vehicleName: str = Field(..., min_length=2, max_length=100, description="Name the user gave the vehicle")
    vehicleModel: str = Field(..., min_length=1, max_length=100, description="Vehicle model, e.g. 'Golf'")
    vehicleType: VehicleType = Field(..., description="Kind of vehicle")
    fuelType: FuelType = Field(..., description="Fuel used by the vehicle")
    vehicleManufactureDate: date = Field(..., description="Manufacture date")
    vehicleEmissionRating: float = Field(..., ge=0, le=1000, description="Legacy emission rating")
    vehicleEngineSize: EngineSize = Field(..., description="Engine size class used for factor lookup")

    @field_validator("vehicleManufactureDate")
    @classmethod
    def not_in_future(cls, v: date) -> date:
        if v > date.today():
            raise ValueError("Manufacture date cannot be in the future")
        return v

class VehicleCreate(VehicleBase):
    pass

class VehicleUpdate(BaseModel):
    """Partial update of a vehicle; only supplied fields change."""
    vehicleName: Optional[str] = Field(None, min_length=2, max_length=100)
    vehicleModel: Optional[str] = Field(None, min_length=1, max_length=100)
    vehicleType: Optional[VehicleType] = None
    fuelType: Optional[FuelType] = None
    vehicleManufactureDate: Optional[date] = None
    vehicleEmissionRating: Optional[float] = Field(None, ge=0, le=1000)
    vehicleEngineSize: Optional[EngineSize] = None

    @field_validator("vehicleName", "vehicleModel", "vehicleType", "fuelType", "vehicleEngineSize")
    @classmethod
    def not_null(cls, v):
        # The emission engine reads fuel type and engine size; they are never cleared
        if v is None:
            raise ValueError("Field cannot be null")
        return v

    @field_validator("vehicleManufactureDate")
    @classmethod
    def not_in_future(cls, v: Optional[date]) -> Optional[date]:
        if v is not None and v > date.today():
            raise ValueError("Manufacture date cannot be in the future")
        return v

class VehicleResponse(BaseModel):
    id: int
    userId: str
    vehicleName: str
    vehicleModel: str
    vehicleType: str
    fuelType: str
    vehicleManufactureDate: Optional[date] = None
    vehicleEmissionRating: Optional[float] = None
    vehicleEngineSize: Optional[str] = None

    model_config = {"from_attributes": True}

class VehicleDeleteResponse(BaseModel):
    message: str
    vehicleId: int
