from typing import Any, Optional
from pydantic import BaseModel, Field

class EmissionCalculationRequest(BaseModel):
    """
    Body of POST /api/emissions/calculate.
    Values are checked by the calculation engine itself so that every
    failure surfaces as a 400 with a readable message.
    """
    mode: Optional[Any] = Field(None, description="Transport mode, e.g. 'car', 'Bus', 'motorbike'")
    distance: Optional[Any] = Field(None, description="Distance travelled in km")
    vehicleDetails: Optional[Any] = Field(
        None, description="ID of the user's vehicle; required for car and motorcycle"
    )

class EmissionFactorValue(BaseModel):
    value: float = Field(..., description="Emission factor")
    unit: str = Field("gCO2/km", description="Unit of the emission factor")

class EmissionResult(BaseModel):
    """Outcome of one emission calculation, traceable to its reference row."""
    transportMode: str = Field(..., description="Mode as supplied by the caller")
    distanceKm: float = Field(..., description="Parsed distance in km")
    emissionFactor: EmissionFactorValue
    totalEmissionKg: float = Field(..., description="Total emission in kg, rounded to 2 decimals")
    source: str = Field(..., description="Provenance of the emission factor")

    model_config = {
        "json_schema_extra": {
            "example": {
                "transportMode": "car",
                "distanceKm": 50,
                "emissionFactor": {"value": 120, "unit": "gCO2/km"},
                "totalEmissionKg": 6.0,
                "source": "DEFRA 2023",
            }
        }
    }
