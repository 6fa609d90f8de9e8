from pydantic import BaseModel, Field

class TripSummary(BaseModel):
    totalDistance: float
    totalEmission: float
    totalTrips: int
    avgEmission: float

class ModeBreakdown(BaseModel):
    mode: str
    totalEmission: float
    count: int

class TrendPoint(BaseModel):
    day: str
    totalEmission: float
    distance: float

class VehicleUsage(BaseModel):
    vehicleId: int
    vehicleName: str
    vehicleModel: str
    trips: int
    distance: float
    emission: float

class CommunityImpact(BaseModel):
    savedKg: float = Field(..., description="CO2 saved against an all-car baseline, in kg")
    percentile: int = Field(..., ge=0, le=100, description="Share of users ranked at or below this user")
    tier: str
    message: str
