from typing import Optional
from pydantic import BaseModel, Field

class UserGradeResponse(BaseModel):
    grade: int = Field(..., description="Cumulative points")
    motivation: str = Field(..., description="Latest motivational message")

class GradeUpdateRequest(BaseModel):
    mode: str = Field(..., min_length=1, description="Transport mode of the trip")
    distance: float = Field(..., ge=0, description="Distance of the trip in km")

class GradeUpdateResponse(UserGradeResponse):
    pointsEarned: int

class LeaderboardEntry(BaseModel):
    rank: int
    userId: str
    name: Optional[str] = None
    userName: Optional[str] = None
    grade: int
