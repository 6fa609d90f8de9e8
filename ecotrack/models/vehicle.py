"""
SQLAlchemy model for the vehicles table.
"""

from sqlalchemy import Column, Date, Float, String

from ecotrack.db.session import Base
from ecotrack.db.base_model import BaseModel

class Vehicle(Base, BaseModel):
    """
    A vehicle profile owned by one user.
    Supplies fuel type and engine size to the emission engine.
    """
    __tablename__ = "vehicles"

    userId = Column(String, nullable=False, index=True)
    vehicleName = Column(String, nullable=False)
    vehicleModel = Column(String, nullable=False)
    vehicleType = Column(String, nullable=False)
    fuelType = Column(String, nullable=False)
    vehicleManufactureDate = Column(Date, nullable=True)
    vehicleEmissionRating = Column(Float, nullable=True)  # Legacy, informational only
    vehicleEngineSize = Column(String, nullable=True)

    def __repr__(self):
        return f"<Vehicle {self.vehicleName} ({self.vehicleType}) of user {self.userId}>"
