from sqlalchemy import Column, Float, String, UniqueConstraint

from ecotrack.db.session import Base
from ecotrack.db.base_model import BaseModel

class EmissionFactor(Base, BaseModel):
    """
    Reference emission factors in grams of CO2 per km.
    Seeded out-of-band by scripts/seed_emission_factors.py; the API only reads it.
    Key columns are stored lowercase and trimmed.
    """
    __tablename__ = "emission_factors"

    vehicleCategory = Column(String, nullable=False, index=True)  # car, bus, train, motorcycle, bicycle, walking
    fuelType = Column(String, nullable=False)  # petrol, diesel, hybrid, electric, human, na
    engineSize = Column(String, nullable=False)  # small, medium, large, average, na
    emissionFactorGramsPerKm = Column(Float, nullable=False)
    source = Column(String, nullable=False)

    __table_args__ = (
        UniqueConstraint("vehicleCategory", "fuelType", "engineSize", name="uq_emission_factor_key"),
    )

    def __repr__(self):
        return f"<EmissionFactor {self.vehicleCategory}/{self.fuelType}/{self.engineSize}>"
