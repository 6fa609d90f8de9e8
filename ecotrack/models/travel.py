from datetime import datetime
from sqlalchemy import Column, DateTime, Float, ForeignKey, Index, Integer, String
from sqlalchemy.orm import relationship

from ecotrack.db.session import Base
from ecotrack.db.base_model import BaseModel

class Trip(Base, BaseModel):
    """
    Canonical record of one journey.
    Each trip owns exactly one TravelDetail projection.
    """
    __tablename__ = "trips"

    userId = Column(String, nullable=False, index=True)
    vehicleId = Column(Integer, nullable=True)  # Reference without constraint
    source = Column(String, nullable=False)
    sourceDisplayName = Column(String, nullable=True)
    destination = Column(String, nullable=False)
    destinationDisplayName = Column(String, nullable=True)
    distanceKm = Column(Float, nullable=False)
    mode = Column(String, nullable=False)
    emissionKg = Column(Float, nullable=False)
    date = Column(DateTime, nullable=False, default=datetime.utcnow)
    lastUpdatedAt = Column(DateTime, nullable=True)

    travel_detail = relationship("TravelDetail", back_populates="trip", uselist=False)

    def __repr__(self):
        return f"<Trip {self.id} {self.source} -> {self.destination} by {self.mode}>"


class TravelDetail(Base, BaseModel):
    """
    Denormalized projection of a Trip used for history queries.
    mode, distanceKm, emissionKg and vehicleId always mirror the owning trip.
    """
    __tablename__ = "travel_details"

    userId = Column(String, nullable=False)
    vehicleId = Column(Integer, nullable=True)  # Reference without constraint
    tripId = Column(Integer, ForeignKey("trips.id"), nullable=False, unique=True)
    date = Column(DateTime, nullable=False, default=datetime.utcnow)
    mode = Column(String, nullable=False)
    distanceKm = Column(Float, nullable=False)
    emissionKg = Column(Float, nullable=False)

    trip = relationship("Trip", back_populates="travel_detail")

    __table_args__ = (
        Index("ix_travel_details_user_date", "userId", "date"),
    )

    def __repr__(self):
        return f"<TravelDetail {self.id} for trip {self.tripId}>"
