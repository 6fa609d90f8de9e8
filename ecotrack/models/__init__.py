"""
Import all models from their respective modules.
"""

from ecotrack.models.emission import EmissionFactor
from ecotrack.models.vehicle import Vehicle
from ecotrack.models.travel import Trip, TravelDetail
from ecotrack.models.grade import UserGrade
from ecotrack.models.user import User

# Export all models
__all__ = [
    "EmissionFactor",
    "Vehicle",
    "Trip",
    "TravelDetail",
    "UserGrade",

    # External reference models
    "User",
]
