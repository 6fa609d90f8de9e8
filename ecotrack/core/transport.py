"""
Transport vocabulary shared by the emission engine, the reference data loader
and the request schemas.

Reference keys are normalized once (lowercase, trimmed) and carried around as
``FactorKey`` values, so seed data and lookups always agree on casing.
"""

from enum import Enum
from typing import Dict, NamedTuple, Optional


def normalize(value: Optional[str]) -> str:
    return value.lower().strip() if value else ""


class VehicleCategory(str, Enum):
    """Categories present in the emission factor table."""
    CAR = "car"
    MOTORCYCLE = "motorcycle"
    BUS = "bus"
    TRAIN = "train"
    WALKING = "walking"
    BICYCLE = "bicycle"


class LookupStrategy(str, Enum):
    HUMAN_POWERED = "human_powered"
    PERSONAL_VEHICLE = "personal_vehicle"
    PUBLIC_TRANSPORT = "public_transport"


# Normalized calculation mode -> category. Anything missing here is unsupported.
MODE_ALIASES: Dict[str, VehicleCategory] = {
    "car": VehicleCategory.CAR,
    "motorcycle": VehicleCategory.MOTORCYCLE,
    "motorbike": VehicleCategory.MOTORCYCLE,
    "bus": VehicleCategory.BUS,
    "train": VehicleCategory.TRAIN,
    "walking": VehicleCategory.WALKING,
    "bicycle": VehicleCategory.BICYCLE,
}

CATEGORY_STRATEGIES: Dict[VehicleCategory, LookupStrategy] = {
    VehicleCategory.WALKING: LookupStrategy.HUMAN_POWERED,
    VehicleCategory.BICYCLE: LookupStrategy.HUMAN_POWERED,
    VehicleCategory.CAR: LookupStrategy.PERSONAL_VEHICLE,
    VehicleCategory.MOTORCYCLE: LookupStrategy.PERSONAL_VEHICLE,
    VehicleCategory.BUS: LookupStrategy.PUBLIC_TRANSPORT,
    VehicleCategory.TRAIN: LookupStrategy.PUBLIC_TRANSPORT,
}

HUMAN_FUEL = "human"
NOT_APPLICABLE = "na"

# Engine size values that mean "unknown" on legacy vehicle records
MISSING_ENGINE_SIZES = {"", "n/a"}

KNOWN_FUEL_TYPES = {"petrol", "diesel", "hybrid", "electric", HUMAN_FUEL, NOT_APPLICABLE}
KNOWN_ENGINE_SIZES = {"small", "medium", "large", "average", NOT_APPLICABLE}


def resolve_category(mode: Optional[str]) -> Optional[VehicleCategory]:
    return MODE_ALIASES.get(normalize(mode))


class FactorKey(NamedTuple):
    """Canonical (category, fuel type, engine size) key of the factor table."""
    category: str
    fuel_type: str
    engine_size: str

    @classmethod
    def build(cls, category, fuel_type, engine_size) -> "FactorKey":
        if isinstance(category, VehicleCategory):
            category = category.value
        return cls(normalize(category), normalize(fuel_type), normalize(engine_size))


# --- Values accepted on trip and vehicle records ---

class TripMode(str, Enum):
    CAR = "Car"
    BUS = "Bus"
    TRAIN = "Train"
    BIKE = "Bike"
    WALK = "Walk"
    CYCLE = "Cycle"
    SCOOTER = "Scooter"


class VehicleType(str, Enum):
    CAR = "Car"
    BIKE = "Bike"
    SCOOTER = "Scooter"
    CYCLE = "Cycle"


class FuelType(str, Enum):
    PETROL = "Petrol"
    DIESEL = "Diesel"
    ELECTRIC = "Electric"
    HYBRID = "Hybrid"
    HUMAN_POWER = "Human Power"


class EngineSize(str, Enum):
    SMALL = "Small"
    MEDIUM = "Medium"
    LARGE = "Large"
    AVERAGE = "Average"
    NOT_AVAILABLE = "N/A"
