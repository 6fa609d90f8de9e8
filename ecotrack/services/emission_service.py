"""
Emission calculation engine.

Resolves the reference emission factor for a transport mode and computes the
total emission of a trip. Lookups fail closed: when no stored row matches, an
error is raised instead of substituting a default, so every number returned
can be traced to a provenanced reference row.
"""

from typing import Any, Callable, Dict, Optional
import logging
import math

from sqlalchemy.orm import Session

from ecotrack.core.exceptions import (
    FactorNotFound,
    IncompleteVehicleData,
    InvalidInput,
    MissingVehicle,
    UnsupportedMode,
    VehicleNotFound,
)
from ecotrack.core.transport import (
    CATEGORY_STRATEGIES,
    HUMAN_FUEL,
    MISSING_ENGINE_SIZES,
    NOT_APPLICABLE,
    FactorKey,
    LookupStrategy,
    VehicleCategory,
    normalize,
    resolve_category,
)
from ecotrack.models.emission import EmissionFactor
from ecotrack.models.vehicle import Vehicle
from ecotrack.schemas.emission import EmissionFactorValue, EmissionResult
from ecotrack.services.emission_factors import find_category_factor, find_factor

logger = logging.getLogger(__name__)

EMISSION_FACTOR_UNIT = "gCO2/km"


def _parse_distance(distance_km: Any) -> float:
    if distance_km is None or isinstance(distance_km, bool):
        raise InvalidInput("Missing required parameters: mode, distance")
    try:
        distance = float(distance_km)
    except (TypeError, ValueError):
        raise InvalidInput(f"Invalid distance: {distance_km!r}")
    if not math.isfinite(distance) or distance < 0:
        raise InvalidInput(f"Invalid distance: {distance_km!r}")
    return distance


def _parse_vehicle_id(vehicle_id: Any) -> Optional[int]:
    if vehicle_id is None or vehicle_id == "":
        return None
    if isinstance(vehicle_id, bool):
        raise InvalidInput(f"Invalid vehicle id: {vehicle_id!r}")
    if isinstance(vehicle_id, int):
        return vehicle_id
    if isinstance(vehicle_id, str) and vehicle_id.strip().isdigit():
        return int(vehicle_id.strip())
    raise InvalidInput(f"Invalid vehicle id: {vehicle_id!r}")


def _human_powered_factor(
    db: Session, category: VehicleCategory, vehicle_id: Optional[int]
) -> EmissionFactor:
    # Zero-emission modes still need a stored row so the source is attributable
    key = FactorKey.build(category, HUMAN_FUEL, NOT_APPLICABLE)
    factor = find_factor(db, key)
    if factor is None:
        logger.warning(f"Emission factor lookup failed: {key}")
        raise FactorNotFound(f"No emission factor found for mode: {category.value}")
    return factor


def _personal_vehicle_factor(
    db: Session, category: VehicleCategory, vehicle_id: Optional[int]
) -> EmissionFactor:
    if not vehicle_id:
        raise MissingVehicle(
            f"Vehicle details required for {category.value} emission calculation"
        )

    vehicle = db.query(Vehicle).filter(Vehicle.id == vehicle_id).first()
    if vehicle is None:
        raise VehicleNotFound(f"Vehicle {vehicle_id} not found")

    engine_size = normalize(vehicle.vehicleEngineSize)
    if engine_size in MISSING_ENGINE_SIZES:
        # Legacy records without an engine size must be fixed by the owner
        raise IncompleteVehicleData(
            "Vehicle engine size is missing. Please update your vehicle details."
        )

    key = FactorKey.build(category, vehicle.fuelType, engine_size)
    logger.debug(f"Emission factor query: {key}")
    factor = find_factor(db, key)
    if factor is None:
        logger.warning(f"Emission factor lookup failed: {key}")
        raise FactorNotFound(
            f"Sustainability data missing for {key.category} "
            f"(Fuel: {key.fuel_type}, Engine: {key.engine_size}). "
            "Please check your vehicle details."
        )
    return factor


def _public_transport_factor(
    db: Session, category: VehicleCategory, vehicle_id: Optional[int]
) -> EmissionFactor:
    # The dataset holds one representative row per scheduled mode
    factor = find_category_factor(db, category.value)
    if factor is None:
        logger.warning(f"Emission factor lookup failed for category {category.value}")
        raise FactorNotFound(f"Standard emission data missing for {category.value}.")
    return factor


FactorResolver = Callable[[Session, VehicleCategory, Optional[int]], EmissionFactor]

STRATEGY_RESOLVERS: Dict[LookupStrategy, FactorResolver] = {
    LookupStrategy.HUMAN_POWERED: _human_powered_factor,
    LookupStrategy.PERSONAL_VEHICLE: _personal_vehicle_factor,
    LookupStrategy.PUBLIC_TRANSPORT: _public_transport_factor,
}


def resolve_emission_factor(
    db: Session, mode: str, vehicle_id: Optional[int] = None
) -> EmissionFactor:
    """Find the reference row for ``mode``, or raise a calculation error."""
    category = resolve_category(mode)
    if category is None:
        raise UnsupportedMode(f"Emission factor lookup failed for {normalize(mode)}")

    resolver = STRATEGY_RESOLVERS[CATEGORY_STRATEGIES[category]]
    return resolver(db, category, vehicle_id)


def calculate_emission(
    db: Session,
    mode: Any,
    distance_km: Any,
    vehicle_id: Any = None,
) -> EmissionResult:
    """
    Compute the CO2 emission of travelling ``distance_km`` with ``mode``.

    Args:
        db: Database session used for vehicle and factor lookups.
        mode: Transport mode, matched case-insensitively ('Car', 'motorbike', ...).
        distance_km: Distance in km; numeric strings are accepted.
        vehicle_id: The user's vehicle, required for car and motorcycle. Numeric
            strings are accepted.

    Returns:
        EmissionResult with the factor used, its source, and the total in kg
        rounded to 2 decimals.

    Raises:
        EmissionCalculationError subclasses; never returns a guessed value.
    """
    if mode is not None and not isinstance(mode, str):
        raise InvalidInput(f"Invalid mode: {mode!r}")
    if not normalize(mode):
        raise InvalidInput("Missing required parameters: mode, distance")
    distance = _parse_distance(distance_km)

    factor = resolve_emission_factor(db, mode, _parse_vehicle_id(vehicle_id))

    total_emission = (distance * factor.emissionFactorGramsPerKm) / 1000
    result = EmissionResult(
        transportMode=mode,
        distanceKm=distance,
        emissionFactor=EmissionFactorValue(
            value=factor.emissionFactorGramsPerKm,
            unit=EMISSION_FACTOR_UNIT,
        ),
        totalEmissionKg=round(total_emission, 2),
        source=factor.source,
    )
    logger.info(
        f"Calculated {result.totalEmissionKg} kg CO2 for {distance} km by {normalize(mode)}"
    )
    return result
