import pytest

from ecotrack.core.exceptions import (
    EmissionCalculationError,
    FactorNotFound,
    IncompleteVehicleData,
    InvalidInput,
    MissingVehicle,
    UnsupportedMode,
    VehicleNotFound,
)
from ecotrack.core.transport import (
    CATEGORY_STRATEGIES,
    FactorKey,
    VehicleCategory,
    resolve_category,
)
from ecotrack.services.emission_service import (
    STRATEGY_RESOLVERS,
    calculate_emission,
    resolve_emission_factor,
)


# ---------------------------------------------------------------------------
# Transport vocabulary
# ---------------------------------------------------------------------------

class TestTransportVocabulary:

    def test_every_category_has_a_resolver(self):
        """Each category maps to a strategy that has a resolver."""
        for category in VehicleCategory:
            assert CATEGORY_STRATEGIES[category] in STRATEGY_RESOLVERS

    def test_resolve_category_is_case_insensitive(self):
        assert resolve_category("  CAR ") is VehicleCategory.CAR
        assert resolve_category("Walking") is VehicleCategory.WALKING

    def test_motorbike_is_a_motorcycle(self):
        assert resolve_category("motorbike") is VehicleCategory.MOTORCYCLE

    def test_unknown_mode_resolves_to_none(self):
        assert resolve_category("plane") is None
        assert resolve_category(None) is None

    def test_factor_key_is_canonical(self):
        key = FactorKey.build(VehicleCategory.CAR, " Petrol", "SMALL ")
        assert key == FactorKey("car", "petrol", "small")


# ---------------------------------------------------------------------------
# Personal vehicles
# ---------------------------------------------------------------------------

class TestPersonalVehicle:

    def test_car_scenario(self, db, factors, vehicle):
        """50 km in a small petrol car at 120 g/km emits 6 kg."""
        result = calculate_emission(db, "car", 50, vehicle.id)

        assert result.totalEmissionKg == 6.0
        assert result.emissionFactor.value == 120.0
        assert result.emissionFactor.unit == "gCO2/km"
        assert result.source == "DEFRA 2023"
        assert result.transportMode == "car"
        assert result.distanceKm == 50.0

    def test_vehicle_values_are_matched_case_insensitively(self, db, factors, make_vehicle):
        diesel = make_vehicle(fuel="DIESEL", engine="Medium")
        result = calculate_emission(db, "Car", 10, diesel.id)
        assert result.totalEmissionKg == 1.65

    def test_motorbike_and_motorcycle_share_the_factor(self, db, factors, vehicle):
        motorcycle = calculate_emission(db, "motorcycle", 25, vehicle.id)
        motorbike = calculate_emission(db, "motorbike", 25, vehicle.id)

        assert motorcycle.totalEmissionKg == motorbike.totalEmissionKg == 2.0
        assert motorcycle.source == motorbike.source == "DEFRA 2023 Motorbike"

    def test_missing_vehicle_id(self, db, factors):
        with pytest.raises(MissingVehicle, match="Vehicle details required for car"):
            calculate_emission(db, "car", 10)

    def test_unknown_vehicle_id(self, db, factors):
        with pytest.raises(VehicleNotFound, match="Vehicle 999 not found"):
            calculate_emission(db, "car", 10, 999)

    @pytest.mark.parametrize("engine", ["N/A", "", None])
    def test_missing_engine_size_fails_even_with_other_rows(self, db, factors, make_factor, make_vehicle, engine):
        """A vehicle without engine size never falls back to another row."""
        make_factor("car", "petrol", "average", 170.0)
        make_factor("car", "petrol", "na", 150.0)
        legacy = make_vehicle(engine=engine)

        with pytest.raises(IncompleteVehicleData, match="engine size is missing"):
            calculate_emission(db, "car", 10, legacy.id)

    def test_no_exact_factor_row(self, db, factors, make_vehicle):
        hybrid = make_vehicle(fuel="Hybrid", engine="Large")

        with pytest.raises(FactorNotFound) as exc_info:
            calculate_emission(db, "car", 10, hybrid.id)

        message = exc_info.value.message
        assert "car" in message
        assert "hybrid" in message
        assert "large" in message


# ---------------------------------------------------------------------------
# Human powered and public transport
# ---------------------------------------------------------------------------

class TestOtherStrategies:

    @pytest.mark.parametrize("mode", ["walking", "bicycle", "Walking"])
    def test_human_powered_modes_use_their_row(self, db, factors, mode):
        result = calculate_emission(db, mode, 12)
        assert result.totalEmissionKg == 0.0
        assert result.source == "Zero direct emissions"

    def test_human_powered_ignores_vehicle(self, db, factors):
        result = calculate_emission(db, "bicycle", 5, 12345)
        assert result.totalEmissionKg == 0.0

    def test_walking_without_row_fails(self, db):
        """Zero-emission modes never return 0 without a reference row."""
        with pytest.raises(FactorNotFound, match="walking"):
            calculate_emission(db, "walking", 3)

    def test_bus_uses_category_row(self, db, factors):
        result = calculate_emission(db, "bus", 10)
        assert result.totalEmissionKg == 1.0
        assert result.source == "DEFRA 2023 Bus"

    def test_train_uses_category_row(self, db, factors):
        result = calculate_emission(db, "TRAIN", 100)
        assert result.totalEmissionKg == 3.5

    def test_bus_without_row_fails(self, db):
        with pytest.raises(FactorNotFound) as exc_info:
            calculate_emission(db, "bus", 10)
        assert "bus" in exc_info.value.message

    def test_unsupported_mode(self, db, factors):
        with pytest.raises(UnsupportedMode, match="plane"):
            resolve_emission_factor(db, "Plane")


# ---------------------------------------------------------------------------
# Input validation
# ---------------------------------------------------------------------------

class TestInputValidation:

    @pytest.mark.parametrize("mode", [None, "", "   "])
    def test_missing_mode(self, db, factors, mode):
        with pytest.raises(InvalidInput):
            calculate_emission(db, mode, 10)

    @pytest.mark.parametrize("distance", [None, "abc", -1, float("nan"), float("inf"), True])
    def test_invalid_distance(self, db, factors, distance):
        with pytest.raises(InvalidInput):
            calculate_emission(db, "bus", distance)

    def test_numeric_string_distance_is_accepted(self, db, factors):
        result = calculate_emission(db, "bus", "20")
        assert result.distanceKm == 20.0
        assert result.totalEmissionKg == 2.0

    def test_zero_distance(self, db, factors):
        assert calculate_emission(db, "bus", 0).totalEmissionKg == 0.0

    @pytest.mark.parametrize("distance,expected", [(1, 0.1), (33, 3.3), (1234.5, 123.45)])
    def test_total_is_distance_times_factor(self, db, factors, distance, expected):
        result = calculate_emission(db, "bus", distance)
        assert result.totalEmissionKg == round(distance * 100.0 / 1000, 2) == expected

    def test_all_errors_share_a_base_class(self):
        for error in (InvalidInput, MissingVehicle, VehicleNotFound,
                      IncompleteVehicleData, FactorNotFound, UnsupportedMode):
            assert issubclass(error, EmissionCalculationError)
            assert error.status_code == 400
