from pathlib import Path

import pandas as pd
import pytest

from ecotrack.core.transport import FactorKey
from ecotrack.models import EmissionFactor
from ecotrack.services.emission_factors import (
    find_category_factor,
    find_factor,
    frame_to_records,
    load_emission_factor_frame,
    normalize_factor_frame,
    replace_emission_factors,
    upsert_emission_factors,
)

BUNDLED_FACTORS = Path(__file__).resolve().parent.parent / "data" / "emission_factors.csv"
CSV_HEADER = "vehicleCategory,fuelType,engineSize,emissionFactorGramsPerKm,source\n"


def _frame(rows):
    return pd.DataFrame(rows, columns=[
        "vehicleCategory", "fuelType", "engineSize", "emissionFactorGramsPerKm", "source",
    ])


# ---------------------------------------------------------------------------
# Validation and normalization
# ---------------------------------------------------------------------------

class TestNormalizeFactorFrame:

    def test_keys_are_lowercased_and_trimmed(self):
        df = normalize_factor_frame(_frame([[" Car ", "PETROL", "Small", "120", " DEFRA "]]))

        row = df.iloc[0]
        assert (row.vehicleCategory, row.fuelType, row.engineSize) == ("car", "petrol", "small")
        assert row.emissionFactorGramsPerKm == 120.0
        assert row.source == "DEFRA"

    def test_duplicate_keys_are_rejected(self):
        """Two rows differing only in casing are the same key."""
        df = _frame([
            ["car", "petrol", "small", 120, "A"],
            ["CAR", "Petrol", "small", 125, "B"],
        ])
        with pytest.raises(ValueError, match="duplicate key"):
            normalize_factor_frame(df)

    @pytest.mark.parametrize("row,reason", [
        (["plane", "kerosene", "na", 250, "X"], "unknown vehicle category"),
        (["car", "coal", "small", 120, "X"], "unknown fuel type"),
        (["car", "petrol", "huge", 120, "X"], "unknown engine size"),
        (["car", "petrol", "small", "lots", "X"], "non-numeric emission factor"),
        (["car", "petrol", "small", -1, "X"], "negative emission factor"),
        (["car", "petrol", "small", 120, "  "], "missing source"),
    ])
    def test_invalid_rows_are_rejected(self, row, reason):
        with pytest.raises(ValueError, match=reason):
            normalize_factor_frame(_frame([row]))

    def test_missing_column(self):
        df = pd.DataFrame([["car", "petrol", "small", 120]],
                          columns=["vehicleCategory", "fuelType", "engineSize", "emissionFactorGramsPerKm"])
        with pytest.raises(ValueError, match="missing columns"):
            normalize_factor_frame(df)

    def test_load_csv_keeps_na_as_a_value(self, tmp_path):
        csv_file = tmp_path / "factors.csv"
        csv_file.write_text(CSV_HEADER + "walking,human,na,0,Zero\nbus,diesel,average,96.5,DESNZ\n")

        df = load_emission_factor_frame(str(csv_file))

        assert len(df) == 2
        assert df.iloc[0].engineSize == "na"

    def test_bundled_dataset_is_valid(self):
        df = load_emission_factor_frame(str(BUNDLED_FACTORS))
        assert not df.duplicated(subset=["vehicleCategory", "fuelType", "engineSize"]).any()
        assert {"car", "motorcycle", "bus", "train", "walking", "bicycle"} <= set(df["vehicleCategory"])


# ---------------------------------------------------------------------------
# Persistence
# ---------------------------------------------------------------------------

class TestFactorPersistence:

    def test_upsert_inserts_then_updates(self, db):
        records = frame_to_records(normalize_factor_frame(_frame([
            ["car", "petrol", "small", 120, "DEFRA 2022"],
            ["bus", "diesel", "average", 100, "DEFRA 2022"],
        ])))
        assert upsert_emission_factors(db, records) == (2, 0)

        records[0]["emissionFactorGramsPerKm"] = 118.0
        records[0]["source"] = "DEFRA 2023"
        assert upsert_emission_factors(db, records) == (0, 2)

        factor = find_factor(db, FactorKey.build("car", "petrol", "small"))
        assert factor.emissionFactorGramsPerKm == 118.0
        assert factor.source == "DEFRA 2023"
        assert db.query(EmissionFactor).count() == 2

    def test_replace_clears_old_rows(self, db, factors):
        records = frame_to_records(normalize_factor_frame(_frame([
            ["train", "electric", "average", 30, "Rail 2024"],
        ])))

        assert replace_emission_factors(db, records) == 1
        assert db.query(EmissionFactor).count() == 1
        assert find_category_factor(db, "bus") is None

    def test_find_factor_requires_exact_match(self, db, factors):
        assert find_factor(db, FactorKey.build("car", "petrol", "small")) is not None
        assert find_factor(db, FactorKey.build("car", "petrol", "large")) is None

    def test_find_category_factor_is_case_insensitive(self, db, factors):
        assert find_category_factor(db, "BUS").source == "DEFRA 2023 Bus"
