"""
Access to the emission factor reference table.

The engine only reads through ``find_factor`` / ``find_category_factor``.
Loading and upserting are used by the seeding script, which is the only writer.
"""

from typing import Dict, Iterable, List, Optional, Tuple
import logging

import pandas as pd
from sqlalchemy.orm import Session

from ecotrack.core.transport import (
    FactorKey,
    KNOWN_ENGINE_SIZES,
    KNOWN_FUEL_TYPES,
    VehicleCategory,
    normalize,
)
from ecotrack.models.emission import EmissionFactor

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = [
    "vehicleCategory",
    "fuelType",
    "engineSize",
    "emissionFactorGramsPerKm",
    "source",
]
KEY_COLUMNS = ["vehicleCategory", "fuelType", "engineSize"]


def find_factor(db: Session, key: FactorKey) -> Optional[EmissionFactor]:
    """Exact match on the (category, fuel type, engine size) triple."""
    return db.query(EmissionFactor).filter(
        EmissionFactor.vehicleCategory == key.category,
        EmissionFactor.fuelType == key.fuel_type,
        EmissionFactor.engineSize == key.engine_size,
    ).first()


def find_category_factor(db: Session, category: str) -> Optional[EmissionFactor]:
    """Representative row of a category, used for scheduled public transport."""
    return db.query(EmissionFactor)\
        .filter(EmissionFactor.vehicleCategory == normalize(category))\
        .order_by(EmissionFactor.id)\
        .first()


def normalize_factor_frame(df: pd.DataFrame) -> pd.DataFrame:
    """
    Validate and normalize a frame of emission factor rows.

    Key columns are lowercased and trimmed. Raises ValueError naming the
    offending rows when a column is missing, a category, fuel type or engine
    size is unknown, a factor is negative or not numeric, a source is blank,
    or the same key appears more than once.
    """
    df = df.copy()
    df.columns = df.columns.str.strip()

    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Emission factor data is missing columns: {missing}")

    df = df[REQUIRED_COLUMNS].copy()
    for column in KEY_COLUMNS:
        df[column] = df[column].fillna("").astype(str).str.strip().str.lower()
    df["source"] = df["source"].fillna("").astype(str).str.strip()
    df["emissionFactorGramsPerKm"] = pd.to_numeric(df["emissionFactorGramsPerKm"], errors="coerce")

    known_categories = {c.value for c in VehicleCategory}
    checks = [
        (~df["vehicleCategory"].isin(known_categories), "unknown vehicle category"),
        (~df["fuelType"].isin(KNOWN_FUEL_TYPES), "unknown fuel type"),
        (~df["engineSize"].isin(KNOWN_ENGINE_SIZES), "unknown engine size"),
        (df["emissionFactorGramsPerKm"].isna(), "non-numeric emission factor"),
        (df["emissionFactorGramsPerKm"] < 0, "negative emission factor"),
        (df["source"] == "", "missing source"),
        (df.duplicated(subset=KEY_COLUMNS, keep=False), "duplicate key"),
    ]
    for mask, reason in checks:
        if mask.any():
            bad_rows = df.loc[mask, KEY_COLUMNS].to_dict(orient="records")
            raise ValueError(f"Invalid emission factor rows ({reason}): {bad_rows}")

    return df.reset_index(drop=True)


def load_emission_factor_frame(file_path: str) -> pd.DataFrame:
    """Read a CSV of emission factors and return the normalized frame."""
    # "na" is a real key value here, not a missing marker
    df_raw = pd.read_csv(file_path, keep_default_na=False)
    logger.info(f"Loaded {len(df_raw)} emission factor rows from {file_path}")
    return normalize_factor_frame(df_raw)


def frame_to_records(df: pd.DataFrame) -> List[Dict]:
    records = df.to_dict(orient="records")
    for record in records:
        record["emissionFactorGramsPerKm"] = float(record["emissionFactorGramsPerKm"])
    return records


def upsert_emission_factors(db: Session, records: Iterable[Dict]) -> Tuple[int, int]:
    """
    Insert new rows and update the factor and source of existing keys.
    Runs in one transaction and returns (inserted, updated).
    """
    inserted = updated = 0
    try:
        for record in records:
            key = FactorKey.build(record["vehicleCategory"], record["fuelType"], record["engineSize"])
            existing = find_factor(db, key)
            if existing is None:
                db.add(EmissionFactor(
                    vehicleCategory=key.category,
                    fuelType=key.fuel_type,
                    engineSize=key.engine_size,
                    emissionFactorGramsPerKm=record["emissionFactorGramsPerKm"],
                    source=record["source"],
                ))
                # Keeps find_factor aware of rows added earlier in this batch
                db.flush()
                inserted += 1
            else:
                existing.emissionFactorGramsPerKm = record["emissionFactorGramsPerKm"]
                existing.source = record["source"]
                updated += 1
            logger.debug(f"Upserted {key.category}/{key.fuel_type}/{key.engine_size}")
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(f"Emission factors upserted: {inserted} inserted, {updated} updated")
    return inserted, updated


def replace_emission_factors(db: Session, records: Iterable[Dict]) -> int:
    """Clear the table and load ``records`` as the new source of truth."""
    try:
        db.query(EmissionFactor).delete()
        count = 0
        for record in records:
            key = FactorKey.build(record["vehicleCategory"], record["fuelType"], record["engineSize"])
            db.add(EmissionFactor(
                vehicleCategory=key.category,
                fuelType=key.fuel_type,
                engineSize=key.engine_size,
                emissionFactorGramsPerKm=record["emissionFactorGramsPerKm"],
                source=record["source"],
            ))
            count += 1
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(f"Emission factor table replaced with {count} rows")
    return count
