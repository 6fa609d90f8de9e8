"""
Load the emission factor reference table from a CSV file.

Usage:
    python scripts/seed_emission_factors.py --file data/emission_factors.csv
    python scripts/seed_emission_factors.py --replace

Rows are keyed by (vehicleCategory, fuelType, engineSize). By default existing
keys are updated and new keys inserted; --replace clears the table first.
"""

import argparse
import logging
import os
import sys

project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from ecotrack.core.config import settings
from ecotrack.db.session import SessionLocal
from ecotrack.services.emission_factors import (
    frame_to_records,
    load_emission_factor_frame,
    replace_emission_factors,
    upsert_emission_factors,
)

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def main(args) -> int:
    if not os.path.exists(args.file):
        logger.error(f"Emission factors file not found at: {args.file}")
        return 1

    try:
        df = load_emission_factor_frame(args.file)
    except ValueError as e:
        logger.error(f"Emission factor data rejected: {e}")
        return 1

    records = frame_to_records(df)
    db = SessionLocal()
    try:
        if args.replace:
            count = replace_emission_factors(db, records)
            logger.info(f"Replaced emission factor table with {count} rows")
        else:
            inserted, updated = upsert_emission_factors(db, records)
            logger.info(f"Seeded emission factors: {inserted} inserted, {updated} updated")
    finally:
        db.close()
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed the emission factor reference table.")
    parser.add_argument("--file", type=str, default=settings.EMISSION_FACTORS_FILE,
                        help="CSV with vehicleCategory, fuelType, engineSize, emissionFactorGramsPerKm, source")
    parser.add_argument("--replace", action="store_true",
                        help="Delete all existing factors before loading")
    sys.exit(main(parser.parse_args()))
