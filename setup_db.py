"""
Setup script for initializing the EcoTrack database tables.
Existing tables are left untouched; the users table belongs to the auth service.
"""

import logging
from ecotrack.db.init_db import init_db

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

def setup_database():
    """Initialize database tables for the EcoTrack API."""
    logger.info("Creating EcoTrack database tables...")
    try:
        init_db()
        logger.info("Database tables created successfully!")
    except Exception as e:
        logger.error(f"Error creating database tables: {e}")
        raise

if __name__ == "__main__":
    setup_database()
