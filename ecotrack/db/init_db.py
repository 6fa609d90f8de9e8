import logging
from sqlalchemy.exc import SQLAlchemyError

from ecotrack.db.session import Base, engine
# Registers every model on Base.metadata
import ecotrack.models  # noqa: F401

logger = logging.getLogger(__name__)

def init_db(bind=None):
    """
    Create the EcoTrack tables that do not exist yet.
    The users table belongs to the auth service and is never created here.
    """
    bind = bind or engine
    try:
        tables = [table for table in Base.metadata.sorted_tables if table.name != "users"]
        for table in tables:
            table.create(bind, checkfirst=True)
            logger.info(f"Table {table.name} ready")

        logger.info("EcoTrack tables created successfully")
    except SQLAlchemyError as e:
        logger.error(f"Error creating database tables: {e}")
        raise
