from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import func, text

from ecotrack.db.session import get_db
from ecotrack.models.emission import EmissionFactor

router = APIRouter()

@router.get("")
def health_check(db: Session = Depends(get_db)):
    """
    Report database reachability and whether emission factors are loaded.

    Calculations fail closed without reference data, so an empty factor table
    marks the service as degraded rather than healthy.
    """
    try:
        db.execute(text("SELECT 1"))
        factor_count = db.query(func.count(EmissionFactor.id)).scalar()
    except SQLAlchemyError as e:
        return {
            "status": "unhealthy",
            "database": "offline",
            "database_error": str(e),
            "emissionFactors": None,
        }

    return {
        "status": "healthy" if factor_count else "degraded",
        "database": "online",
        "emissionFactors": factor_count,
    }
