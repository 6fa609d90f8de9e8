"""
Events emitted after a trip is persisted, and their handlers.

Handlers run as FastAPI background tasks, after the response is sent. Each
one owns its session and its error boundary: a failing handler is logged and
never reaches the request that emitted the event.
"""

from dataclasses import dataclass
import logging

from sqlalchemy.orm import sessionmaker

from ecotrack.services.user_grade_service import update_user_grade

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TripCreated:
    user_id: str
    trip_id: int
    mode: str
    distance_km: float


def handle_trip_created(event: TripCreated, session_factory: sessionmaker) -> None:
    """Award gamification points for a newly created trip."""
    db = session_factory()
    try:
        update_user_grade(db, event.user_id, event.mode, event.distance_km)
    except Exception:
        db.rollback()
        logger.exception(f"Failed to update user grade for trip {event.trip_id}")
    finally:
        db.close()
