"""
Gamification points earned by low-carbon trips.
"""

from typing import Any, Dict, List, Optional
import logging
import random

from sqlalchemy.orm import Session

from ecotrack.models.grade import UserGrade
from ecotrack.models.user import User

logger = logging.getLogger(__name__)

# Points per km; motorized modes earn nothing
MODE_MULTIPLIERS = {
    "walk": 10,
    "bicycle": 10,
    "cycle": 10,
    "bus": 5,
    "train": 5,
    "metro": 5,
    "tram": 5,
    "ev": 3,
    "carpool": 3,
    "car": 0,
    "motorbike": 0,
    "flight": 0,
}

MOTIVATIONS = [
    "You're off to a great start! Keep it up!",
    "You're doing great! Keep it up!",
    "Your effort is paying off! Keep it up!",
    "Great Job..!",
    "Keep it up..!",
    "Every sustainable trip is a step toward a cleaner planet.",
    "Small travel choices create big environmental impact.",
    "Choose smarter routes, not just faster ones.",
    "Your journey matters, for you and the planet.",
    "Reducing emissions starts with everyday decisions.",
    "Travel light on the Earth, travel strong in impact.",
    "Sustainability begins the moment you move.",
    "One eco-friendly trip can inspire many more.",
    "Cleaner transport today means healthier cities tomorrow.",
    "Every kilometer saved is a win for the environment.",
    "Your travel choices shape the world you live in.",
    "Sustainable journeys lead to sustainable futures.",
    "Think beyond distance, think about impact.",
    "The greenest route is often the smartest one.",
    "Better transport choices build a better planet.",
    "Every low-carbon trip counts.",
    "Travel responsibly, inspire change silently.",
    "You're not just moving, you're making a difference.",
    "Progress begins with conscious travel.",
    "Choose sustainability, one trip at a time.",
]

DEFAULT_MOTIVATION = "Start your journey!"


def calculate_trip_points(mode: str, distance: float) -> int:
    multiplier = MODE_MULTIPLIERS.get((mode or "").lower().strip(), 0)
    return int(round(distance * multiplier))


def update_user_grade(
    db: Session,
    user_id: str,
    mode: str,
    distance: float,
    rng: Optional[random.Random] = None,
) -> Optional[Dict[str, Any]]:
    """
    Add the points of one trip to the user's running total.

    Zero-point trips leave the grade untouched and return None. Otherwise the
    motivation message is re-rolled and the new totals are returned.
    """
    points_earned = calculate_trip_points(mode, distance)
    if points_earned == 0:
        return None

    motivation = (rng or random).choice(MOTIVATIONS)
    user_grade = db.query(UserGrade).filter(UserGrade.userId == user_id).first()
    if user_grade is None:
        user_grade = UserGrade(userId=user_id, grade=points_earned, motivation=motivation)
        db.add(user_grade)
    else:
        user_grade.grade += points_earned
        user_grade.motivation = motivation

    db.commit()
    db.refresh(user_grade)
    logger.info(f"User {user_id} earned {points_earned} points, total {user_grade.grade}")
    return {
        "grade": user_grade.grade,
        "motivation": user_grade.motivation,
        "pointsEarned": points_earned,
    }


def get_user_grade(db: Session, user_id: str) -> Dict[str, Any]:
    user_grade = db.query(UserGrade).filter(UserGrade.userId == user_id).first()
    if user_grade is None:
        return {"grade": 0, "motivation": DEFAULT_MOTIVATION}
    return {"grade": user_grade.grade, "motivation": user_grade.motivation}


def get_leaderboard(db: Session, limit: int = 10) -> List[Dict[str, Any]]:
    """Highest grades first, labelled with the user's name when known."""
    rows = db.query(UserGrade, User)\
        .outerjoin(User, User.id == UserGrade.userId)\
        .order_by(UserGrade.grade.desc(), UserGrade.id)\
        .limit(limit)\
        .all()

    return [
        {
            "rank": position,
            "userId": user_grade.userId,
            "name": user.name if user else None,
            "userName": user.userName if user else None,
            "grade": user_grade.grade,
        }
        for position, (user_grade, user) in enumerate(rows, start=1)
    ]
