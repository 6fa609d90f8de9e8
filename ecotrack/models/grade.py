from sqlalchemy import Column, Integer, String

from ecotrack.db.session import Base
from ecotrack.db.base_model import BaseModel

class UserGrade(Base, BaseModel):
    """Cumulative gamification points of one user. Never a source of emission data."""
    __tablename__ = "user_grades"

    userId = Column(String, nullable=False, unique=True, index=True)
    grade = Column(Integer, nullable=False, default=0)
    motivation = Column(String, nullable=False)

    def __repr__(self):
        return f"<UserGrade {self.userId}: {self.grade}>"
