"""
SQLAlchemy model for the users table.
"""

from sqlalchemy import Column, DateTime, String

from ecotrack.db.session import Base

class User(Base):
    """
    Reference to the users table owned by the auth service.
    This is a read-only model used to label leaderboard entries.
    """
    __tablename__ = "users"

    id = Column(String, primary_key=True)
    name = Column(String)
    userName = Column(String, unique=True)
    email = Column(String, unique=True)
    created_at = Column(DateTime)
