from datetime import datetime
from sqlalchemy import Column, DateTime, Integer

class BaseModel:
    """Base class for all database models owned by this service."""

    # Primary key with autoincrement=True to match PostgreSQL SERIAL type
    id = Column(Integer, primary_key=True, autoincrement=True, index=True)

    # Timestamps
    createdAt = Column(DateTime, default=datetime.utcnow)
    updatedAt = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
