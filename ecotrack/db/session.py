from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from ecotrack.core.config import settings

db_url = str(settings.SQLALCHEMY_DATABASE_URI)

# SQLite connections are shared across FastAPI's worker threads
connect_args = {"check_same_thread": False} if db_url.startswith("sqlite") else {}

engine = create_engine(
    db_url,
    pool_pre_ping=True,  # Test connections for liveness when checked out from pool
    connect_args=connect_args,
)

# Create SessionLocal class
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Create Base class for declarative class definitions
Base = declarative_base()

# Dependency to get database session
def get_db():
    """
    Dependency for FastAPI endpoints that need a database session.
    Creates a new session for each request and closes it when done.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def get_session_factory() -> sessionmaker:
    """
    Dependency for work that outlives the request session (background tasks).
    Such work opens and closes its own sessions from this factory.
    """
    return SessionLocal
