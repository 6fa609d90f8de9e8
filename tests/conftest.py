import os
from datetime import date

# Point the settings at SQLite before anything imports the engine
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import ecotrack.models  # noqa: F401
from ecotrack.core.security import create_access_token
from ecotrack.db.session import Base, get_db, get_session_factory
from ecotrack.main import app
from ecotrack.models import EmissionFactor, Vehicle

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


# ---------------------------------------------------------------------------
# Database and client
# ---------------------------------------------------------------------------

@pytest.fixture
def db():
    """Fresh schema for each test, torn down afterwards."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    def override_get_db():
        session = TestingSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: TestingSessionLocal
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Authentication
# ---------------------------------------------------------------------------

def _headers(user_id, role="user"):
    return {"Authorization": f"Bearer {create_access_token(user_id, role=role)}"}


@pytest.fixture
def auth_headers():
    return _headers("user-1")


@pytest.fixture
def other_auth_headers():
    return _headers("user-2")


@pytest.fixture
def admin_headers():
    return _headers("admin-1", role="admin")


# ---------------------------------------------------------------------------
# Reference data
# ---------------------------------------------------------------------------

def add_factor(db, category, fuel, engine, grams, source="DEFRA 2023"):
    factor = EmissionFactor(
        vehicleCategory=category,
        fuelType=fuel,
        engineSize=engine,
        emissionFactorGramsPerKm=grams,
        source=source,
    )
    db.add(factor)
    db.commit()
    return factor


def add_vehicle(db, user_id="user-1", fuel="Petrol", engine="Small", name="My Car", vehicle_type="Car"):
    vehicle = Vehicle(
        userId=user_id,
        vehicleName=name,
        vehicleModel="Golf",
        vehicleType=vehicle_type,
        fuelType=fuel,
        vehicleManufactureDate=date(2019, 5, 1),
        vehicleEmissionRating=120.0,
        vehicleEngineSize=engine,
    )
    db.add(vehicle)
    db.commit()
    return vehicle


@pytest.fixture
def factors(db):
    """A small reference table covering every lookup strategy."""
    return {
        "car": add_factor(db, "car", "petrol", "small", 120.0),
        "car_diesel": add_factor(db, "car", "diesel", "medium", 165.0),
        "motorcycle": add_factor(db, "motorcycle", "petrol", "small", 80.0, source="DEFRA 2023 Motorbike"),
        "bus": add_factor(db, "bus", "diesel", "average", 100.0, source="DEFRA 2023 Bus"),
        "train": add_factor(db, "train", "electric", "average", 35.0, source="DEFRA 2023 Rail"),
        "walking": add_factor(db, "walking", "human", "na", 0.0, source="Zero direct emissions"),
        "bicycle": add_factor(db, "bicycle", "human", "na", 0.0, source="Zero direct emissions"),
    }


@pytest.fixture
def vehicle(db):
    return add_vehicle(db)


@pytest.fixture
def make_vehicle(db):
    def _make(**kwargs):
        return add_vehicle(db, **kwargs)
    return _make


@pytest.fixture
def make_factor(db):
    def _make(*args, **kwargs):
        return add_factor(db, *args, **kwargs)
    return _make


@pytest.fixture
def session_factory(db):
    return TestingSessionLocal
