import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ATLAS_APP_CODE", "KIOSK")
os.environ.setdefault("APP_NAME", "Kiosk Attendance")
os.environ.setdefault("APP_VERSION", "test")
os.environ.setdefault("APP_TIMEZONE", "Asia/Manila")
os.environ.setdefault("TIME_WINDOW_BYPASS", "false")
os.environ.setdefault("ENCRYPTION_ENABLED", "false")

from datetime import datetime
from zoneinfo import ZoneInfo

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from atams.db import Base
from app.models import Employee
from app.main import app
from app.db.session import get_db
from app.api.deps import get_clock, require_auth

MANILA = ZoneInfo("Asia/Manila")


def manila_time(hour: int, minute: int = 0, day: int = 17) -> datetime:
    return datetime(2026, 10, day, hour, minute, tzinfo=MANILA)


class FixedClock:
    """Clock that only moves when a test moves it"""

    def __init__(self, value: datetime):
        self.value = value

    def now(self) -> datetime:
        return self.value

    def set(self, value: datetime) -> None:
        self.value = value


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def attach_kiosk_schema(dbapi_connection, connection_record):
        dbapi_connection.execute("ATTACH DATABASE ':memory:' AS kiosk")

    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def clock():
    return FixedClock(manila_time(7, 0))


@pytest.fixture
def current_user():
    return {"user_id": 1, "username": "admin", "role_level": 100}


@pytest.fixture
def client(db, clock, current_user):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: clock
    app.dependency_overrides[require_auth] = lambda: current_user

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def make_employee(db):
    def _make(**overrides) -> Employee:
        data = {
            "em_employee_id": "EMP-001",
            "em_full_name": "Juan Dela Cruz",
            "em_role": "Cashier",
            "em_franchise": "Kiosk Manila",
            "em_area": "LDN",
            "em_spvr": "Maria Santos",
            "em_latitude": 14.60,
            "em_longitude": 120.98,
            "em_radius_meters": 200,
            "em_status": "Active",
        }
        data.update(overrides)
        employee = Employee(**data)
        db.add(employee)
        db.commit()
        db.refresh(employee)
        return employee

    return _make
