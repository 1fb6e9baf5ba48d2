"""
brikvest/conftest.py

Shared pytest fixtures.

The test database is a throwaway SQLite file; DATABASE_URL and friends must be
set BEFORE any brikvest module is imported because config reads them once.
"""

import os
import tempfile
from datetime import datetime, timedelta
from decimal import Decimal

# Unique test database and upload dir BEFORE importing the app
TEST_DB_PATH = tempfile.mktemp(suffix=".db")
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["REDIS_URL"] = ""
os.environ["EMAIL_PROVIDER"] = ""
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="brikvest-uploads-")
os.environ.setdefault("ENV", "dev")

import pytest
from fastapi.testclient import TestClient

from brikvest.auth import hash_password
from brikvest.db import Base, SessionLocal, engine
from brikvest.main import app
from brikvest.models import AdminRole, AdminUser, Property, PropertyStatus
from brikvest.sessions import MemorySessionStore, set_session_store

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "correct-horse-battery"


class FakeClock:
    """Controllable replacement for utcnow()."""

    def __init__(self, start=None):
        self.current = start or datetime(2025, 1, 1, 12, 0, 0)

    def __call__(self):
        return self.current

    def advance(self, **kwargs):
        self.current += timedelta(**kwargs)


@pytest.fixture(autouse=True)
def fresh_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture(autouse=True)
def session_store(clock):
    store = MemorySessionStore(clock=clock)
    set_session_store(store)
    yield store
    set_session_store(None)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


def create_admin_user(db, username=ADMIN_USERNAME, password=ADMIN_PASSWORD, role=AdminRole.admin, is_active=True):
    user = AdminUser(
        username=username,
        password_hash=hash_password(password),
        role=role,
        is_active=is_active,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def admin_user(db):
    return create_admin_user(db)


@pytest.fixture
def admin_token(client, admin_user):
    response = client.post(
        "/api/admin/login",
        json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD},
    )
    assert response.status_code == 200, f"Admin login failed: {response.json()}"
    return response.json()["sessionId"]


@pytest.fixture
def admin_headers(admin_token):
    return {"Authorization": f"Bearer {admin_token}"}


def property_payload(**overrides):
    """camelCase property body as the admin client sends it."""
    payload = {
        "name": "Lekki Gardens",
        "location": "Lekki Phase 1, Lagos",
        "description": "Twelve-unit residential block",
        "totalValue": 100_000_000,
        "minInvestment": 500_000,
        "projectedReturn": "12.50",
        "totalSlots": 10,
        "availableSlots": 10,
        "fundingProgress": 0,
        "imageUrl": "https://example.com/lekki.jpg",
        "status": "active",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def make_property(db):
    """Factory inserting a property directly; returns its id."""
    def _make(**overrides):
        fields = dict(
            name="Lekki Gardens",
            location="Lekki Phase 1, Lagos",
            description="Twelve-unit residential block",
            total_value=100_000_000,
            min_investment=500_000,
            projected_return=Decimal("12.50"),
            total_slots=10,
            available_slots=10,
            funding_progress=0,
            image_url="",
            status=PropertyStatus.active,
        )
        fields.update(overrides)
        prop = Property(**fields)
        db.add(prop)
        db.commit()
        return prop.id

    return _make
