"""Test fixtures for Clubhouse API."""

import os

import pytest

# Set test environment before importing app modules
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db
from app.main import app

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

CLUB_PAYLOAD = {
    "name": "Riverside Runners",
    "sport": "running",
    "description": "Weekly group runs along the river path.",
    "location": "Riverside Park",
    "privacy": "public",
    "meeting_days": ["Tuesday", "Saturday"],
    "meeting_time": "07:00",
    "skill_level": "beginner",
    "age_group": "adults",
}


@pytest.fixture
def db_session():
    """Fresh in-memory database per test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    """Test client whose requests use the test database."""
    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def register_user(client):
    """Register a user and return bearer auth headers for them."""
    def _register(email: str = "owner@example.com", name: str = "Olivia Owner", password: str = "secret123"):
        response = client.post(
            "/api/v1/auth/register",
            json={"email": email, "name": name, "password": password},
        )
        assert response.status_code == 201, response.text
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    return _register


@pytest.fixture
def owner_headers(register_user):
    return register_user()


@pytest.fixture
def member_headers(register_user):
    return register_user(email="member@example.com", name="Max Member")


@pytest.fixture
def club_payload():
    return dict(CLUB_PAYLOAD)


@pytest.fixture
def create_club(client, owner_headers, club_payload):
    """Create a club as the owner and return the response body."""
    def _create(headers=None, **overrides):
        payload = {**club_payload, **overrides}
        response = client.post("/api/v1/clubs", json=payload, headers=headers or owner_headers)
        assert response.status_code == 201, response.text
        return response.json()

    return _create
