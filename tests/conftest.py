"""Shared fixtures: an in-memory database wired into the FastAPI app."""

import os

# Settings are read at import time, so they must be in place before shiftsync is imported
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "test-secret-key-that-is-at-least-32-characters")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("DB_LOG_SLOW_QUERIES", "false")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from shiftsync.database import Base, get_db  # noqa: E402
from shiftsync.main import app  # noqa: E402

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def db_session():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    app.dependency_overrides[get_db] = override_get_db
    # Not used as a context manager: the lifespan would create tables on the real engine
    test_client = TestClient(app)
    try:
        yield test_client
    finally:
        app.dependency_overrides.clear()


def register_user(client, email="alex@example.com", password="secret123"):
    response = client.post(
        "/api/auth/register",
        json={
            "email": email,
            "password": password,
            "firstName": "Alex",
            "lastName": "Rivera",
        },
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


@pytest.fixture
def auth_headers(client):
    token = register_user(client)["token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def other_auth_headers(client):
    token = register_user(client, email="sam@example.com")["token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def workplace(client, auth_headers):
    response = client.post(
        "/api/workplaces",
        json={"name": "Campus Cafe", "color": "#FF5733", "hourlyRate": 15.5},
        headers=auth_headers,
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]
