"""
Pytest configuration and fixtures for the Coach Hub API tests.

Every test gets a fresh in-memory SQLite database; the app's get_session
dependency is overridden so requests use it instead of the on-disk file.
"""

import os
import tempfile

# Keep the import-time DB file out of the source tree and skip demo data
os.environ.setdefault("COACHHUB_DATABASE_PATH", os.path.join(tempfile.gettempdir(), "coachhub_test.db"))
os.environ.setdefault("COACHHUB_AUTO_SEED", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

from coachhub_backend import models  # noqa: F401
from coachhub_backend.main import app
from coachhub_backend.core.database import get_session


@pytest.fixture
def engine():
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(test_engine)
    yield test_engine
    SQLModel.metadata.drop_all(test_engine)


@pytest.fixture
def client(engine):
    def override_get_session():
        with Session(engine) as db_session:
            yield db_session

    app.dependency_overrides[get_session] = override_get_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(client):
    """Register + log in a user, returning bearer auth headers."""
    def _make_user(email="coach@example.com", password="hurling123", name="Coach"):
        client.post("/auth/register", json={"email": email, "password": password, "name": name})
        response = client.post("/auth/login", json={"email": email, "password": password})
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['token']}"}
    return _make_user


@pytest.fixture
def auth_headers(make_user):
    return make_user()


@pytest.fixture
def club(client, auth_headers):
    response = client.post("/api/clubs", json={"name": "Naomh Bríd CLG", "county": "Dublin"}, headers=auth_headers)
    assert response.status_code == 200, response.text
    return response.json()


@pytest.fixture
def team(client, auth_headers, club):
    response = client.post(
        "/api/teams",
        json={"club_id": club["id"], "name": "Senior Hurling", "sport": "hurling"},
        headers=auth_headers,
    )
    assert response.status_code == 200, response.text
    return response.json()


@pytest.fixture
def match_fixture(client, auth_headers, team):
    response = client.post(
        "/api/fixtures",
        json={
            "team_id": team["id"],
            "opponent": "Na Fianna",
            "venue": "Club Grounds",
            "date": "2024-06-01T14:00:00",
        },
        headers=auth_headers,
    )
    assert response.status_code == 200, response.text
    return response.json()


@pytest.fixture
def players(client, auth_headers, team):
    """A 17 player panel for the team fixture."""
    created = []
    for i in range(17):
        response = client.post(
            "/api/players",
            json={"team_id": team["id"], "name": f"Player {i + 1}", "primary_position_group": "BACK"},
            headers=auth_headers,
        )
        assert response.status_code == 200, response.text
        created.append(response.json())
    return created
