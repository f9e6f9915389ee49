import os

# Settings are read once at import time; pin them before the app loads
os.environ["JWT_SECRET_KEY"] = "test-secret"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["MONGODB_DB"] = "placement_hub_test"
os.environ["INSTITUTIONAL_EMAIL_DOMAIN"] = "g.bracu.ac.bd"
os.environ["LOG_LEVEL"] = "WARNING"

import mongomock
import pytest
from fastapi.testclient import TestClient

from pymongo.errors import PyMongoError

from placement_hub.db import mongodb
from placement_hub.main import app
from placement_hub.services.notification_service import NotificationService

PASSWORD = "secret123"


@pytest.fixture(autouse=True)
def mongo(monkeypatch):
    client = mongomock.MongoClient()
    monkeypatch.setattr(mongodb, "_client", client)
    monkeypatch.setattr(mongodb, "_db", None)
    mongodb.init_mongo_indexes()
    yield client


@pytest.fixture
def client() -> TestClient:
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def make_account(client):
    """Register and log in; returns the login user summary plus auth headers."""

    def _make(name: str, email: str, role: str = "student") -> dict:
        resp = client.post(
            "/api/auth/register",
            json={"name": name, "email": email, "password": PASSWORD, "role": role},
        )
        assert resp.status_code == 201, resp.text
        login = client.post("/api/auth/login", json={"email": email, "password": PASSWORD})
        assert login.status_code == 200, login.text
        body = login.json()
        return {**body["user"], "headers": {"Authorization": f"Bearer {body['token']}"}}

    return _make


@pytest.fixture
def student(make_account) -> dict:
    return make_account("Alice Rahman", "alice@g.bracu.ac.bd")


@pytest.fixture
def other_student(make_account) -> dict:
    return make_account("Bilal Hossain", "bilal@g.bracu.ac.bd")


@pytest.fixture
def recruiter(make_account) -> dict:
    return make_account("Acme Hiring", "hr@acme.io", role="recruiter")


@pytest.fixture
def other_recruiter(make_account) -> dict:
    return make_account("Globex Talent", "talent@globex.io", role="recruiter")


@pytest.fixture
def admin(make_account) -> dict:
    return make_account("Portal Admin", "admin@portal.io", role="admin")


@pytest.fixture
def open_job(client, recruiter) -> dict:
    resp = client.post(
        "/api/recruiter/jobs",
        json={
            "title": "Backend Engineer",
            "company": "Acme",
            "location": "Dhaka",
            "job_type": "full-time",
            "required_skills": ["Python", "MongoDB"],
            "salary_min": 50000,
            "salary_max": 80000,
        },
        headers=recruiter["headers"],
    )
    assert resp.status_code == 201, resp.text
    return resp.json()["job"]


@pytest.fixture
def break_notifications(monkeypatch):
    """Call to make notification writes fail; call with broken=False to restore them."""
    working = NotificationService.create

    def _fail(self, *args, **kwargs):
        raise PyMongoError("notifications unavailable")

    def _break(broken: bool = True) -> None:
        monkeypatch.setattr(NotificationService, "create", _fail if broken else working)

    return _break
