import secrets
import pytest
from fastapi.testclient import TestClient

from guardian.main import app
from guardian.database import engine, SessionLocal, Base
from guardian.config import config
from guardian.routes.cron import get_transport


def get_random_email():
    return f"user_{secrets.token_hex(4)}@example.com"


@pytest.fixture(autouse=True)
def database():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(autouse=True)
def open_cron(monkeypatch):
    monkeypatch.setattr(config, "CRON_SECRET", None)


@pytest.fixture
def mail(transport):
    app.dependency_overrides[get_transport] = lambda: transport
    yield transport
    app.dependency_overrides.pop(get_transport, None)


@pytest.fixture
def api_client():
    with TestClient(app) as client:
        yield client


def signup(api_client, email=None, password="password123", name="Auth User"):
    payload = {
        "name": name,
        "email": email or get_random_email(),
        "password": password,
    }
    response = api_client.post("/auth/signup", json=payload)
    assert response.status_code == 201
    return response.json()["access_token"]


@pytest.fixture
def auth_token(api_client):
    return signup(api_client)


@pytest.fixture
def auth_headers(auth_token):
    return {"Authorization": f"Bearer {auth_token}"}


@pytest.fixture
def make_user(api_client):
    """Sign up a fresh user and return their auth headers."""
    def _make(**kwargs):
        token = signup(api_client, **kwargs)
        return {"Authorization": f"Bearer {token}"}
    return _make


def obligation_payload(deadline_at, **overrides):
    payload = {
        "title": "File annual tax return",
        "category": "TAX",
        "deadline_at": deadline_at.isoformat(),
        "consequence": "Penalty of 5% of tax owed",
        "severity": "HIGH",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def create_obligation(api_client):
    def _create(headers, deadline_at, **overrides):
        response = api_client.post("/obligations/", json=obligation_payload(deadline_at, **overrides), headers=headers)
        assert response.status_code == 201, response.text
        return response.json()
    return _create
