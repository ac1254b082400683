"""
Pytest configuration and fixtures.

Every test gets a fresh in-memory SQLite database and a provider whose HTTP
traffic goes through ``httpx.MockTransport``; nothing touches the network.
"""
import json

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from carbon_tracker.db import tables  # noqa: F401
from carbon_tracker.db.database import Base, get_db
from carbon_tracker.main import app
from carbon_tracker.services.providers.climatiq import ClimatiqProvider
from carbon_tracker.services.providers.registry import get_provider


class ProviderStub:
    """Answers every provider request with a canned response and records the bodies."""

    def __init__(self, status_code=200, body=None):
        self.status_code = status_code
        self.body = {"co2e": 1.5, "co2e_unit": "kg"} if body is None else body
        self.requests = []
        self.authorizations = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(json.loads(request.content))
        self.authorizations.append(request.headers.get("Authorization"))
        return httpx.Response(self.status_code, json=self.body)

    def climatiq(self, api_key="test-key"):
        return ClimatiqProvider(
            api_url="https://climatiq.test/estimate",
            api_key=api_key,
            data_version="21.21",
            timeout=5,
            transport=httpx.MockTransport(self),
        )


@pytest.fixture
def provider_stub():
    return ProviderStub()


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)()

    yield session

    session.close()
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def client(db_session, provider_stub):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_provider] = lambda: provider_stub.climatiq()

    yield TestClient(app)

    app.dependency_overrides.clear()


def _register_and_login(client, username):
    client.post(
        "/api/auth/register",
        json={"username": username, "password": "s3cret-pass", "email": f"{username}@example.com"},
    )
    response = client.post("/api/auth/login", json={"username": username, "password": "s3cret-pass"})
    token = response.json()["data"]["token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers(client):
    return _register_and_login(client, "alice")


@pytest.fixture
def other_auth_headers(client):
    return _register_and_login(client, "bob")
