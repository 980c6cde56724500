"""
Shared pytest fixtures for the Jolokia API server tests.

A fake Jolokia endpoint is served through httpx.MockTransport so login and
the broker listing can run end to end without a broker.
"""

import base64
from dataclasses import dataclass, field
from typing import List

import httpx
import pytest
from fastapi.testclient import TestClient

from jolokia_api_server.config import Settings
from jolokia_api_server.main import create_app

SECRET = "test-secret-access-token"
LOGIN_URL = "/api/v1/jolokia/login"


@dataclass
class FakeJolokia:
    """Canned Jolokia search endpoint with Basic auth."""
    username: str = "admin"
    password: str = "admin"
    brokers: List[str] = field(
        default_factory=lambda: ["org.apache.activemq.artemis:broker=\"amq-broker\""]
    )
    fail_with: Exception = None
    requests: List[httpx.Request] = field(default_factory=list)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_with is not None:
            raise self.fail_with

        token = base64.b64encode(f"{self.username}:{self.password}".encode()).decode()
        if request.headers.get("authorization") != f"Basic {token}":
            return httpx.Response(401, text="Unauthorized")

        return httpx.Response(200, json={
            "request": {"mbean": "org.apache.activemq.artemis:broker=*", "type": "search"},
            "value": self.brokers,
            "status": 200,
        })

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


def login_form(**overrides) -> dict:
    form = {
        "brokerName": "amq-broker",
        "userName": "admin",
        "password": "admin",
        "jolokiaHost": "localhost",
        "scheme": "http",
        "port": "8161",
    }
    form.update(overrides)
    return {k: v for k, v in form.items() if v is not None}


@pytest.fixture
def dev_settings() -> Settings:
    return Settings(SECRET_ACCESS_TOKEN=SECRET, NODE_ENV="development")


@pytest.fixture
def prod_settings() -> Settings:
    return Settings(SECRET_ACCESS_TOKEN=SECRET, NODE_ENV="production")


@pytest.fixture
def fake_jolokia() -> FakeJolokia:
    return FakeJolokia()


@pytest.fixture
def app(dev_settings, fake_jolokia):
    return create_app(dev_settings, jolokia_transport=fake_jolokia.transport)


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def session_token(client) -> str:
    response = client.post(LOGIN_URL, data=login_form())
    assert response.status_code == 200
    return response.json()["jolokia-session-id"]
