"""
XtreamGate Test Configuration

Shared fixtures: a fake upstream provider, a controllable clock, and a
FastAPI TestClient wired to both.
"""

import pytest
from fastapi.testclient import TestClient

from xtreamgate.main import create_app
from xtreamgate.models import AppConfig, ProviderCredentials
from xtreamgate.services import SessionStore

from fakes import FakeClock, FakeUpstreamClient


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def upstream():
    return FakeUpstreamClient()


@pytest.fixture
def store(clock):
    return SessionStore(ttl=86400, clock=clock)


@pytest.fixture
def credentials():
    return ProviderCredentials.from_input("http://x.com/", "u", "p")


@pytest.fixture
def config():
    return AppConfig()


@pytest.fixture
def gateway_app(config, upstream, store):
    return create_app(config, client=upstream, session_store=store)


@pytest.fixture
def client(gateway_app):
    app, _ = gateway_app
    return TestClient(app)
