"""Pytest bootstrap configuration.

Keep settings deterministic (no .env pick-up surprises for the port) and
provide a fresh app per test so the request counter starts at zero.
"""
import os

os.environ.setdefault("DEBUG", "false")

import logging

import pytest
from fastapi.testclient import TestClient

from application.services.greeter_service import GreeterApplicationService
from domain.greeter.state import ServiceState
from main import create_app
from rpc_app.services.greeter_service import GreeterService


@pytest.fixture
def service_state() -> ServiceState:
    return ServiceState()


@pytest.fixture
def greeter_service(service_state) -> GreeterService:
    return GreeterService(GreeterApplicationService(service_state))


@pytest.fixture
def client(greeter_service):
    app = create_app(greeter_service)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def log_events(caplog):
    """Return structlog event dicts captured through the stdlib bridge."""
    caplog.set_level(logging.INFO)

    def _events(name=None):
        events = [r.msg for r in caplog.records if isinstance(r.msg, dict)]
        if name is None:
            return events
        return [e for e in events if e.get("event") == name]

    return _events
