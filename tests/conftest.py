"""Pytest fixtures for the Classroom Users API tests."""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from classroom_users_api.app.core.config import Settings
from classroom_users_api.app.main import create_app
from classroom_users_api.app.services.user_service import seed_users
from classroom_users_api.app.services.user_store import UserStore


class FakeClock:
    """Clock returning strictly increasing UTC timestamps."""

    def __init__(self, start=None, step=timedelta(seconds=1)):
        self.current = start or datetime(2025, 10, 1, tzinfo=timezone.utc)
        self.step = step

    def __call__(self):
        value = self.current
        self.current = value + self.step
        return value


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    """Empty store with a deterministic clock."""
    return UserStore(clock=clock)


@pytest.fixture
def seeded_store(clock):
    """Store holding Asha, Ravi and Maya."""
    return UserStore(initial=seed_users(), clock=clock)


@pytest.fixture
def app():
    """Fresh application (and therefore fresh store) for each test."""
    return create_app(Settings(seed_users=True))


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def empty_client():
    with TestClient(create_app(Settings(seed_users=False))) as test_client:
        yield test_client
