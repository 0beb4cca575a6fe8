from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from alertnet.core.settings import Settings
from alertnet.main import create_app
from alertnet.services.domain_store import DomainStore


class FakeClock:
    """Deterministic clock; advance() moves time forward."""

    def __init__(self, start=None):
        self.now = start or datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now = self.now + timedelta(seconds=seconds)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    return DomainStore.seeded(clock)


@pytest.fixture
def test_settings():
    return Settings(
        SUBMISSION_DELAY_SECONDS=0,
        NEWS_REFRESH_SECONDS=0,
        NOTIFICATION_DISMISS_SECONDS=60,
        GEMINI_API_KEY=None,
        GEO_PROVIDER="static",
        DEVICE_LATITUDE=18.55,
        DEVICE_LONGITUDE=-72.33,
    )


@pytest.fixture
def client(test_settings):
    with TestClient(create_app(test_settings)) as c:
        yield c
