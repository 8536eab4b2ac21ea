"""
Pytest configuration for the relay service tests.

HubSpot is never contacted: the SDK client is replaced by a MagicMock.
"""

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from app.config import get_settings
from app.hubspot.client import get_hubspot_client
from app.vapi.config import get_vapi_config

# Environment every test starts from, so a developer .env cannot leak in
BASE_ENV = {
    "DEBUG": "false",
    "VAPI_AUTH_ENABLED": "false",
    "VAPI_SECRET_TOKEN": "",
    "HUBSPOT_ACCESS_TOKEN": "test-token",
    "HUBSPOT_PROPERTY_INTEREST_FIELD": "",
    "VIEWING_TIMEZONE": "",
    "VIEWING_START_HOUR": "9",
    "VIEWING_END_HOUR": "17",
    "VIEWING_DURATION_MINUTES": "30",
}


def _clear_caches():
    get_settings.cache_clear()
    get_hubspot_client.cache_clear()
    get_vapi_config.cache_clear()


@pytest.fixture(autouse=True)
def base_env(monkeypatch):
    for key, value in BASE_ENV.items():
        monkeypatch.setenv(key, value)
    _clear_caches()
    yield
    _clear_caches()


@pytest.fixture
def set_env(monkeypatch):
    """Override environment variables and drop cached settings."""

    def _set(**env: str):
        for key, value in env.items():
            monkeypatch.setenv(key, value)
        _clear_caches()

    return _set


@pytest.fixture
def hubspot_sdk(monkeypatch) -> MagicMock:
    """A mocked HubSpot SDK client with no existing contacts."""
    sdk = MagicMock(name="HubSpot")
    sdk.crm.contacts.search_api.do_search.return_value = MagicMock(results=[])
    sdk.crm.contacts.basic_api.create.return_value = MagicMock(id="501")
    sdk.crm.contacts.basic_api.update.return_value = MagicMock(id="101")
    sdk.crm.objects.calls.basic_api.create.return_value = MagicMock(id="701")
    sdk.crm.objects.meetings.basic_api.create.return_value = MagicMock(id="801")

    monkeypatch.setattr("app.hubspot.crm.get_hubspot_client", lambda: sdk)
    return sdk


@pytest.fixture
def existing_contact(hubspot_sdk) -> MagicMock:
    """Make the contact search find contact 101."""
    hubspot_sdk.crm.contacts.search_api.do_search.return_value = MagicMock(
        results=[MagicMock(id="101")]
    )
    return hubspot_sdk


@pytest.fixture
def client() -> TestClient:
    from app.main import app

    return TestClient(app)
