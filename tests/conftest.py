"""
Pytest configuration
Provides common fixtures wired to a fake Twitch backend
"""

import httpx
import pytest
from fastapi.testclient import TestClient

from tests.fakes import FRONTEND_URL, FakeTwitch
from twitch_relay.app import create_app
from twitch_relay.core.config import Settings
from twitch_relay.services import AppTokenStore, TokenManager, TwitchAPIClient


@pytest.fixture
def fake_twitch() -> FakeTwitch:
    return FakeTwitch()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        twitch_client_id="client-id",
        twitch_client_secret="client-secret",
        frontend_url=FRONTEND_URL,
        environment="test",
    )


@pytest.fixture
def twitch_api(fake_twitch: FakeTwitch) -> TwitchAPIClient:
    http = httpx.AsyncClient(transport=httpx.MockTransport(fake_twitch.handler))
    return TwitchAPIClient("client-id", "client-secret", http_client=http)


@pytest.fixture
def token_store() -> AppTokenStore:
    return AppTokenStore()


@pytest.fixture
def token_manager(twitch_api: TwitchAPIClient, token_store: AppTokenStore) -> TokenManager:
    return TokenManager(twitch_api, token_store)


@pytest.fixture
def app(settings: Settings, twitch_api: TwitchAPIClient):
    return create_app(settings, twitch_api=twitch_api)


@pytest.fixture
def client(app) -> TestClient:
    # No context manager: startup token acquisition is exercised separately
    return TestClient(app)
