"""Tests for the app token store and its manager"""

import httpx
import pytest

from twitch_relay.core.errors import AuthError, ServiceUnavailable
from twitch_relay.services import AppTokenStore, TokenManager, TwitchAPIClient


def test_store_transitions():
    store = AppTokenStore()
    assert not store.is_present

    store.set("abc")
    assert store.is_present
    assert store.token == "abc"

    store.clear()
    assert store.token is None


@pytest.mark.asyncio
async def test_acquire_stores_token(token_manager, token_store, fake_twitch):
    token = await token_manager.acquire()

    assert token == "app-token"
    assert token_store.token == "app-token"
    request = fake_twitch.calls("/oauth2/token")[0]
    assert request.method == "POST"
    assert request.url.params["grant_type"] == "client_credentials"
    assert request.url.params["client_id"] == "client-id"
    assert request.url.params["client_secret"] == "client-secret"


@pytest.mark.asyncio
async def test_acquire_overwrites_previous_token(token_manager, token_store):
    token_store.set("old")
    await token_manager.acquire()
    assert token_store.token == "app-token"


@pytest.mark.asyncio
async def test_failed_acquire_clears_token(token_manager, token_store, fake_twitch):
    token_store.set("old")
    fake_twitch.app_token = (400, {"status": 400, "message": "invalid client secret"})

    with pytest.raises(AuthError) as exc_info:
        await token_manager.acquire()

    assert exc_info.value.payload == {"status": 400, "message": "invalid client secret"}
    assert token_store.token is None


@pytest.mark.asyncio
async def test_transport_error_is_auth_error(token_manager, token_store, fake_twitch):
    fake_twitch.app_token = httpx.ConnectError("connection refused")

    with pytest.raises(AuthError):
        await token_manager.acquire()
    assert token_store.token is None


@pytest.mark.asyncio
async def test_missing_access_token_is_auth_error(token_manager, fake_twitch):
    fake_twitch.app_token = (200, {"token_type": "bearer"})
    with pytest.raises(AuthError):
        await token_manager.acquire()


@pytest.mark.asyncio
async def test_missing_credentials_skip_network(fake_twitch):
    http = httpx.AsyncClient(transport=httpx.MockTransport(fake_twitch.handler))
    manager = TokenManager(TwitchAPIClient("", "", http_client=http), AppTokenStore())

    with pytest.raises(AuthError):
        await manager.acquire()
    assert fake_twitch.requests == []


@pytest.mark.asyncio
async def test_ensure_token_reuses_present_token(token_manager, token_store, fake_twitch):
    token_store.set("cached")
    assert await token_manager.ensure_token() == "cached"
    assert fake_twitch.requests == []


@pytest.mark.asyncio
async def test_ensure_token_acquires_when_absent(token_manager, token_store):
    assert await token_manager.ensure_token() == "app-token"
    assert token_store.is_present


@pytest.mark.asyncio
async def test_ensure_token_unavailable_on_failure(token_manager, fake_twitch):
    fake_twitch.app_token = (500, {"message": "down"})
    with pytest.raises(ServiceUnavailable):
        await token_manager.ensure_token()


@pytest.mark.asyncio
async def test_initialize_is_best_effort(token_manager, token_store, fake_twitch):
    fake_twitch.app_token = httpx.ConnectError("unreachable")
    assert await token_manager.initialize() is False
    assert token_store.token is None

    fake_twitch.app_token = (200, {"access_token": "later"})
    assert await token_manager.initialize() is True
    assert token_store.token == "later"


@pytest.mark.asyncio
@pytest.mark.parametrize("body", ["<html>gateway</html>", ["unexpected"]])
async def test_non_object_token_body_is_auth_error(token_manager, token_store, fake_twitch, body):
    token_store.set("old")
    fake_twitch.app_token = (200, body)

    with pytest.raises(AuthError):
        await token_manager.acquire()
    assert token_store.token is None


@pytest.mark.asyncio
@pytest.mark.parametrize("body", ["<html>gateway</html>", ["unexpected"]])
async def test_non_object_token_body_is_unavailable(token_manager, fake_twitch, body):
    fake_twitch.app_token = (200, body)

    with pytest.raises(ServiceUnavailable):
        await token_manager.ensure_token()
    assert await token_manager.initialize() is False
