"""Dependency injection utilities for FastAPI

Shared objects (settings, Twitch client, token store) are created once by
the application factory and kept on ``app.state``. The providers below
hand them, or request-scoped services built from them, to route handlers.
"""

from fastapi import Depends, Request

from twitch_relay.core.config import Settings
from twitch_relay.services import (
    AppTokenStore,
    AuthExchangeService,
    StreamListingService,
    TokenManager,
    TwitchAPIClient,
)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_twitch_api(request: Request) -> TwitchAPIClient:
    """Get the shared TwitchAPIClient (connection reuse)."""
    return request.app.state.twitch_api


def get_token_store(request: Request) -> AppTokenStore:
    return request.app.state.token_store


def get_token_manager(
    twitch_api: TwitchAPIClient = Depends(get_twitch_api),
    store: AppTokenStore = Depends(get_token_store),
) -> TokenManager:
    return TokenManager(twitch_api, store)


def get_stream_service(
    twitch_api: TwitchAPIClient = Depends(get_twitch_api),
    token_manager: TokenManager = Depends(get_token_manager),
    settings: Settings = Depends(get_app_settings),
) -> StreamListingService:
    """Get StreamListingService instance (dependency injection)"""
    return StreamListingService(
        twitch_api,
        token_manager,
        language=settings.stream_language,
        limit=settings.stream_limit,
    )


def get_auth_exchange_service(
    twitch_api: TwitchAPIClient = Depends(get_twitch_api),
    settings: Settings = Depends(get_app_settings),
) -> AuthExchangeService:
    """Get AuthExchangeService instance (dependency injection)"""
    return AuthExchangeService(twitch_api, redirect_uri=settings.twitch_redirect_uri)
