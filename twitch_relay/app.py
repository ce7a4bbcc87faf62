"""FastAPI application factory"""

import logging
import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from twitch_relay import __version__
from twitch_relay.core.config import Settings, get_settings
from twitch_relay.core.cors import OriginPolicy, OriginPolicyMiddleware
from twitch_relay.core.errors import register_exception_handlers
from twitch_relay.core.logging import setup_logging
from twitch_relay.routers import auth_router, health_router, streams_router
from twitch_relay.services import AppTokenStore, TokenManager, TwitchAPIClient

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle startup and shutdown"""
    settings: Settings = app.state.settings
    twitch_api: TwitchAPIClient = app.state.twitch_api

    # Startup
    logger.info("Starting Twitch relay")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Allowed origins: {', '.join(settings.cors_origins)}")
    if not settings.has_twitch_credentials:
        logger.warning("TWITCH_CLIENT_ID / TWITCH_CLIENT_SECRET missing, streams will return 503")

    # Best effort: a failure here leaves the token absent and the server up
    await TokenManager(twitch_api, app.state.token_store).initialize()

    yield

    # Shutdown
    logger.info("Shutting down Twitch relay")
    await twitch_api.close()


def create_app(
    settings: Settings | None = None,
    twitch_api: TwitchAPIClient | None = None,
) -> FastAPI:
    """Create and configure FastAPI application"""
    settings = settings or get_settings()

    # Setup logging first
    setup_logging(settings)

    app = FastAPI(
        title="Twitch Relay API",
        description="Backend relay hiding Twitch credentials from the frontend",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
    )

    # Shared state, one instance per application
    app.state.settings = settings
    app.state.twitch_api = twitch_api or TwitchAPIClient(
        settings.twitch_client_id,
        settings.twitch_client_secret,
        timeout=settings.http_timeout,
    )
    app.state.token_store = AppTokenStore()
    app.state.started_at = time.time()

    # Configure CORS
    app.add_middleware(OriginPolicyMiddleware, policy=OriginPolicy(settings.cors_origins))

    register_exception_handlers(app)

    # Register routers
    app.include_router(health_router.router)
    app.include_router(streams_router.router)
    app.include_router(auth_router.router)

    logger.info("FastAPI application configured")

    return app
