"""Service status routes"""

import time

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse

from twitch_relay.core.dependencies import get_token_store
from twitch_relay.services import AppTokenStore

router = APIRouter(tags=["health"])


@router.get("/")
async def root():
    """Root endpoint - minimal service info"""
    return {"service": "twitch-relay", "status": "running"}


@router.get("/health")
async def health(request: Request, store: AppTokenStore = Depends(get_token_store)):
    """Liveness check, never contacts Twitch"""
    return {
        "status": "healthy",
        "uptime_seconds": int(time.time() - request.app.state.started_at),
        "app_token": store.is_present,
    }


@router.api_route("/ping", methods=["GET", "HEAD"], response_class=PlainTextResponse)
async def ping():
    """Ping endpoint"""
    return "pong"
