"""Authentication API routes"""

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from twitch_relay.core.dependencies import get_auth_exchange_service
from twitch_relay.services import AuthExchangeResult, AuthExchangeService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"])


class CallbackRequest(BaseModel):
    code: str | None = None


@router.post("/twitch/callback", response_model=AuthExchangeResult)
async def twitch_oauth_callback(
    payload: CallbackRequest | None = None,
    auth_service: AuthExchangeService = Depends(get_auth_exchange_service),
) -> AuthExchangeResult:
    """Exchange the code the frontend received from Twitch for a user token"""
    code = payload.code if payload else None
    return await auth_service.exchange_code(code)
