"""Authorization-code exchange for frontend logins"""

import logging

from pydantic import BaseModel

from twitch_relay.core.errors import BadRequest, UpstreamError
from twitch_relay.services.twitch_api import TwitchAPIClient

logger = logging.getLogger(__name__)


class UserProfile(BaseModel):
    id: str
    name: str
    profile_image_url: str


class AuthExchangeResult(BaseModel):
    success: bool
    user: UserProfile
    access_token: str


class AuthExchangeService:
    """Trade a user's authorization code for a token and their profile.

    Stateless per call; a failure at either step returns nothing partial.
    """

    def __init__(self, twitch_api: TwitchAPIClient, redirect_uri: str):
        self.twitch_api = twitch_api
        self.redirect_uri = redirect_uri

    async def exchange_code(self, code: str | None) -> AuthExchangeResult:
        if not code:
            raise BadRequest("No authorization code found")

        access_token = await self.twitch_api.exchange_code(code, self.redirect_uri)

        users = await self.twitch_api.get_users(access_token)
        if not users:
            logger.error("Token exchange succeeded but Helix returned no user")
            raise UpstreamError(payload="Empty users response")

        user = users[0]
        logger.info(f"Twitch login for user {user.get('id')}")
        return AuthExchangeResult(
            success=True,
            user=UserProfile(
                id=user["id"],
                name=user.get("display_name", ""),
                profile_image_url=user.get("profile_image_url", ""),
            ),
            access_token=access_token,
        )
