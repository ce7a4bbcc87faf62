"""App access token state and its (re)acquisition.

The token is assumed valid for as long as it is present. There is no
expiry tracking: only an absent token triggers a new acquisition.
Concurrent requests that both see an absent token each acquire one and
the last write wins.
"""

import logging

from twitch_relay.core.errors import AuthError, ServiceUnavailable
from twitch_relay.services.twitch_api import TwitchAPIClient

logger = logging.getLogger(__name__)


class AppTokenStore:
    """Holds the single app access token shared by every request."""

    def __init__(self, token: str | None = None):
        self._token = token

    @property
    def token(self) -> str | None:
        return self._token

    @property
    def is_present(self) -> bool:
        return bool(self._token)

    def set(self, token: str) -> None:
        self._token = token

    def clear(self) -> None:
        self._token = None


class TokenManager:
    """Acquires the app access token and writes it to the store."""

    def __init__(self, twitch_api: TwitchAPIClient, store: AppTokenStore):
        self.twitch_api = twitch_api
        self.store = store

    async def acquire(self) -> str:
        """Fetch a fresh app token. Clears the store and re-raises on failure."""
        try:
            token = await self.twitch_api.request_app_token()
        except AuthError as e:
            self.store.clear()
            logger.error(f"Failed to get Twitch app token: {e.payload}")
            raise

        self.store.set(token)
        logger.info("Twitch app token obtained")
        return token

    async def ensure_token(self) -> str:
        """Return the stored token, acquiring one when absent."""
        if self.store.token:
            return self.store.token
        try:
            return await self.acquire()
        except AuthError as e:
            raise ServiceUnavailable(payload=e.payload) from e

    async def initialize(self) -> bool:
        """Best-effort startup acquisition. Never raises."""
        try:
            await self.acquire()
        except AuthError:
            logger.warning("Starting without a Twitch app token, will retry on first request")
            return False
        return True
