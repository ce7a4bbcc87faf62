"""Twitch API client service.

Token types:
- App Access Token: client-credentials grant, identifies this backend.
  Used for the public streams/users endpoints.
- User Access Token: authorization-code grant, identifies an end user.
  Handed back to the frontend, never stored here.
"""

import logging
from typing import Any, cast

import httpx

from twitch_relay.core.errors import AuthError, UpstreamError

logger = logging.getLogger(__name__)

HELIX_BASE = "https://api.twitch.tv/helix"
OAUTH_BASE = "https://id.twitch.tv/oauth2"


def _error_payload(response: httpx.Response) -> Any:
    """Provider error body for logging; JSON when possible."""
    try:
        return response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"


def _json_object(response: httpx.Response) -> dict | None:
    """Decoded body when it is a JSON object, else None."""
    try:
        body = response.json()
    except ValueError:
        return None
    return body if isinstance(body, dict) else None


class TwitchAPIClient:
    """Client for interacting with Twitch API.

    Manages a shared httpx client for connection reuse. Holds no token
    state of its own; callers pass the token for every Helix request.
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        *,
        timeout: float | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.client_id = client_id
        self.client_secret = client_secret

        # Shared HTTP client — reuses TCP connections across requests
        self._http = http_client or httpx.AsyncClient(timeout=timeout)

    async def close(self) -> None:
        """Close the shared HTTP client. Call on app shutdown."""
        await self._http.aclose()

    @property
    def is_configured(self) -> bool:
        """Check if Twitch OAuth credentials are present"""
        return bool(self.client_id and self.client_secret)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _helix_headers(self, token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}", "Client-Id": self.client_id}

    async def _post_token(self, params: dict[str, str]) -> httpx.Response:
        return await self._http.post(f"{OAUTH_BASE}/token", params=params)

    async def _helix_get(self, path: str, token: str, params: Any = None) -> list[dict]:
        """GET request to Helix API, returning the ``data`` array."""
        try:
            response = await self._http.get(
                f"{HELIX_BASE}/{path}",
                params=params,
                headers=self._helix_headers(token),
            )
        except httpx.HTTPError as e:
            logger.error(f"Helix GET /{path} error: {type(e).__name__}: {e}")
            raise UpstreamError(payload=str(e)) from e

        if not response.is_success:
            payload = _error_payload(response)
            logger.error(f"Helix GET /{path} failed: {response.status_code} {payload}")
            raise UpstreamError(payload=payload)

        body = _json_object(response)
        data = body.get("data", []) if body is not None else None
        if not isinstance(data, list):
            payload = _error_payload(response)
            logger.error(f"Helix GET /{path} returned an unexpected body: {payload}")
            raise UpstreamError(payload=payload)

        return cast(list[dict], data)

    # ------------------------------------------------------------------
    # OAuth
    # ------------------------------------------------------------------

    async def request_app_token(self) -> str:
        """Obtain an app access token via the client-credentials grant."""
        if not self.is_configured:
            raise AuthError(payload="TWITCH_CLIENT_ID / TWITCH_CLIENT_SECRET not set")

        try:
            response = await self._post_token(
                {
                    "client_id": self.client_id,
                    "client_secret": self.client_secret,
                    "grant_type": "client_credentials",
                }
            )
        except httpx.HTTPError as e:
            raise AuthError(payload=str(e)) from e

        if not response.is_success:
            raise AuthError(payload=_error_payload(response))

        body = _json_object(response)
        if body is None:
            raise AuthError(payload=_error_payload(response))

        access_token = body.get("access_token")
        if not access_token:
            raise AuthError(payload="No access_token in response")
        return cast(str, access_token)

    async def exchange_code(self, code: str, redirect_uri: str) -> str:
        """Exchange an OAuth authorization code for a user access token."""
        try:
            response = await self._post_token(
                {
                    "client_id": self.client_id,
                    "client_secret": self.client_secret,
                    "code": code,
                    "grant_type": "authorization_code",
                    "redirect_uri": redirect_uri,
                }
            )
        except httpx.HTTPError as e:
            logger.error(f"Code exchange error: {type(e).__name__}: {e}")
            raise UpstreamError(payload=str(e)) from e

        if not response.is_success:
            payload = _error_payload(response)
            logger.error(f"Failed to exchange code: {response.status_code} {payload}")
            raise UpstreamError(payload=payload)

        body = _json_object(response)
        if body is None:
            payload = _error_payload(response)
            logger.error(f"Code exchange returned an unexpected body: {payload}")
            raise UpstreamError(payload=payload)

        access_token = body.get("access_token")
        if not access_token:
            logger.error("No access_token in response")
            raise UpstreamError(payload="No access_token in response")
        return cast(str, access_token)

    # ------------------------------------------------------------------
    # Helix resources
    # ------------------------------------------------------------------

    async def get_streams(self, token: str, *, first: int, language: str) -> list[dict]:
        """Get currently live streams filtered by language."""
        return await self._helix_get(
            "streams", token, {"first": first, "language": language}
        )

    async def get_users(self, token: str, user_ids: list[str] | None = None) -> list[dict]:
        """Get users by ID, or the token owner when *user_ids* is omitted."""
        params = {"id": user_ids} if user_ids else None
        return await self._helix_get("users", token, params)
