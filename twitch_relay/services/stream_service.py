"""Live stream listing joined with broadcaster profiles"""

import logging

from pydantic import BaseModel, ConfigDict, Field

from twitch_relay.services.token_manager import TokenManager
from twitch_relay.services.twitch_api import TwitchAPIClient

logger = logging.getLogger(__name__)

THUMBNAIL_WIDTH = 440
THUMBNAIL_HEIGHT = 248


class StreamRecord(BaseModel):
    """One live stream as served to the frontend (Spanish wire names)."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    channel: str = Field(alias="canal")
    title: str = Field(alias="titulo")
    category: str = Field(alias="categoria")
    avatar_url: str | None = Field(alias="avatarUrl")
    viewers: int = Field(alias="espectadores")
    is_live: bool = Field(alias="enVivo")
    thumbnail_url: str = Field(alias="imagen")


def thumbnail_url(template: str) -> str:
    """Fill Twitch's ``{width}x{height}`` thumbnail placeholders."""
    return template.replace("{width}", str(THUMBNAIL_WIDTH)).replace(
        "{height}", str(THUMBNAIL_HEIGHT)
    )


def build_stream_record(stream: dict, user: dict | None) -> StreamRecord:
    return StreamRecord(
        id=stream["id"],
        channel=stream.get("user_name", ""),
        title=stream.get("title", ""),
        category=stream.get("game_name", ""),
        avatar_url=user.get("profile_image_url") if user else None,
        viewers=stream.get("viewer_count", 0),
        is_live=stream.get("type") == "live",
        thumbnail_url=thumbnail_url(stream.get("thumbnail_url", "")),
    )


class StreamListingService:
    """Fetch live streams and attach each broadcaster's avatar."""

    def __init__(
        self,
        twitch_api: TwitchAPIClient,
        token_manager: TokenManager,
        *,
        language: str = "es",
        limit: int = 10,
    ):
        self.twitch_api = twitch_api
        self.token_manager = token_manager
        self.language = language
        self.limit = limit

    async def list_streams(self) -> list[StreamRecord]:
        """List live streams in provider order.

        Raises ServiceUnavailable when no app token can be obtained and
        UpstreamError when either Helix call fails.
        """
        token = await self.token_manager.ensure_token()

        streams = await self.twitch_api.get_streams(
            token, first=self.limit, language=self.language
        )
        if not streams:
            return []

        user_ids = list(dict.fromkeys(s["user_id"] for s in streams))
        users = await self.twitch_api.get_users(token, user_ids)
        users_by_id = {u["id"]: u for u in users}

        logger.debug(f"Listed {len(streams)} streams, {len(users_by_id)} profiles")
        return [build_stream_record(s, users_by_id.get(s["user_id"])) for s in streams]
