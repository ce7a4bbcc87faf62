"""Live stream listing API routes"""

from fastapi import APIRouter, Depends

from twitch_relay.core.dependencies import get_stream_service
from twitch_relay.services import StreamListingService, StreamRecord

router = APIRouter(prefix="/api/twitch", tags=["streams"])


@router.get("/streams", response_model=list[StreamRecord])
async def list_streams(
    stream_service: StreamListingService = Depends(get_stream_service),
) -> list[StreamRecord]:
    """Get live streams with broadcaster avatars.

    503 when no app token can be obtained, 500 when Twitch fails.
    """
    return await stream_service.list_streams()
