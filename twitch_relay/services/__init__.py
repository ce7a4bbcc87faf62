"""Services layer - Business logic

Services are initialized with their dependencies and accessed through dependency injection.
"""

from .auth_service import AuthExchangeResult, AuthExchangeService, UserProfile
from .stream_service import StreamListingService, StreamRecord
from .token_manager import AppTokenStore, TokenManager
from .twitch_api import TwitchAPIClient

__all__ = [
    "AppTokenStore",
    "AuthExchangeResult",
    "AuthExchangeService",
    "StreamListingService",
    "StreamRecord",
    "TokenManager",
    "TwitchAPIClient",
    "UserProfile",
]
