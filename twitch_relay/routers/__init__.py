"""API Routers package

Routers are organized by feature domain.
"""

from . import auth_router, health_router, streams_router

__all__ = [
    "auth_router",
    "health_router",
    "streams_router",
]
