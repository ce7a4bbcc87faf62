"""Origin allow-list for browser clients.

Requests without an ``Origin`` header (curl, mobile apps, server-side
callers) always pass. A browser origin passes when it equals an allowed
entry or contains one as a substring; anything else is answered with 403
before it reaches a route.
"""

import logging
from collections.abc import Iterable, Sequence

from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.datastructures import Headers
from starlette.types import ASGIApp, Receive, Scope, Send

logger = logging.getLogger(__name__)


class OriginPolicy:
    """Exact or substring match against a fixed list of origins."""

    def __init__(self, allowed_origins: Iterable[str]):
        # Empty entries would match every origin
        self.allowed_origins: list[str] = [o for o in allowed_origins if o]

    def is_allowed(self, origin: str | None) -> bool:
        if not origin:
            return True
        if origin in self.allowed_origins:
            return True
        return any(allowed in origin for allowed in self.allowed_origins)


class OriginPolicyMiddleware(CORSMiddleware):
    """Starlette CORS middleware driven by an ``OriginPolicy``."""

    def __init__(
        self,
        app: ASGIApp,
        policy: OriginPolicy,
        allow_methods: Sequence[str] = ("GET", "POST", "OPTIONS"),
        allow_headers: Sequence[str] = ("*",),
        allow_credentials: bool = True,
    ) -> None:
        super().__init__(
            app,
            allow_origins=policy.allowed_origins,
            allow_methods=allow_methods,
            allow_headers=allow_headers,
            allow_credentials=allow_credentials,
        )
        self.policy = policy

    def is_allowed_origin(self, origin: str) -> bool:
        return self.policy.is_allowed(origin)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http":
            origin = Headers(scope=scope).get("origin")
            if not self.policy.is_allowed(origin):
                logger.warning(f"Blocked CORS origin: {origin}")
                response = JSONResponse({"error": "Not allowed by CORS"}, status_code=403)
                await response(scope, receive, send)
                return
        await super().__call__(scope, receive, send)
