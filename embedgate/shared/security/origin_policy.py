"""
Cross-origin policy.

Decides the Access-Control-Allow-Origin value for each request from the
allow-list built once at startup. Never rejects a request; a caller
outside the list simply gets no header.
"""

from typing import Iterable, Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from embedgate.core.config import WILDCARD_ORIGIN

ALLOW_ORIGIN_HEADER = "Access-Control-Allow-Origin"


class OriginPolicy:
    """Immutable set of allowed origins, or the wildcard."""

    def __init__(self, allowed_origins: Optional[Iterable[str]] = None) -> None:
        self._allowed = (
            frozenset(allowed_origins) if allowed_origins is not None else None
        )

    def allow_origin_for(self, origin: Optional[str]) -> Optional[str]:
        """Return the header value to emit for ``origin``, or None.

        Args:
            origin: The request's Origin header, if present.
        """
        if self._allowed is None or not origin:
            return None
        if WILDCARD_ORIGIN in self._allowed:
            return WILDCARD_ORIGIN
        if origin in self._allowed:
            return origin
        return None


class OriginPolicyMiddleware(BaseHTTPMiddleware):
    """Sets Access-Control-Allow-Origin on responses per the OriginPolicy."""

    def __init__(self, app, policy: OriginPolicy) -> None:
        super().__init__(app)
        self._policy = policy

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        response = await call_next(request)
        value = self._policy.allow_origin_for(request.headers.get("origin"))
        if value is not None:
            response.headers[ALLOW_ORIGIN_HEADER] = value
        return response
