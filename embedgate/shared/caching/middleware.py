"""
Response cache lookup middleware.

Answers a request straight from the ResponseCache when an entry for
its fingerprint is still live. ``refresh=true`` skips the lookup; the
fresh response then overwrites the stored one.
"""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from embedgate.shared.caching.store import ResponseCache, request_fingerprint

REFRESH_VALUES = ("true", "1")


class ResponseCacheMiddleware(BaseHTTPMiddleware):
    """Serve cached responses without invoking handlers."""

    def __init__(self, app, cache: ResponseCache) -> None:
        super().__init__(app)
        self._cache = cache

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        """Return the cached copy if one exists, else run the handler."""
        key = request_fingerprint(request)
        if key is not None and request.query_params.get("refresh") not in REFRESH_VALUES:
            cached = self._cache.get(key)
            if cached is not None:
                return Response(
                    content=cached.body,
                    status_code=cached.status_code,
                    media_type=cached.content_type,
                )
        return await call_next(request)
