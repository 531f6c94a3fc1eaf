"""
Cache-aware response writer.

Every route and the error pipeline send their responses through here.
The writer builds the response and records it in the shared cache under
the request fingerprint, so an identical request can be answered by
ResponseCacheMiddleware without running the handler again.
"""

import json
from typing import Any

from starlette.requests import Request
from starlette.responses import Response

from embedgate.shared.caching.store import CachedResponse, ResponseCache, request_fingerprint

JSON_CONTENT_TYPE = "application/json"


class CachedResponseWriter:
    """Writes responses and stores them in a ResponseCache.

    Callers always supply the status code and TTL; keying and
    expiry stay inside the cache.
    """

    def __init__(self, cache: ResponseCache) -> None:
        self._cache = cache

    def send_cached(
        self,
        request: Request,
        content_type: str,
        body: bytes,
        *,
        code: int,
        ttl: int,
    ) -> Response:
        """Build the response and record it for ``ttl`` seconds.

        Args:
            request: The request being answered; provides the cache key.
            content_type: Media type of ``body``.
            body: Rendered payload.
            code: HTTP status code.
            ttl: Cache duration in seconds (0 = no expiry).

        Returns:
            The response to return from the route or handler.
        """
        key = request_fingerprint(request)
        if key is not None:
            self._cache.set(
                key,
                CachedResponse(status_code=code, content_type=content_type, body=body),
                ttl,
            )
        return Response(content=body, status_code=code, media_type=content_type)

    def send_json_cached(
        self, request: Request, document: Any, *, code: int, ttl: int
    ) -> Response:
        """JSON convenience over send_cached."""
        body = json.dumps(document, ensure_ascii=False, separators=(",", ":")).encode("utf-8")
        return self.send_cached(request, JSON_CONTENT_TYPE, body, code=code, ttl=ttl)


def get_response_writer(request: Request) -> CachedResponseWriter:
    """FastAPI dependency returning the application's writer."""
    return request.app.state.response_writer
