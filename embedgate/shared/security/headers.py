"""
Product identification header middleware.

Adds the fixed product header to every response, including
error responses and responses served from cache.

No business logic. Pure cross-cutting concern.
"""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

PRODUCT_HEADERS = {
    "X-Powered-By": "Iframely",
}


class ProductHeaderMiddleware(BaseHTTPMiddleware):
    """Middleware that stamps every response with the product header."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        """Process request and add the product header to the response."""
        response = await call_next(request)
        for header_name, header_value in PRODUCT_HEADERS.items():
            response.headers[header_name] = header_value
        return response
