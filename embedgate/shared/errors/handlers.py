"""
Error pipeline for FastAPI.

Every failure escaping a route ends up here, exactly once per request:
it is logged, classified, rendered in the requested format and sent
through the cache-aware writer with the TTL of its class.
No stack traces or internal details are exposed to clients.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from embedgate.core.config import Settings
from embedgate.domain.embeds.errors import EmbedFailure, GenericFailure
from embedgate.shared.caching.writer import CachedResponseWriter
from embedgate.shared.errors.classifier import classify_failure
from embedgate.shared.errors.schemas import build_error_document
from embedgate.shared.errors.serialization import render_error_document
from embedgate.shared.logging import describe_exception, log_failure

logger = logging.getLogger(__name__)


def _validation_summary(exc: RequestValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(loc) for loc in e['loc'])}: {e['msg']}" for e in exc.errors()
    )


def _string_list(value) -> list[str] | None:
    if isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value):
        return list(value)
    return None


def to_failure(exc: BaseException) -> EmbedFailure:
    """Normalize any exception into a failure the classifier understands."""
    if isinstance(exc, EmbedFailure):
        return exc
    if isinstance(exc, RequestValidationError):
        return GenericFailure(_validation_summary(exc), code=400)
    if isinstance(exc, StarletteHTTPException):
        detail = exc.detail if isinstance(exc.detail, str) else ""
        return GenericFailure(detail, code=exc.status_code)

    code = getattr(exc, "code", None)
    return GenericFailure(
        describe_exception(exc),
        code=code if isinstance(code, int) else None,
        messages=_string_list(getattr(exc, "messages", None)),
    )


class ErrorPipeline:
    """Terminal stage that turns a failure into a cached error response."""

    def __init__(self, settings: Settings, writer: CachedResponseWriter) -> None:
        self._settings = settings
        self._writer = writer

    def respond(self, request: Request, exc: BaseException) -> Response:
        """Build and send the error response for ``exc``.

        Args:
            request: The request that failed.
            exc: Whatever was raised while handling it.

        Returns:
            The error response, already recorded in the response cache.
        """
        log_failure(logger, exc, verbose=self._settings.rich_log_enabled)

        result = classify_failure(to_failure(exc))
        document = build_error_document(result.code, result.message, result.messages)
        body, content_type = render_error_document(
            document, request.query_params.get("format")
        )
        return self._writer.send_cached(
            request,
            content_type,
            body,
            code=result.code,
            ttl=self._settings.ttl_for(result.ttl_class),
        )


class ErrorPipelineMiddleware(BaseHTTPMiddleware):
    """Catches any exception a route lets escape and hands it to the pipeline."""

    def __init__(self, app, pipeline: ErrorPipeline) -> None:
        super().__init__(app)
        self._pipeline = pipeline

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            return self._pipeline.respond(request, exc)


def register_error_handlers(app: FastAPI, pipeline: ErrorPipeline) -> None:
    """Route every failure on the application through ``pipeline``.

    Framework errors (unknown route, wrong method, invalid query) are
    caught by exception handlers; anything else by the middleware.

    Args:
        app: The FastAPI application instance.
        pipeline: The pipeline bound to the application's settings and writer.
    """

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(
        request: Request, exc: StarletteHTTPException
    ) -> Response:
        """Handle routing and explicit HTTP errors."""
        return pipeline.respond(request, exc)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(
        request: Request, exc: RequestValidationError
    ) -> Response:
        """Handle invalid request parameters as 400 Bad Request."""
        return pipeline.respond(request, exc)

    app.add_middleware(ErrorPipelineMiddleware, pipeline=pipeline)
