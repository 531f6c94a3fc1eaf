"""
FastAPI router for embed lookups.

Routes delegate to the EmbedResolver port. No business logic here.
Failures are left to propagate; the error pipeline answers them.
"""

from fastapi import APIRouter, Depends, Query, Request
from starlette.responses import Response

from embedgate.core.config import Settings
from embedgate.domain.embeds.ports import EmbedResolver
from embedgate.interfaces.embeds.dependencies import get_app_settings, get_embed_resolver
from embedgate.interfaces.embeds.schemas import ERROR_RESPONSES
from embedgate.shared.caching.writer import CachedResponseWriter, get_response_writer

# Consumed by the boundary itself, never forwarded to the resolver.
RESERVED_PARAMS = ("url", "format", "refresh")

router = APIRouter(tags=["embeds"])


@router.get(
    "/iframely",
    responses=ERROR_RESPONSES,
    summary="Resolve embed metadata",
    description="Return embed metadata for the page at the given URL.",
)
async def get_embed(
    request: Request,
    url: str = Query(..., min_length=1, description="Page URL to resolve"),
    resolver: EmbedResolver = Depends(get_embed_resolver),
    writer: CachedResponseWriter = Depends(get_response_writer),
    settings: Settings = Depends(get_app_settings),
) -> Response:
    """Resolve ``url`` and send the result through the response cache."""
    options = {
        key: value
        for key, value in request.query_params.items()
        if key not in RESERVED_PARAMS
    }
    data = await resolver.resolve(url, options)
    return writer.send_json_cached(request, data, code=200, ttl=settings.cache_ttl)
