"""
Dependency injection for the embeds bounded context.

Provides FastAPI dependency functions that hand routes the objects
wired into app.state by the application factory.
"""

from fastapi import Request

from embedgate.core.config import Settings
from embedgate.domain.embeds.errors import GenericFailure
from embedgate.domain.embeds.ports import EmbedResolver


def get_app_settings(request: Request) -> Settings:
    """Return the Settings the application was created with."""
    return request.app.state.settings


def get_embed_resolver(request: Request) -> EmbedResolver:
    """Return the configured EmbedResolver.

    Raises:
        GenericFailure: 501 when the application was built without one.
    """
    resolver = getattr(request.app.state, "embed_resolver", None)
    if resolver is None:
        raise GenericFailure("Embed resolver is not configured", code=501)
    return resolver
