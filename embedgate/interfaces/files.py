"""
Utility routes: root redirect and public file downloads.

These answer their own failures in plain text and never go through
the error pipeline or the response cache.
"""

import logging
from pathlib import Path

from fastapi import APIRouter, Depends
from starlette.responses import FileResponse, PlainTextResponse, RedirectResponse, Response

from embedgate.core.config import Settings
from embedgate.interfaces.embeds.dependencies import get_app_settings

logger = logging.getLogger(__name__)

DEFAULT_MEDIA_TYPE = "application/octet-stream"
MEDIA_TYPES = {
    "js": "application/javascript",
    "css": "text/css",
    "html": "text/html",
    "json": "application/json",
    "txt": "text/plain",
}

router = APIRouter(tags=["files"])


def media_type_for(filename: str) -> str:
    """Pick the media type from the file extension."""
    extension = filename.rsplit(".", 1)[-1].lower()
    return MEDIA_TYPES.get(extension, DEFAULT_MEDIA_TYPE)


@router.get("/", include_in_schema=False)
def root_redirect(settings: Settings = Depends(get_app_settings)) -> RedirectResponse:
    return RedirectResponse(settings.root_redirect_url, status_code=302)


@router.get("/files/{filename}", summary="Download a public file")
def serve_file(
    filename: str, settings: Settings = Depends(get_app_settings)
) -> Response:
    """Send a file from the public files directory.

    Names resolving outside the directory are reported as missing.
    """
    directory = Path(settings.files_directory).resolve()
    path = (directory / filename).resolve()
    if directory not in path.parents:
        return PlainTextResponse("File not found", status_code=404)

    try:
        is_file = path.is_file()
    except OSError:
        logger.exception("Error serving file: %s", filename)
        return PlainTextResponse("Internal server error", status_code=500)
    if not is_file:
        return PlainTextResponse("File not found", status_code=404)

    return FileResponse(path, media_type=media_type_for(filename))
