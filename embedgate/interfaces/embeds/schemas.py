"""
Pydantic schemas for API responses.

These schemas document the API contract in OpenAPI.
No business logic belongs here.
"""

from pydantic import BaseModel

from embedgate.shared.errors.schemas import ErrorResponseDocument


class HealthResponse(BaseModel):
    """Response schema for the health check endpoint."""

    status: str
    version: str


ERROR_RESPONSES = {
    400: {"model": ErrorResponseDocument},
    403: {"model": ErrorResponseDocument},
    404: {"model": ErrorResponseDocument},
    408: {"model": ErrorResponseDocument},
    500: {"model": ErrorResponseDocument},
}
