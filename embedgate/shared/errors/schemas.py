"""
Pydantic schemas for the error response body.

Field declaration order is the wire order for both JSON and XML.
"""

from typing import Optional

from pydantic import BaseModel

ERROR_SOURCE = "iframely"


class ErrorDetail(BaseModel):
    """Body of the "error" member."""

    source: str = ERROR_SOURCE
    code: int
    message: str
    messages: Optional[list[str]] = None


class ErrorResponseDocument(BaseModel):
    """Standard error response returned by the error pipeline."""

    error: ErrorDetail

    def to_dict(self) -> dict:
        """Dump without the optional members that were never set."""
        return self.model_dump(exclude_none=True)


def build_error_document(
    code: int, message: str, messages: Optional[list[str]] = None
) -> ErrorResponseDocument:
    """Build the error document; empty sub-message lists are dropped."""
    return ErrorResponseDocument(
        error=ErrorDetail(code=code, message=message, messages=messages or None)
    )
