"""
Failure classification.

Maps any failure raised during request handling to the status code,
message and cache TTL class of the error response. Pure functions:
no IO, no framework imports besides the failure types.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from embedgate.domain.embeds.errors import EmbedFailure, GenericFailure, NotFoundFailure

DEFAULT_ERROR_CODE = 500

# Statuses that proxied upstream errors only carry in their message text.
# Order matters: the last marker found in the message wins.
PROXY_ERROR_CODES = (401, 403, 408)

_FIXED_MESSAGES = {
    403: "Forbidden",
    404: "Not found",
    408: "Timeout",
    410: "Gone",
}


class TtlClass(Enum):
    """Cache duration bucket for an error response."""

    PAGE_404 = "page_404"
    PAGE_TIMEOUT = "page_timeout"
    PAGE_OTHER_ERROR = "page_other_error"


@dataclass(frozen=True)
class Classification:
    """Outcome of classifying a single failure."""

    code: int
    message: str
    ttl_class: TtlClass
    messages: Optional[list[str]] = None


def sniff_proxy_status_code(message: Optional[str], code: int) -> int:
    """Recover a status code that a lower layer only wrote into the message.

    Every marker in PROXY_ERROR_CODES found as a substring of the message
    overrides the code, so "403 ... 408" resolves to 408. Unrelated digits
    ("user id 401 missing") also match.
    """
    text = message or ""
    for marker in PROXY_ERROR_CODES:
        if str(marker) in text:
            code = marker
    return code


def ttl_class_for(code: int) -> TtlClass:
    """Pick the cache bucket for a final status code."""
    if code == 404:
        return TtlClass.PAGE_404
    if code == 408:
        return TtlClass.PAGE_TIMEOUT
    return TtlClass.PAGE_OTHER_ERROR


def _resolve_explicit_code(code: Optional[int]) -> int:
    if isinstance(code, int) and not isinstance(code, bool) and 100 <= code <= 599:
        return code
    return DEFAULT_ERROR_CODE


def _public_message(code: int, original: str) -> tuple[int, str]:
    """Translate a resolved code into the (code, message) clients see."""
    if code == 400:
        return code, f"Bad Request: {original}" if original else "Bad Request"
    if code == 401:
        # Served as 403 so browsers do not pop a Basic auth prompt.
        return 403, "Unauthorized"
    if code in _FIXED_MESSAGES:
        return code, _FIXED_MESSAGES[code]
    if code in (415, 417):
        return code, original or "Unsupported Media Type"
    return code, "Server error"


def classify_failure(failure: EmbedFailure) -> Classification:
    """Classify a failure into status code, message, sub-messages and TTL class.

    Args:
        failure: A NotFoundFailure or GenericFailure.

    Returns:
        The classification; ``messages`` is None unless the failure
        carried a non-empty list of sub-messages.
    """
    messages = list(failure.messages) if failure.messages else None

    if isinstance(failure, NotFoundFailure):
        return Classification(
            code=404,
            message=failure.message,
            ttl_class=TtlClass.PAGE_404,
            messages=messages,
        )

    explicit = failure.code if isinstance(failure, GenericFailure) else None
    code = sniff_proxy_status_code(failure.message, _resolve_explicit_code(explicit))
    code, message = _public_message(code, failure.message)

    return Classification(
        code=code,
        message=message,
        ttl_class=ttl_class_for(code),
        messages=messages,
    )
