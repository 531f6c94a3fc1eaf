"""
Failures raised while serving embed requests.

Handlers upstream of the error pipeline raise these. They are mapped
to HTTP responses by embedgate.shared.errors, exactly once per request.
No framework imports allowed.
"""

from typing import Optional, Sequence


class EmbedFailure(Exception):
    """Base for all failures the error pipeline knows how to classify.

    Attributes:
        message: Human-readable description of the failure.
        messages: Optional ordered diagnostic lines (e.g. one per plugin).
    """

    def __init__(
        self, message: str = "", messages: Optional[Sequence[str]] = None
    ) -> None:
        self.message = message or ""
        self.messages = list(messages) if messages else None
        super().__init__(self.message)


class NotFoundFailure(EmbedFailure):
    """Raised when the requested page or embed does not exist. Always a 404."""


class GenericFailure(EmbedFailure):
    """Any other failure, with an optional explicit HTTP status code.

    Lower layers sometimes only put the status in the message text;
    the classifier falls back to sniffing it out when code is None.
    """

    def __init__(
        self,
        message: str = "",
        code: Optional[int] = None,
        messages: Optional[Sequence[str]] = None,
    ) -> None:
        super().__init__(message, messages)
        self.code = code
