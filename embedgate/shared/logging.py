"""
Logging configuration for the application.

Sets up stdlib logging with a consistent format on stdout.
Logging must not change program behavior: a failing log call
never prevents a response from being sent.
"""

import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str = "INFO") -> None:
    """Configure logging for the application.

    Args:
        level: The log level string (DEBUG, INFO, WARNING, ERROR).
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stdout,
        force=True,
    )

    # Request lines are noise next to the error log
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def describe_exception(exc: BaseException) -> str:
    """Best-effort one-line description; never raises."""
    try:
        text = getattr(exc, "message", None) or str(exc)
    except Exception:
        text = ""
    return text or type(exc).__name__


def log_failure(
    logger: logging.Logger,
    exc: BaseException,
    *,
    verbose: bool,
    context: Optional[str] = None,
) -> None:
    """Log a failure with its traceback when ``verbose``, else just its message."""
    message = describe_exception(exc)
    if context:
        message = f"{context}: {message}"
    if verbose:
        logger.error(message, exc_info=(type(exc), exc, exc.__traceback__))
    else:
        logger.error(message)
