"""
Uncaught-failure guard.

Last-resort boundary for failures that happen outside any request:
startup work, background tasks on the event loop. It logs and keeps
the process alive; it never re-raises.
"""

import asyncio
import logging
from typing import Any

from embedgate.shared.logging import log_failure

logger = logging.getLogger(__name__)


class UncaughtFailureGuard:
    """Context manager and asyncio exception handler that log and continue.

    Args:
        debug: Log full stacks instead of messages only.
    """

    def __init__(self, debug: bool = False) -> None:
        self._debug = debug
        self.failures = 0

    def __enter__(self) -> "UncaughtFailureGuard":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc is None or not isinstance(exc, Exception):
            return False
        self.report(exc)
        return True

    def report(self, exc: BaseException, context: str = "Uncaught failure") -> None:
        self.failures += 1
        log_failure(logger, exc, verbose=self._debug, context=context)

    def loop_exception_handler(
        self, loop: asyncio.AbstractEventLoop, context: dict[str, Any]
    ) -> None:
        """Handler for ``loop.set_exception_handler``."""
        exc = context.get("exception")
        if exc is None:
            self.failures += 1
            logger.error("Uncaught failure: %s", context.get("message", "unknown"))
            return
        self.report(exc, context=context.get("message") or "Uncaught failure")

    def install(self, loop: asyncio.AbstractEventLoop) -> None:
        """Route the loop's unhandled task failures through this guard."""
        loop.set_exception_handler(self.loop_exception_handler)
