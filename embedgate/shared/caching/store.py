"""
In-memory response cache.

Holds fully rendered responses keyed by request fingerprint, each
with its own TTL. Expired entries are dropped when read, and swept
from the whole store whenever a new entry is written.
"""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional
from urllib.parse import urlencode

from starlette.requests import Request

logger = logging.getLogger(__name__)

CACHEABLE_METHODS = ("GET", "HEAD")
SWEEP_INTERVAL_SECONDS = 60.0


@dataclass(frozen=True)
class CachedResponse:
    """A rendered response as stored in the cache."""

    status_code: int
    content_type: str
    body: bytes


def request_fingerprint(request: Request) -> Optional[str]:
    """Key identifying equivalent requests, or None if not cacheable.

    Query pairs are sorted so parameter order does not split the
    cache, and re-encoded so a value holding "&" or "=" cannot pass for
    other parameters. ``refresh`` never takes part in the key.
    """
    if request.method not in CACHEABLE_METHODS:
        return None
    pairs = sorted(
        (key, value)
        for key, value in request.query_params.multi_items()
        if key != "refresh"
    )
    query = urlencode(pairs)
    return f"{request.method}:{request.url.path}?{query}"


class ResponseCache:
    """Thread-safe TTL store for rendered responses.

    A TTL of zero or less keeps the entry until the process exits.
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        sweep_interval: float = SWEEP_INTERVAL_SECONDS,
    ) -> None:
        self._clock = clock
        self._sweep_interval = sweep_interval
        self._next_sweep = clock() + sweep_interval
        self._entries: dict[str, tuple[CachedResponse, Optional[float]]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[CachedResponse]:
        """Return the live entry for ``key``, if any."""
        with self._lock:
            item = self._entries.get(key)
            if item is None:
                return None
            response, expires_at = item
            if expires_at is not None and expires_at <= self._clock():
                del self._entries[key]
                return None
            return response

    def set(self, key: str, response: CachedResponse, ttl: int) -> None:
        """Store ``response`` under ``key`` for ``ttl`` seconds."""
        now = self._clock()
        expires_at = now + ttl if ttl > 0 else None
        with self._lock:
            if now >= self._next_sweep:
                self._sweep(now)
            self._entries[key] = (response, expires_at)
        logger.debug("Cached %s (status=%d, ttl=%ds)", key, response.status_code, ttl)

    def _sweep(self, now: float) -> None:
        """Drop every expired entry. Caller holds the lock."""
        expired = [
            key
            for key, (_, expires_at) in self._entries.items()
            if expires_at is not None and expires_at <= now
        ]
        for key in expired:
            del self._entries[key]
        self._next_sweep = now + self._sweep_interval
        if expired:
            logger.debug("Swept %d expired responses", len(expired))

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
