"""Shared fixtures: application factory and a scriptable embed resolver."""

from typing import Any, Optional

import pytest
from fastapi.testclient import TestClient

from embedgate.core.config import Settings
from embedgate.domain.embeds.ports import EmbedResolver
from embedgate.main import create_app


class StubResolver(EmbedResolver):
    """Returns a fixed document or raises a fixed failure, counting calls."""

    def __init__(
        self,
        result: Optional[dict[str, Any]] = None,
        failure: Optional[BaseException] = None,
    ) -> None:
        self.result = result or {}
        self.failure = failure
        self.calls = 0

    async def resolve(self, url: str, options: dict[str, str]) -> dict[str, Any]:
        self.calls += 1
        if self.failure is not None:
            raise self.failure
        return self.result


@pytest.fixture
def make_client():
    """Build a TestClient around a fresh application."""

    def _make(resolver: Optional[EmbedResolver] = None, **overrides: Any) -> TestClient:
        settings = Settings(testing=True, **overrides)
        return TestClient(create_app(settings, embed_resolver=resolver))

    return _make


@pytest.fixture
def stub_resolver():
    """The StubResolver class, for tests that script resolver outcomes."""
    return StubResolver
