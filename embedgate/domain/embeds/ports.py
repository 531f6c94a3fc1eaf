"""
Port interfaces for the embeds bounded context.

Embed extraction lives outside this service boundary. The API layer
only knows this contract; concrete resolvers are injected at the
composition root.
"""

from abc import ABC, abstractmethod
from typing import Any


class EmbedResolver(ABC):
    """Port for resolving embed metadata for a page URL."""

    @abstractmethod
    async def resolve(self, url: str, options: dict[str, str]) -> dict[str, Any]:
        """Return embed metadata for the given URL.

        Args:
            url: The page URL to resolve.
            options: Remaining query parameters, passed through untouched.

        Returns:
            A JSON-serializable document.

        Raises:
            NotFoundFailure: When no embed data exists for the URL.
            GenericFailure: For any other failure, with an optional code.
        """
        raise NotImplementedError
