from datetime import date
from typing import Protocol

from gloonews.data import Article, ViewParams


class FeedError(Exception):
    """The feed could not be fetched (network failure or non-success status)."""


class NewsFeed(Protocol):
    """Interface for fetching the articles of one view."""

    async def fetch(self, params: ViewParams, *, today: date | None = None) -> list[Article]:
        """Fetch and normalize the articles for the given view.

        Args:
            params: Mode, day offset and filter selection.
            today: Reference date (defaults to the system clock).

        Returns:
            Ordered articles, at most one page.

        Raises:
            FeedError: If the request fails.
        """
        ...
