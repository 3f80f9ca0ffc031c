"""Perigon news feed: faith-aligned article search and mainstream headlines."""

from __future__ import annotations

import logging
import os
from datetime import date, datetime
from typing import Any

import httpx

from gloonews.data import Article, FeedMode, ViewParams
from gloonews.feed.base import FeedError
from gloonews.feed.query import (
    PAGE_SIZE,
    PERIGON_API_URL,
    TOP_SOURCE_GROUP,
    FeedQuery,
    build_feed_query,
)

logger = logging.getLogger(__name__)


class PerigonFeed:
    """Fetch a page of news from the Perigon API.

    Faith mode queries ``/all`` and reads a flat ``articles`` list. Mainstream
    mode queries ``/headlines`` and keeps the first hit of each cluster.

    Args:
        api_key: Perigon API key (defaults to PERIGON_API_KEY env var).
        base_url: API root.
        page_size: Articles per page.
        source_group: Source group used for mainstream headlines.
        timeout: HTTP timeout in seconds.
    """

    def __init__(
        self,
        *,
        api_key: str | None = None,
        base_url: str = PERIGON_API_URL,
        page_size: int = PAGE_SIZE,
        source_group: str = TOP_SOURCE_GROUP,
        timeout: float = 30.0,
    ) -> None:
        self._api_key = api_key or os.environ.get("PERIGON_API_KEY")
        if not self._api_key:
            raise ValueError(
                "Perigon API key required. Pass api_key or set PERIGON_API_KEY env var."
            )
        self._base_url = base_url
        self._page_size = page_size
        self._source_group = source_group
        self._timeout = timeout

    def build_query(self, params: ViewParams, *, today: date | None = None) -> FeedQuery:
        return build_feed_query(
            params.mode,
            params.offset,
            params.filters,
            today=today,
            base_url=self._base_url,
            size=self._page_size,
            source_group=self._source_group,
        )

    async def fetch(self, params: ViewParams, *, today: date | None = None) -> list[Article]:
        """Fetch and normalize the articles for a view.

        Args:
            params: Mode, day offset and filter selection.
            today: Reference date (defaults to the system clock).

        Returns:
            Ordered articles, at most one page.

        Raises:
            FeedError: On network failure or a non-success status.
        """
        return await self.fetch_query(self.build_query(params, today=today))

    async def fetch_query(self, query: FeedQuery) -> list[Article]:
        request_params = [("apiKey", self._api_key or ""), *query.params()]
        logger.info(
            f"Fetching {query.mode} feed {query.from_param}..{query.to_param} from {query.endpoint}"
        )
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.get(query.endpoint, params=request_params)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            raise FeedError(f"Feed request failed with status {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise FeedError(f"Feed request failed: {e}") from e
        except ValueError as e:
            raise FeedError("Feed response was not valid JSON") from e

        if query.mode == FeedMode.MAINSTREAM:
            return normalize_clusters(data, limit=query.size)
        return normalize_articles(data)


def normalize_articles(data: Any) -> list[Article]:
    """Normalize a flat ``{"articles": [...]}`` response, keeping order."""
    items = data.get("articles") if isinstance(data, dict) else None
    if not isinstance(items, list):
        logger.warning(f"Unexpected feed response structure: {_shape(data)}")
        return []
    return [parse_article(item) for item in items if isinstance(item, dict)]


def normalize_clusters(data: Any, *, limit: int = PAGE_SIZE) -> list[Article]:
    """Normalize a ``{"clusters": [{"hits": [...]}]}`` response.

    The first hit of each cluster represents the story. Clusters without hits
    are dropped, repeated stories are dropped, and at most ``limit`` articles
    are returned in cluster order.
    """
    clusters = data.get("clusters") if isinstance(data, dict) else None
    if not isinstance(clusters, list):
        logger.warning(f"Unexpected headlines response structure: {_shape(data)}")
        return []

    candidates: list[Article] = []
    for cluster in clusters:
        hits = cluster.get("hits") if isinstance(cluster, dict) else None
        if not hits or not isinstance(hits, list) or not isinstance(hits[0], dict):
            continue
        candidates.append(parse_article(hits[0]))

    return dedupe_articles(candidates)[:limit]


def dedupe_articles(articles: list[Article]) -> list[Article]:
    """Drop articles whose identifier was already seen, keeping first occurrences."""
    seen_ids: set[str] = set()
    unique: list[Article] = []
    for article in articles:
        if article.article_id:
            if article.article_id in seen_ids:
                continue
            seen_ids.add(article.article_id)
        unique.append(article)
    return unique


def parse_article(item: dict[str, Any]) -> Article:
    """Build an ``Article`` from a Perigon article record, defaulting absent fields."""
    source = item.get("source") or {}
    if not isinstance(source, dict):
        source = {}
    url = item.get("url") or None
    return Article(
        article_id=str(item.get("articleId") or url or ""),
        title=item.get("title") or "",
        content=item.get("content") or "",
        published_at=_parse_timestamp(item.get("pubDate")),
        source_domain=source.get("domain") or "",
        source_name=source.get("name") or "",
        image_url=item.get("imageUrl") or None,
        url=url,
    )


def _parse_timestamp(value: Any) -> datetime | None:
    if not value or not isinstance(value, str):
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        logger.debug(f"Unparseable pubDate {value!r}")
        return None


def _shape(data: Any) -> str:
    if isinstance(data, dict):
        return f"object with keys {sorted(data)}"
    return type(data).__name__
