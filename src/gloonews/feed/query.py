"""Build feed request descriptors from view parameters.

Pure functions; no network access. The API key is attached by the feed
client at send time so descriptors can be logged.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from gloonews.data import FeedFilters, FeedMode, FeedWindow

PERIGON_API_URL = "https://api.goperigon.com/v1"
PAGE_SIZE = 18
TOP_SOURCE_GROUP = "top10"


@dataclass(frozen=True)
class FeedQuery:
    """A fully-formed feed request, minus credentials."""

    mode: FeedMode
    endpoint: str
    window: FeedWindow
    size: int = PAGE_SIZE
    sources: tuple[str, ...] = ()
    categories: tuple[str, ...] = ()
    source_group: str | None = None

    @property
    def from_param(self) -> str:
        return self.window.from_date.isoformat()

    @property
    def to_param(self) -> str:
        return self.window.to_date.isoformat()

    def params(self) -> list[tuple[str, str]]:
        """Serialize to query parameters, repeating ``source``/``category`` per value."""
        params: list[tuple[str, str]] = [
            ("from", self.from_param),
            ("to", self.to_param),
        ]
        if self.source_group:
            params.append(("sourceGroup", self.source_group))
        params.extend(
            [
                ("showNumResults", "true"),
                ("size", str(self.size)),
                ("sortBy", "date"),
            ]
        )
        params.extend(("source", s) for s in self.sources)
        params.extend(("category", c) for c in self.categories)
        return params


def feed_window(offset: int, *, today: date | None = None) -> FeedWindow:
    """Return the one-day window ending ``offset`` days before ``today``."""
    return FeedWindow.for_offset(today or date.today(), offset)


def build_feed_query(
    mode: FeedMode,
    offset: int,
    filters: FeedFilters | None = None,
    *,
    today: date | None = None,
    base_url: str = PERIGON_API_URL,
    size: int = PAGE_SIZE,
    source_group: str = TOP_SOURCE_GROUP,
) -> FeedQuery:
    """Describe the feed request for a mode, day offset and filter selection.

    Args:
        mode: Faith-aligned or mainstream feed.
        offset: Days back from today (>= 0).
        filters: Source/category selection. Ignored in mainstream mode.
        today: Reference date (defaults to the system clock).
        base_url: Perigon API root.
        size: Page size.
        source_group: Source group requested in mainstream mode.

    Returns:
        The request descriptor.
    """
    window = feed_window(offset, today=today)
    base = base_url.rstrip("/")
    if mode == FeedMode.MAINSTREAM:
        return FeedQuery(
            mode=mode,
            endpoint=f"{base}/headlines",
            window=window,
            size=size,
            source_group=source_group,
        )

    filters = filters or FeedFilters()
    return FeedQuery(
        mode=mode,
        endpoint=f"{base}/all",
        window=window,
        size=size,
        sources=filters.sources,
        categories=filters.categories,
    )
