from gloonews.feed.base import FeedError, NewsFeed
from gloonews.feed.perigon import PerigonFeed, normalize_articles, normalize_clusters
from gloonews.feed.query import FeedQuery, build_feed_query, feed_window

__all__ = [
    "FeedError",
    "FeedQuery",
    "NewsFeed",
    "PerigonFeed",
    "build_feed_query",
    "feed_window",
    "normalize_articles",
    "normalize_clusters",
]
