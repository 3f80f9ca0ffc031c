"""Tests for the feed query builder."""

from datetime import date, timedelta

import pytest

from gloonews.data import FeedFilters, FeedMode
from gloonews.feed.query import build_feed_query, feed_window

TODAY = date(2024, 3, 5)


@pytest.mark.parametrize("offset", [0, 1, 2, 7, 30, 365])
def test_window_is_one_day_ending_at_or_before_today(offset: int) -> None:
    window = feed_window(offset, today=TODAY)
    assert window.from_date == window.to_date - timedelta(days=1)
    assert window.to_date <= TODAY
    assert window.to_date == TODAY - timedelta(days=offset)


def test_window_defaults_to_system_clock() -> None:
    window = feed_window(0)
    assert window.to_date == date.today()


def test_negative_offset_is_rejected() -> None:
    with pytest.raises(ValueError):
        build_feed_query(FeedMode.FAITH, -1, today=TODAY)


def test_faith_query_params() -> None:
    filters = FeedFilters(sources=("cbn.com", "wng.org"), categories=("Politics", "Tech"))
    query = build_feed_query(FeedMode.FAITH, 1, filters, today=TODAY)

    assert query.endpoint == "https://api.goperigon.com/v1/all"
    assert query.params() == [
        ("from", "2024-03-03"),
        ("to", "2024-03-04"),
        ("showNumResults", "true"),
        ("size", "18"),
        ("sortBy", "date"),
        ("source", "cbn.com"),
        ("source", "wng.org"),
        ("category", "Politics"),
        ("category", "Tech"),
    ]


def test_faith_query_with_empty_filters() -> None:
    query = build_feed_query(FeedMode.FAITH, 0, FeedFilters(), today=TODAY)

    assert query.sources == ()
    assert query.categories == ()
    keys = [k for k, _ in query.params()]
    assert "source" not in keys
    assert "category" not in keys
    assert "sourceGroup" not in keys


def test_mainstream_query_ignores_filters() -> None:
    filters = FeedFilters(sources=("cbn.com",), categories=("Tech",))
    query = build_feed_query(FeedMode.MAINSTREAM, 0, filters, today=TODAY)

    assert query.endpoint == "https://api.goperigon.com/v1/headlines"
    params = dict(query.params())
    assert params["sourceGroup"] == "top10"
    assert params["from"] == "2024-03-04"
    assert params["to"] == "2024-03-05"
    assert params["size"] == "18"
    assert params["sortBy"] == "date"
    assert "source" not in params
    assert "category" not in params


def test_query_excludes_api_key() -> None:
    query = build_feed_query(FeedMode.FAITH, 0, today=TODAY)
    assert "apiKey" not in dict(query.params())


def test_custom_base_url_and_size() -> None:
    query = build_feed_query(
        FeedMode.MAINSTREAM,
        0,
        today=TODAY,
        base_url="https://perigon.test/v1/",
        size=6,
        source_group="top50",
    )
    assert query.endpoint == "https://perigon.test/v1/headlines"
    params = dict(query.params())
    assert params["size"] == "6"
    assert params["sourceGroup"] == "top50"
