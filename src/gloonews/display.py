"""Display models for article cards and the date-range header."""

from dataclasses import dataclass
from datetime import datetime

from gloonews.data import Article, BiasRating, FeedMode, FeedWindow
from gloonews.sources import SourceMetadataResolver

FALLBACK_IMAGE_URL = "https://dapologeticsimages.s3.amazonaws.com/other/gloonews.jpg"
UNKNOWN_SOURCE = "Unknown Source"
UNKNOWN_DATE = "Unknown Date"
NO_RATING = "No rating available"


@dataclass(frozen=True)
class ArticleCard:
    """Everything a card needs to render one article."""

    article: Article
    source_label: str
    published_label: str
    image_url: str
    favicon_url: str | None
    bias_rating: BiasRating | None
    verifiable: bool

    @property
    def bias_label(self) -> str:
        return self.bias_rating.value if self.bias_rating else NO_RATING

    @property
    def bias_position(self) -> int | None:
        return self.bias_rating.position if self.bias_rating else None


def build_card(article: Article, resolver: SourceMetadataResolver, mode: FeedMode) -> ArticleCard:
    record = resolver.resolve(article.source_domain)
    return ArticleCard(
        article=article,
        source_label=article.source_name or article.source_domain or UNKNOWN_SOURCE,
        published_label=(
            format_timestamp(article.published_at) if article.published_at else UNKNOWN_DATE
        ),
        image_url=article.image_url or FALLBACK_IMAGE_URL,
        favicon_url=record.favicon_url if record else None,
        bias_rating=resolver.bias_rating_of(record),
        verifiable=mode == FeedMode.FAITH,
    )


def format_timestamp(value: datetime) -> str:
    """Format like "March 5, 2024 3:07 PM", in local time for aware values."""
    if value.tzinfo is not None:
        value = value.astimezone()
    hour = value.hour % 12 or 12
    return f"{value:%B} {value.day}, {value.year} {hour}:{value:%M} {value:%p}"


def date_range_label(window: FeedWindow) -> str:
    """Format like "Mar 4, 2024 - Mar 5, 2024"."""
    start, end = window.from_date, window.to_date
    return f"{start:%b} {start.day}, {start.year} - {end:%b} {end.day}, {end.year}"


def source_button_label(domain: str) -> str:
    """Short label for a source toggle: the first label of the domain."""
    return domain.split(".")[0]
