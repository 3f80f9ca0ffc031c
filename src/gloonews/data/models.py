"""Core data models for gloonews."""

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import StrEnum
from typing import Generic, Literal, TypeVar

T = TypeVar("T")


class FeedMode(StrEnum):
    """Which feed is displayed."""

    FAITH = "faith"
    MAINSTREAM = "mainstream"


class BiasRating(StrEnum):
    """Political lean of a news source on a five-point scale.

    The values match the labels used by the rating providers (MBFC, AllSides,
    Ad Fontes) in the source metadata table.
    """

    LEFT = "Left"
    LEAN_LEFT = "Lean Left"
    CENTER = "Center"
    LEAN_RIGHT = "Lean Right"
    RIGHT = "Right"

    @property
    def position(self) -> int:
        """Position on a 0-100 slider (Left=0, Right=100)."""
        return _BIAS_POSITIONS[self]

    @classmethod
    def parse(cls, label: str) -> "BiasRating | None":
        """Match a provider label case-insensitively; ``None`` if off the scale."""
        normalized = " ".join(label.split()).lower()
        for rating in cls:
            if rating.value.lower() == normalized:
                return rating
        return None


_BIAS_POSITIONS: dict[BiasRating, int] = {
    BiasRating.LEFT: 0,
    BiasRating.LEAN_LEFT: 25,
    BiasRating.CENTER: 50,
    BiasRating.LEAN_RIGHT: 75,
    BiasRating.RIGHT: 100,
}


class VerificationState(StrEnum):
    """Lifecycle of a per-article verification request."""

    IDLE = "idle"
    IN_FLIGHT = "in_flight"
    COMPLETED = "completed"


@dataclass(frozen=True)
class Article:
    """A news article normalized from either feed shape."""

    article_id: str
    title: str = ""
    content: str = ""
    published_at: datetime | None = None
    source_domain: str = ""
    source_name: str = ""
    image_url: str | None = None
    url: str | None = None


@dataclass(frozen=True)
class SourceRecord:
    """Static display metadata for a news domain.

    One raw rating field per provider; see ``bias_rating_of`` for the
    resolution order.
    """

    domain: str
    favicon_url: str | None = None
    mbfc_bias_rating: str | None = None
    allsides_bias_rating: str | None = None
    adfontes_bias_rating: str | None = None


@dataclass(frozen=True)
class FeedWindow:
    """A one-day date window ``[from_date, to_date]`` relative to a reference day."""

    from_date: date
    to_date: date

    @classmethod
    def for_offset(cls, today: date, offset: int) -> "FeedWindow":
        if offset < 0:
            raise ValueError(f"Day offset must be >= 0, got {offset}")
        return cls(
            from_date=today - timedelta(days=offset + 1),
            to_date=today - timedelta(days=offset),
        )


@dataclass(frozen=True)
class FeedFilters:
    """Selected source domains (faith mode only) and category tags."""

    sources: tuple[str, ...] = ()
    categories: tuple[str, ...] = ()


@dataclass(frozen=True)
class ViewParams:
    """Everything that determines which articles are on screen.

    Instances are replaced, never mutated; each ``with_*``/``toggle_*``/
    ``shift_date`` call returns a new value.
    """

    mode: FeedMode = FeedMode.FAITH
    offset: int = 0
    filters: FeedFilters = field(default_factory=FeedFilters)

    def with_mode(self, mode: FeedMode) -> "ViewParams":
        return ViewParams(mode=mode, offset=self.offset, filters=self.filters)

    def shift_date(self, direction: Literal["older", "newer"]) -> "ViewParams":
        if direction == "older":
            offset = self.offset + 1
        else:
            offset = max(self.offset - 1, 0)
        return ViewParams(mode=self.mode, offset=offset, filters=self.filters)

    def toggle_source(self, domain: str) -> "ViewParams":
        sources = _toggle(self.filters.sources, domain)
        filters = FeedFilters(sources=sources, categories=self.filters.categories)
        return ViewParams(mode=self.mode, offset=self.offset, filters=filters)

    def toggle_category(self, category: str) -> "ViewParams":
        categories = _toggle(self.filters.categories, category)
        filters = FeedFilters(sources=self.filters.sources, categories=categories)
        return ViewParams(mode=self.mode, offset=self.offset, filters=filters)


def _toggle(items: tuple[str, ...], item: str) -> tuple[str, ...]:
    if item in items:
        return tuple(i for i in items if i != item)
    return (*items, item)


@dataclass(frozen=True)
class Citation:
    """A source URL referenced by ``[n]`` markers in an answer."""

    sequence_index: int
    url: str


@dataclass(frozen=True)
class AnswerResult:
    """Answer text and citations accumulated from one answer stream."""

    text: str = ""
    citations: tuple[Citation, ...] = ()


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome carrying a value."""

    value: T


@dataclass(frozen=True)
class Err:
    """Failed outcome with a human-readable reason.

    ``stage`` names the step that failed ("question", "answer", ...).
    """

    reason: str
    stage: str = ""


@dataclass(frozen=True)
class APICallUsage:
    """Usage from a single language-model call."""

    model: str
    input_tokens: int = 0
    output_tokens: int = 0


@dataclass
class Usage:
    """Accumulated API usage across verification stages."""

    api_calls: list[APICallUsage] = field(default_factory=list)
    perigon_requests: int = 0

    @property
    def input_tokens(self) -> int:
        return sum(c.input_tokens for c in self.api_calls)

    @property
    def output_tokens(self) -> int:
        return sum(c.output_tokens for c in self.api_calls)

    def __add__(self, other: "Usage") -> "Usage":
        return Usage(
            api_calls=self.api_calls + other.api_calls,
            perigon_requests=self.perigon_requests + other.perigon_requests,
        )

    def __iadd__(self, other: "Usage") -> "Usage":
        self.api_calls.extend(other.api_calls)
        self.perigon_requests += other.perigon_requests
        return self
