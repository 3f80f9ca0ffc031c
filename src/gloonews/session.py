"""A news view: the current feed parameters, their articles and verifications."""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from enum import StrEnum

from gloonews.answer.base import UpdateCallback
from gloonews.data import Article, Err, FeedWindow, Ok, VerificationState, ViewParams
from gloonews.display import ArticleCard, build_card
from gloonews.feed.base import FeedError, NewsFeed
from gloonews.pipeline.base import Verifier
from gloonews.pipeline.verification import Verification
from gloonews.sources import SourceMetadataResolver
from gloonews.verify import VerificationCache

FEED_ERROR_MESSAGE = "Failed to fetch news"

logger = logging.getLogger(__name__)


class FeedStatus(StrEnum):
    PENDING = "pending"
    READY = "ready"
    ERROR = "error"


@dataclass(frozen=True)
class FeedState:
    """Outcome of loading one view."""

    params: ViewParams
    window: FeedWindow
    status: FeedStatus
    articles: tuple[Article, ...] = ()
    error: str | None = None


class NewsSession:
    """Drive the feed and verifications for one screen.

    Changing the view parameters starts a new view generation: verification
    work for the previous article set is cancelled and forgotten, and a feed
    response for superseded parameters is discarded.

    Args:
        feed: Feed client.
        verifier: Verification pipeline.
        resolver: Source metadata lookup for cards.
        params: Initial view parameters.
        today: Clock used for the date window.
    """

    def __init__(
        self,
        feed: NewsFeed,
        verifier: Verifier,
        resolver: SourceMetadataResolver | None = None,
        *,
        params: ViewParams | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._feed = feed
        self._verifier = verifier
        self._resolver = resolver or SourceMetadataResolver.empty()
        self._today = today
        self._params = params or ViewParams()
        self._cache: VerificationCache[Ok[Verification] | Err] = VerificationCache()
        self._load_seq = 0
        self._state = FeedState(
            params=self._params,
            window=FeedWindow.for_offset(today(), self._params.offset),
            status=FeedStatus.PENDING,
        )

    @property
    def params(self) -> ViewParams:
        return self._params

    @property
    def state(self) -> FeedState:
        return self._state

    @property
    def generation(self) -> int:
        return self._cache.generation

    async def load(self, params: ViewParams | None = None) -> FeedState:
        """Load the feed for ``params`` (or reload the current view).

        Returns:
            The resulting state. If another ``load`` started while this one
            was waiting on the network, the result is returned but not kept.
        """
        if params is not None and params != self._params:
            self._params = params
            self._cache.reset()

        self._load_seq += 1
        seq = self._load_seq
        current = self._params
        today = self._today()
        window = FeedWindow.for_offset(today, current.offset)
        self._state = FeedState(params=current, window=window, status=FeedStatus.PENDING)

        try:
            articles = await self._feed.fetch(current, today=today)
        except FeedError as e:
            logger.error(f"Error fetching {current.mode} news: {e}")
            state = FeedState(
                params=current, window=window, status=FeedStatus.ERROR, error=FEED_ERROR_MESSAGE
            )
        else:
            state = FeedState(
                params=current, window=window, status=FeedStatus.READY, articles=tuple(articles)
            )

        if seq != self._load_seq:
            logger.debug(f"Discarding stale feed result for {current}")
            return state
        self._state = state
        return state

    def cards(self) -> list[ArticleCard]:
        return [build_card(a, self._resolver, self._params.mode) for a in self._state.articles]

    def verification_state(self, article_id: str) -> VerificationState:
        return self._cache.state(article_id)

    def verification(self, article_id: str) -> Ok[Verification] | Err | None:
        """Completed verification for an article, or None if not finished."""
        return self._cache.result(article_id)

    async def verify(
        self,
        article: Article,
        *,
        on_update: UpdateCallback | None = None,
    ) -> Ok[Verification] | Err:
        """Verify an article, reusing an in-flight or completed run.

        ``on_update`` only applies when this call starts the run.
        """
        if not article.article_id:
            return Err(reason="Article has no identifier", stage="verification")

        task = self._cache.trigger(
            article.article_id,
            lambda: self._verifier.run(article, on_update=on_update),
        )
        try:
            return await asyncio.shield(task)
        except asyncio.CancelledError:
            current = asyncio.current_task()
            if task.cancelled() and (current is None or not current.cancelling()):
                return Err(reason="View changed before verification finished", stage="verification")
            raise
