"""Per-article verification tasks, scoped to a view generation."""

import asyncio
import logging
from collections.abc import Callable, Coroutine
from typing import Any, Generic, TypeVar

from gloonews.data import VerificationState

R = TypeVar("R")

logger = logging.getLogger(__name__)


class VerificationCache(Generic[R]):
    """Track at most one verification task per article.

    ``trigger`` starts work for an idle article and returns the existing task
    for an in-flight or completed one, so results are computed once and never
    refreshed. ``reset`` begins a new view generation: in-flight tasks are
    cancelled and every entry is forgotten.
    """

    def __init__(self) -> None:
        self._generation = 0
        self._tasks: dict[str, asyncio.Task[R]] = {}

    @property
    def generation(self) -> int:
        return self._generation

    def __len__(self) -> int:
        return len(self._tasks)

    def state(self, article_id: str) -> VerificationState:
        task = self._tasks.get(article_id)
        if task is None:
            return VerificationState.IDLE
        if not task.done():
            return VerificationState.IN_FLIGHT
        if _failed(task):
            return VerificationState.IDLE
        return VerificationState.COMPLETED

    def result(self, article_id: str) -> R | None:
        """Return the completed result for an article, or None.

        A task that raised or was cancelled has no result.
        """
        task = self._tasks.get(article_id)
        if task is None or not task.done() or _failed(task):
            return None
        return task.result()

    def trigger(
        self,
        article_id: str,
        run: Callable[[], Coroutine[Any, Any, R]],
    ) -> asyncio.Task[R]:
        """Start ``run`` for an idle article; otherwise return the existing task.

        Must be called from a running event loop.
        """
        existing = self._tasks.get(article_id)
        if existing is not None and not (existing.done() and _failed(existing)):
            return existing

        task = asyncio.create_task(run(), name=f"verify:{article_id}")
        self._tasks[article_id] = task
        generation = self._generation
        task.add_done_callback(lambda t: self._on_done(article_id, generation, t))
        return task

    def reset(self) -> int:
        """Cancel in-flight work, drop all entries and start a new generation."""
        cancelled = 0
        for task in self._tasks.values():
            if not task.done():
                task.cancel()
                cancelled += 1
        if cancelled:
            logger.info(f"Cancelled {cancelled} in-flight verification(s)")
        self._tasks.clear()
        self._generation += 1
        return self._generation

    def _on_done(self, article_id: str, generation: int, task: asyncio.Task[R]) -> None:
        if generation != self._generation or self._tasks.get(article_id) is not task:
            return
        # Failed or cancelled tasks are forgotten so the article can be retried.
        if task.cancelled():
            del self._tasks[article_id]
        elif task.exception() is not None:
            logger.error(f"Verification for {article_id} raised: {task.exception()!r}")
            del self._tasks[article_id]


def _failed(task: asyncio.Task[Any]) -> bool:
    return task.cancelled() or task.exception() is not None
