from collections.abc import Callable
from typing import Protocol

from gloonews.data import AnswerResult, Err, Ok

UpdateCallback = Callable[[AnswerResult], None]


class AnswerClient(Protocol):
    """Interface for answering a question with cited sources."""

    async def ask(
        self,
        question: str,
        *,
        on_update: UpdateCallback | None = None,
    ) -> Ok[AnswerResult] | Err:
        """Answer a question.

        Args:
            question: The search question.
            on_update: Called with a partial result each time the answer grows.

        Returns:
            The complete answer, or ``Err`` if the answer is unavailable.
        """
        ...
