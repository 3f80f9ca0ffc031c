"""Verifier protocol for cross-checking articles."""

from typing import TYPE_CHECKING, Protocol

from gloonews.answer.base import UpdateCallback
from gloonews.data import Article, Err, Ok

if TYPE_CHECKING:
    from gloonews.pipeline.verification import Verification


class Verifier(Protocol):
    """Interface for end-to-end article verification."""

    async def run(
        self,
        article: Article,
        *,
        on_update: UpdateCallback | None = None,
    ) -> "Ok[Verification] | Err":
        """Cross-check an article against the answer service.

        Args:
            article: The article to verify.
            on_update: Receives partial answers while streaming.

        Returns:
            The verification, or ``Err`` naming the failed stage.
        """
        ...
