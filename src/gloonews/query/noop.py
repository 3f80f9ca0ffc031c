"""No-op question generator that uses the article title as the question."""

from gloonews.data import Err, Ok, Usage
from gloonews.query.base import finalize_question


class NoOpQuestionGenerator:
    """Question generator that makes no API calls.

    The article title is used directly as the question. Useful when no
    language-model key is available; only the Perigon key is then required
    for verification.
    """

    async def generate(self, title: str, content: str) -> tuple[Ok[str] | Err, Usage]:
        """Return the article title as the question.

        Args:
            title: Article title.
            content: Ignored.

        Returns:
            Tuple of (question, empty usage). An empty title is a failure.
        """
        return (finalize_question(title), Usage())
