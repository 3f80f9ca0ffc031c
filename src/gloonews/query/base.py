from typing import Protocol

from gloonews.data import Err, Ok, Usage

PROMPT_TEMPLATE = (
    'There is a news article with the following content "{title}" "{content}". '
    "generate a brief question to ask a search engine about this article"
)
LENGTH_CONSTRAINT = " in less than 200 words"


def build_prompt(title: str, content: str) -> str:
    """Embed the article title and body verbatim into the question prompt."""
    return PROMPT_TEMPLATE.format(title=title, content=content)


def finalize_question(raw: str) -> Ok[str] | Err:
    """Trim a model completion and append the answer length constraint."""
    question = raw.strip()
    if not question:
        return Err(reason="Question generator returned an empty completion", stage="question")
    return Ok(question + LENGTH_CONSTRAINT)


class QuestionGenerator(Protocol):
    """Interface for turning an article into a search question."""

    async def generate(self, title: str, content: str) -> tuple[Ok[str] | Err, Usage]: ...
