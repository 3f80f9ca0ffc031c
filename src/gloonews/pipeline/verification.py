"""Verification pipeline: question → streamed answer → formatted citations."""

import logging
import time
from dataclasses import dataclass, field

from gloonews.answer.base import AnswerClient, UpdateCallback
from gloonews.answer.formatter import Span, format_answer, render_markup
from gloonews.data import AnswerResult, Article, Err, Ok, Usage
from gloonews.query.base import QuestionGenerator
from gloonews.run_logger import RunLogger

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Verification:
    """A completed verification of one article."""

    article_id: str
    question: str
    answer: AnswerResult
    spans: tuple[Span, ...]
    markup: str
    usage: Usage = field(default_factory=Usage, compare=False)


class VerificationPipeline:
    """Cross-check an article by asking the answer service about it.

    Flow:
    1. The question generator turns the title and body into a question
    2. The answer client streams an answer with citations
    3. Citation markers are resolved into links and rendered as safe markup

    A failure in step 1 or 2 short-circuits and is returned as ``Err``.

    Args:
        generator: Question generator.
        answer_client: Streaming answer client.
        run_logger: Optional RunLogger for per-stage records.
    """

    def __init__(
        self,
        generator: QuestionGenerator,
        answer_client: AnswerClient,
        run_logger: RunLogger | None = None,
    ) -> None:
        self._generator = generator
        self._answer_client = answer_client
        self._run_logger = run_logger

    async def run(
        self,
        article: Article,
        *,
        on_update: UpdateCallback | None = None,
    ) -> Ok[Verification] | Err:
        """Verify one article.

        Args:
            article: The article to cross-check.
            on_update: Receives partial answers while the answer streams.

        Returns:
            The verification, or ``Err`` naming the failed stage.
        """
        run_id = None
        if self._run_logger:
            run_id = self._run_logger.start_run(article.article_id, article)

        total_usage = Usage()

        # Step 1: Question
        t0 = time.monotonic()
        question_result, gen_usage = await self._generator.generate(article.title, article.content)
        total_usage += gen_usage
        if self._run_logger:
            self._run_logger.log_stage(
                run_id,
                stage="question",
                component=type(self._generator).__name__,
                input_data={"title": article.title},
                output_data=question_result,
                usage=gen_usage,
                duration_seconds=time.monotonic() - t0,
            )
        if isinstance(question_result, Err):
            return self._fail(run_id, article, question_result, total_usage)
        question = question_result.value

        # Step 2: Answer
        t0 = time.monotonic()
        answer_result = await self._answer_client.ask(question, on_update=on_update)
        total_usage += Usage(perigon_requests=1)
        if self._run_logger:
            self._run_logger.log_stage(
                run_id,
                stage="answer",
                component=type(self._answer_client).__name__,
                input_data=question,
                output_data=answer_result,
                usage=None,
                duration_seconds=time.monotonic() - t0,
            )
        if isinstance(answer_result, Err):
            return self._fail(run_id, article, answer_result, total_usage)
        answer = answer_result.value

        # Step 3: Format
        spans = format_answer(answer.text, answer.citations)
        verification = Verification(
            article_id=article.article_id,
            question=question,
            answer=answer,
            spans=spans,
            markup=render_markup(spans),
            usage=total_usage,
        )
        logger.info(
            f"Verified {article.article_id}: {len(answer.text)} chars, "
            f"{len(answer.citations)} citations"
        )
        if self._run_logger:
            self._run_logger.finish_run(run_id, error=None, usage=total_usage)
        return Ok(verification)

    def _fail(self, run_id: str | None, article: Article, err: Err, usage: Usage) -> Err:
        logger.warning(f"Verification of {article.article_id} failed at {err.stage}: {err.reason}")
        if self._run_logger:
            self._run_logger.finish_run(run_id, error=err.reason, usage=usage)
        return err
