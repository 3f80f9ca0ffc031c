"""Tests for protocol compliance."""

import pytest

from gloonews.answer import PerigonAnswerClient
from gloonews.data import Err, Ok, Usage
from gloonews.feed import PerigonFeed
from gloonews.pipeline import VerificationPipeline
from gloonews.query import ClaudeQuestionGenerator, NoOpQuestionGenerator


def test_question_generators_match_protocol() -> None:
    """Verify generators structurally match the QuestionGenerator protocol."""
    for gen in (ClaudeQuestionGenerator(api_key="test"), NoOpQuestionGenerator()):
        assert hasattr(gen, "generate")
        assert callable(gen.generate)


class MockQuestionGenerator:
    """A minimal implementation to verify protocol requirements."""

    async def generate(self, title: str, content: str) -> tuple[Ok[str] | Err, Usage]:
        return (Ok(title), Usage())


async def test_mock_generator_satisfies_protocol() -> None:
    """Any class with the right method signature satisfies the protocol."""
    result, usage = await MockQuestionGenerator().generate("t", "c")
    assert result == Ok("t")
    # Type checkers will verify this matches QuestionGenerator


def test_perigon_clients_match_protocols(monkeypatch: pytest.MonkeyPatch) -> None:
    """Verify the Perigon clients match the NewsFeed and AnswerClient protocols."""
    monkeypatch.setenv("PERIGON_API_KEY", "test-key")
    assert callable(PerigonFeed().fetch)
    assert callable(PerigonAnswerClient().ask)


def test_pipeline_matches_verifier_protocol() -> None:
    pipeline = VerificationPipeline(
        generator=NoOpQuestionGenerator(),
        answer_client=PerigonAnswerClient(api_key="test-key"),
    )
    assert callable(pipeline.run)
