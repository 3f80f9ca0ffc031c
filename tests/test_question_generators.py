"""Tests for the question generators."""

from unittest.mock import AsyncMock, MagicMock

import anthropic
import httpx
import pytest
from anthropic.types import TextBlock

from gloonews.data import Err, Ok, Usage
from gloonews.query import (
    LENGTH_CONSTRAINT,
    ClaudeQuestionGenerator,
    NoOpQuestionGenerator,
    OpenAIQuestionGenerator,
    build_prompt,
)


def test_build_prompt_embeds_title_and_body_verbatim() -> None:
    prompt = build_prompt("Church opens shelter", "The shelter has 40 beds.")
    assert prompt == (
        'There is a news article with the following content "Church opens shelter" '
        '"The shelter has 40 beds.". generate a brief question to ask a search engine '
        "about this article"
    )


def test_length_constraint() -> None:
    assert LENGTH_CONSTRAINT == " in less than 200 words"


# -- OpenAI --


def _completion(content: object) -> dict:
    return {
        "model": "gpt-3.5-turbo-0125",
        "choices": [{"message": {"role": "assistant", "content": content}}],
        "usage": {"prompt_tokens": 42, "completion_tokens": 9},
    }


class TestOpenAIQuestionGenerator:
    """Tests for OpenAIQuestionGenerator."""

    @pytest.fixture
    def generator(self) -> OpenAIQuestionGenerator:
        return OpenAIQuestionGenerator(api_key="test-key")

    def test_init_uses_env_var(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OPENAI_API_KEY", "env-key")
        assert OpenAIQuestionGenerator()._api_key == "env-key"

    def test_init_requires_api_key(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        with pytest.raises(ValueError, match="API key required"):
            OpenAIQuestionGenerator()

    async def test_generate_returns_question(
        self, generator: OpenAIQuestionGenerator, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        captured: dict = {}
        response = MagicMock()
        response.json.return_value = _completion("  What did the shelter open?\n")
        response.raise_for_status = MagicMock()

        async def mock_post(self, url, json=None, headers=None):
            captured.update(url=url, json=json, headers=headers)
            return response

        monkeypatch.setattr(httpx.AsyncClient, "post", mock_post)

        result, usage = await generator.generate("Title", "Body")

        assert result == Ok("What did the shelter open? in less than 200 words")
        assert captured["url"] == "https://api.openai.com/v1/chat/completions"
        assert captured["headers"]["Authorization"] == "Bearer test-key"
        assert captured["json"]["model"] == "gpt-3.5-turbo"
        assert captured["json"]["temperature"] == 0.7
        assert captured["json"]["messages"] == [
            {"role": "user", "content": build_prompt("Title", "Body")}
        ]
        assert usage.input_tokens == 42
        assert usage.output_tokens == 9
        assert usage.api_calls[0].model == "gpt-3.5-turbo-0125"

    async def test_transport_failure_is_err(
        self, generator: OpenAIQuestionGenerator, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        async def mock_post(self, url, json=None, headers=None):
            raise httpx.ConnectError("unreachable")

        monkeypatch.setattr(httpx.AsyncClient, "post", mock_post)

        result, usage = await generator.generate("Title", "Body")

        assert isinstance(result, Err)
        assert result.stage == "question"
        assert usage.api_calls == []

    async def test_status_failure_is_err(
        self, generator: OpenAIQuestionGenerator, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        response = MagicMock()
        response.raise_for_status.side_effect = httpx.HTTPStatusError(
            "unauthorized",
            request=httpx.Request("POST", "https://api.openai.com/v1/chat/completions"),
            response=httpx.Response(401),
        )

        async def mock_post(self, url, json=None, headers=None):
            return response

        monkeypatch.setattr(httpx.AsyncClient, "post", mock_post)

        result, _ = await generator.generate("Title", "Body")

        assert isinstance(result, Err)
        assert "401" in result.reason

    @pytest.mark.parametrize("data", [{"choices": []}, {"error": "x"}, _completion(None)])
    async def test_malformed_response_is_err(
        self,
        generator: OpenAIQuestionGenerator,
        monkeypatch: pytest.MonkeyPatch,
        data: dict,
    ) -> None:
        response = MagicMock()
        response.json.return_value = data
        response.raise_for_status = MagicMock()

        async def mock_post(self, url, json=None, headers=None):
            return response

        monkeypatch.setattr(httpx.AsyncClient, "post", mock_post)

        result, _ = await generator.generate("Title", "Body")

        assert isinstance(result, Err)
        assert result.stage == "question"

    async def test_blank_completion_is_err(
        self, generator: OpenAIQuestionGenerator, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        response = MagicMock()
        response.json.return_value = _completion("   ")
        response.raise_for_status = MagicMock()

        async def mock_post(self, url, json=None, headers=None):
            return response

        monkeypatch.setattr(httpx.AsyncClient, "post", mock_post)

        result, _ = await generator.generate("Title", "Body")

        assert isinstance(result, Err)


# -- Claude --


def _claude_response(text: str) -> MagicMock:
    usage = MagicMock()
    usage.input_tokens = 120
    usage.output_tokens = 15
    response = MagicMock()
    response.content = [TextBlock(type="text", text=text)]
    response.usage = usage
    return response


class TestClaudeQuestionGenerator:
    """Tests for ClaudeQuestionGenerator."""

    def test_init_requires_api_key(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("CLAUDE_API_KEY", raising=False)
        with pytest.raises(ValueError, match="API key required"):
            ClaudeQuestionGenerator()

    async def test_generate_returns_question(self) -> None:
        gen = ClaudeQuestionGenerator(api_key="test-key")
        object.__setattr__(
            gen._client.messages,
            "create",
            AsyncMock(return_value=_claude_response("Is the shelter open?\n")),
        )

        result, usage = await gen.generate("Title", "Body")

        assert result == Ok("Is the shelter open? in less than 200 words")
        assert usage.input_tokens == 120
        assert usage.api_calls[0].model == "claude-haiku-4-5-20251001"

        mock_create: AsyncMock = gen._client.messages.create  # type: ignore[assignment]
        call_kwargs = dict(mock_create.call_args.kwargs)
        assert call_kwargs["temperature"] == 0.7
        assert call_kwargs["messages"][0]["content"] == build_prompt("Title", "Body")

    async def test_api_error_is_err(self) -> None:
        gen = ClaudeQuestionGenerator(api_key="test-key")
        error = anthropic.APIConnectionError(
            request=httpx.Request("POST", "https://api.anthropic.com/v1/messages")
        )
        object.__setattr__(gen._client.messages, "create", AsyncMock(side_effect=error))

        result, usage = await gen.generate("Title", "Body")

        assert isinstance(result, Err)
        assert result.stage == "question"
        assert usage.api_calls == []


# -- NoOp --


async def test_noop_uses_title() -> None:
    gen = NoOpQuestionGenerator()
    result, usage = await gen.generate("Church opens shelter", "ignored")

    assert result == Ok("Church opens shelter in less than 200 words")
    assert isinstance(usage, Usage)
    assert usage.api_calls == []


async def test_noop_empty_title_is_err() -> None:
    result, _ = await NoOpQuestionGenerator().generate("", "Body")
    assert isinstance(result, Err)
