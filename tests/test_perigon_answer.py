"""Tests for PerigonAnswerClient."""

import asyncio
import json
from collections.abc import AsyncIterator

import httpx
import pytest

from gloonews.answer import PerigonAnswerClient
from gloonews.data import AnswerResult, Citation, Err, Ok


def _frames(*events: dict) -> bytes:
    return "".join(json.dumps(e) + "\n" for e in events).encode()


CHUNK_A = {"type": "RESPONSE_CHUNK", "content": "Perigon Response: Shelter "}
CHUNK_B = {"type": "RESPONSE_CHUNK", "content": "opened [1]. "}
CITE_1 = {"type": "CITATION", "sequenceIndex": 1, "url": "https://cbn.com/a"}


def _client(handler) -> PerigonAnswerClient:
    return PerigonAnswerClient(api_key="test-key", transport=httpx.MockTransport(handler))


def test_init_requires_api_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("PERIGON_API_KEY", raising=False)
    with pytest.raises(ValueError, match="API key required"):
        PerigonAnswerClient()


async def test_ask_streams_answer() -> None:
    captured: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["url"] = str(request.url)
        captured["auth"] = request.headers["Authorization"]
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, content=_frames(CHUNK_A, CITE_1, CHUNK_B))

    result = await _client(handler).ask("What opened?")

    assert result == Ok(
        AnswerResult(
            text="Perigon Response: Shelter opened [1].",
            citations=(Citation(sequence_index=1, url="https://cbn.com/a"),),
        )
    )
    assert captured["url"] == "https://api.goperigon.com/v1/answers/chatbot/threads/chat"
    assert captured["auth"] == "Bearer test-key"
    assert captured["body"] == {"content": "What opened?", "stream": True, "threadId": 1}


async def test_ask_reassembles_frames_split_across_chunks() -> None:
    body = _frames(CHUNK_A, CHUNK_B)

    async def stream() -> AsyncIterator[bytes]:
        for i in range(0, len(body), 7):
            yield body[i : i + 7]

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=stream())

    result = await _client(handler).ask("q")

    assert isinstance(result, Ok)
    assert result.value.text == "Perigon Response: Shelter opened [1]."


async def test_on_update_receives_growing_snapshots() -> None:
    updates: list[AnswerResult] = []

    def handler(request: httpx.Request) -> httpx.Response:
        content = _frames(CHUNK_A, {"type": "PING"}, CITE_1, CHUNK_B)
        return httpx.Response(200, content=content)

    await _client(handler).ask("q", on_update=updates.append)

    assert [u.text for u in updates] == [
        "Perigon Response: Shelter ",
        "Perigon Response: Shelter ",
        "Perigon Response: Shelter opened [1]. ",
    ]
    assert [len(u.citations) for u in updates] == [0, 1, 1]


async def test_final_frame_without_newline_is_kept() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=_frames(CHUNK_A) + json.dumps(CHUNK_B).encode())

    result = await _client(handler).ask("q")

    assert isinstance(result, Ok)
    assert result.value.text.endswith("opened [1].")


async def test_status_error_is_err() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, content=b"oops")

    result = await _client(handler).ask("q")

    assert isinstance(result, Err)
    assert result.stage == "answer"
    assert "500" in result.reason


async def test_connection_error_is_err() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("unreachable", request=request)

    result = await _client(handler).ask("q")

    assert isinstance(result, Err)
    assert result.stage == "answer"


async def test_stream_interrupted_is_err() -> None:
    async def stream() -> AsyncIterator[bytes]:
        yield _frames(CHUNK_A)
        raise httpx.ReadError("connection reset")

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=stream())

    result = await _client(handler).ask("q")

    assert isinstance(result, Err)
    assert result.stage == "answer"


async def test_stream_timeout_is_err() -> None:
    async def stream() -> AsyncIterator[bytes]:
        yield _frames(CHUNK_A)
        await asyncio.sleep(5)
        yield _frames(CHUNK_B)

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=stream())

    client = PerigonAnswerClient(
        api_key="test-key", stream_timeout=0.05, transport=httpx.MockTransport(handler)
    )
    result = await client.ask("q")

    assert result == Err(reason="Answer stream timed out", stage="answer")


async def test_empty_stream_is_empty_answer() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"")

    assert await _client(handler).ask("q") == Ok(AnswerResult())
