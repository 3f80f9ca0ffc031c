"""Streaming client for the Perigon answers chatbot."""

import asyncio
import logging
import os

import httpx

from gloonews.answer.base import UpdateCallback
from gloonews.answer.stream import AnswerAccumulator, FrameDecoder
from gloonews.data import AnswerResult, Err, Ok

PERIGON_CHAT_URL = "https://api.goperigon.com/v1/answers/chatbot/threads/chat"

logger = logging.getLogger(__name__)


class PerigonAnswerClient:
    """Ask the Perigon chatbot a question and collect the streamed answer.

    The response body is newline-delimited JSON. ``RESPONSE_CHUNK`` events
    extend the answer text and ``CITATION`` events add a citation; other
    event types are ignored.

    Args:
        api_key: Perigon API key (defaults to PERIGON_API_KEY env var).
        api_url: Chat endpoint.
        thread_id: Chat thread to post into.
        connect_timeout: Seconds allowed to establish the connection.
        stream_timeout: Seconds allowed for the whole answer stream.
        transport: Optional httpx transport (used in tests).
    """

    def __init__(
        self,
        *,
        api_key: str | None = None,
        api_url: str = PERIGON_CHAT_URL,
        thread_id: int = 1,
        connect_timeout: float = 10.0,
        stream_timeout: float = 120.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key or os.environ.get("PERIGON_API_KEY")
        if not self._api_key:
            raise ValueError(
                "Perigon API key required. Pass api_key or set PERIGON_API_KEY env var."
            )
        self._api_url = api_url
        self._thread_id = thread_id
        self._timeout = httpx.Timeout(connect_timeout, read=stream_timeout)
        self._stream_timeout = stream_timeout
        self._transport = transport

    async def ask(
        self,
        question: str,
        *,
        on_update: UpdateCallback | None = None,
    ) -> Ok[AnswerResult] | Err:
        """Stream an answer for ``question``.

        Args:
            question: The search question.
            on_update: Called with a partial result after each chunk or citation.

        Returns:
            The accumulated answer, or ``Err`` on transport failure, a
            non-success status, or when the stream exceeds its timeout.
        """
        payload = {"content": question, "stream": True, "threadId": self._thread_id}
        headers = {"Authorization": f"Bearer {self._api_key}"}
        decoder = FrameDecoder()
        accumulator = AnswerAccumulator()

        def apply(events: list[dict]) -> None:
            for event in events:
                if accumulator.add(event) and on_update is not None:
                    on_update(accumulator.snapshot())

        try:
            async with asyncio.timeout(self._stream_timeout):
                async with httpx.AsyncClient(
                    timeout=self._timeout, transport=self._transport
                ) as client:
                    async with client.stream(
                        "POST", self._api_url, json=payload, headers=headers
                    ) as response:
                        response.raise_for_status()
                        async for text in response.aiter_text():
                            apply(decoder.feed(text))
                        apply(decoder.flush())
        except httpx.HTTPStatusError as e:
            logger.warning(f"Perigon answer request failed with status {e.response.status_code}")
            return Err(reason=f"HTTP error {e.response.status_code}", stage="answer")
        except httpx.HTTPError as e:
            logger.warning(f"Perigon answer stream failed: {e!r}")
            return Err(reason=f"Stream failed: {e!r}", stage="answer")
        except TimeoutError:
            logger.warning(f"Perigon answer stream timed out after {self._stream_timeout}s")
            return Err(reason="Answer stream timed out", stage="answer")

        return Ok(accumulator.result())
