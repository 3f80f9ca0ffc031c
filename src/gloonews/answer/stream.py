"""Incremental decoding of newline-delimited JSON answer streams."""

import json
import logging
from typing import Any

from gloonews.data import AnswerResult, Citation

RESPONSE_CHUNK = "RESPONSE_CHUNK"
CITATION = "CITATION"

logger = logging.getLogger(__name__)


class FrameDecoder:
    """Split streamed text into JSON frames, one per line.

    Frames may arrive split across transport chunks; the partial tail is
    buffered until its newline arrives or the stream ends.
    """

    def __init__(self) -> None:
        self._buffer = ""

    def feed(self, text: str) -> list[dict[str, Any]]:
        """Consume a chunk and return the events of every completed line."""
        self._buffer += text
        *lines, self._buffer = self._buffer.split("\n")
        events: list[dict[str, Any]] = []
        for line in lines:
            event = _decode(line, final=False)
            if event is not None:
                events.append(event)
        return events

    def flush(self) -> list[dict[str, Any]]:
        """Decode whatever remains after end-of-stream.

        A complete final frame without a trailing newline is returned; an
        incomplete fragment is dropped.
        """
        tail, self._buffer = self._buffer, ""
        event = _decode(tail, final=True)
        return [event] if event is not None else []


def _decode(line: str, *, final: bool) -> dict[str, Any] | None:
    line = line.strip()
    if not line:
        return None
    try:
        event = json.loads(line)
    except json.JSONDecodeError:
        if final:
            logger.debug(f"Discarding incomplete trailing frame ({len(line)} chars)")
        else:
            logger.warning(f"Skipping malformed stream frame: {line[:80]!r}")
        return None
    if not isinstance(event, dict):
        return None
    return event


class AnswerAccumulator:
    """Accumulate answer text and citations in arrival order."""

    def __init__(self) -> None:
        self._chunks: list[str] = []
        self._citations: list[Citation] = []

    def add(self, event: dict[str, Any]) -> bool:
        """Apply one event. Returns True if it changed the answer."""
        event_type = event.get("type")
        if event_type == RESPONSE_CHUNK:
            content = event.get("content")
            if not isinstance(content, str) or not content:
                return False
            self._chunks.append(content)
            return True
        if event_type == CITATION:
            citation = _parse_citation(event)
            if citation is None:
                return False
            self._citations.append(citation)
            return True
        return False

    def snapshot(self) -> AnswerResult:
        return AnswerResult(text="".join(self._chunks), citations=tuple(self._citations))

    def result(self) -> AnswerResult:
        """Final result, with surrounding whitespace removed from the text."""
        return AnswerResult(text="".join(self._chunks).strip(), citations=tuple(self._citations))


def _parse_citation(event: dict[str, Any]) -> Citation | None:
    url = event.get("url")
    try:
        index = int(event.get("sequenceIndex"))  # type: ignore[arg-type]
    except (TypeError, ValueError):
        logger.warning(f"Ignoring citation without a valid sequenceIndex: {event!r}")
        return None
    if not isinstance(url, str) or not url:
        logger.warning(f"Ignoring citation {index} without a url")
        return None
    return Citation(sequence_index=index, url=url)
