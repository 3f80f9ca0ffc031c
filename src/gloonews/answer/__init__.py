from gloonews.answer.base import AnswerClient, UpdateCallback
from gloonews.answer.formatter import (
    EmphasisSpan,
    LinkSpan,
    PlainSpan,
    Span,
    format_answer,
    format_citations,
    render_markup,
    render_text,
)
from gloonews.answer.perigon import PerigonAnswerClient
from gloonews.answer.stream import AnswerAccumulator, FrameDecoder

__all__ = [
    "AnswerAccumulator",
    "AnswerClient",
    "EmphasisSpan",
    "FrameDecoder",
    "LinkSpan",
    "PerigonAnswerClient",
    "PlainSpan",
    "Span",
    "UpdateCallback",
    "format_answer",
    "format_citations",
    "render_markup",
    "render_text",
]
