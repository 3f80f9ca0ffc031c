"""Turn answer text into safe rich text with live citation links.

The answer comes from an external service, so it is never emitted as raw
markup. ``format_answer`` produces typed spans and ``render_markup`` escapes
every fragment when rendering them.

Transforms, in order:

1. ``**X**`` becomes emphasis around ``X`` (non-greedy, not nested).
2. ``[n]`` becomes a link to the citation with ``sequence_index == n``;
   unknown indices stay as literal text. Later citations override earlier
   ones with the same index.
3. A leading "Perigon Response:" label is removed (case-insensitive).
"""

import html
import re
from dataclasses import dataclass
from urllib.parse import urlparse

from gloonews.data import Citation

BOLD_RE = re.compile(r"\*\*(.*?)\*\*")
CITATION_RE = re.compile(r"\[([0-9]{1,9})\]")
PREFIX_RE = re.compile(r"^Perigon Response:\s*", re.IGNORECASE)

_SAFE_SCHEMES = {"http", "https"}


@dataclass(frozen=True)
class PlainSpan:
    text: str


@dataclass(frozen=True)
class LinkSpan:
    label: str
    url: str


@dataclass(frozen=True)
class EmphasisSpan:
    children: tuple[PlainSpan | LinkSpan, ...]


Span = PlainSpan | LinkSpan | EmphasisSpan


def citation_map(citations: list[Citation] | tuple[Citation, ...]) -> dict[int, str]:
    """Index citations by sequence number; the last citation for an index wins."""
    urls: dict[int, str] = {}
    for citation in citations:
        if _is_safe_url(citation.url):
            urls[citation.sequence_index] = citation.url
    return urls


def format_answer(
    text: str, citations: list[Citation] | tuple[Citation, ...]
) -> tuple[Span, ...]:
    """Parse answer text into spans, resolving citation markers.

    Args:
        text: Raw answer text.
        citations: Citations collected while streaming the answer.

    Returns:
        Spans in reading order. Empty input gives no spans.
    """
    if not text:
        return ()

    urls = citation_map(citations)
    spans: list[Span] = []
    pos = 0
    for match in BOLD_RE.finditer(text):
        spans.extend(_link_spans(text[pos : match.start()], urls))
        spans.append(EmphasisSpan(children=tuple(_link_spans(match.group(1), urls))))
        pos = match.end()
    spans.extend(_link_spans(text[pos:], urls))

    return tuple(_strip_prefix(spans))


def _link_spans(text: str, urls: dict[int, str]) -> list[PlainSpan | LinkSpan]:
    spans: list[PlainSpan | LinkSpan] = []
    buffer = ""
    pos = 0
    for match in CITATION_RE.finditer(text):
        url = urls.get(int(match.group(1)))
        if url is None:
            continue
        buffer += text[pos : match.start()]
        if buffer:
            spans.append(PlainSpan(buffer))
            buffer = ""
        spans.append(LinkSpan(label=f"[{int(match.group(1))}]", url=url))
        pos = match.end()
    buffer += text[pos:]
    if buffer:
        spans.append(PlainSpan(buffer))
    return spans


def _strip_prefix(spans: list[Span]) -> list[Span]:
    if not spans or not isinstance(spans[0], PlainSpan):
        return spans
    stripped = PREFIX_RE.sub("", spans[0].text, count=1)
    if stripped == spans[0].text:
        return spans
    if not stripped:
        return spans[1:]
    return [PlainSpan(stripped), *spans[1:]]


def _is_safe_url(url: str) -> bool:
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    return parsed.scheme.lower() in _SAFE_SCHEMES and bool(parsed.netloc)


def render_markup(spans: tuple[Span, ...] | list[Span]) -> str:
    """Render spans as HTML, escaping all text and attribute values."""
    return "".join(_render_span(span) for span in spans)


def _render_span(span: Span) -> str:
    if isinstance(span, PlainSpan):
        return html.escape(span.text, quote=False)
    if isinstance(span, LinkSpan):
        return (
            f'<a href="{html.escape(span.url, quote=True)}" target="_blank" '
            f'rel="noopener noreferrer">{html.escape(span.label, quote=False)}</a>'
        )
    return f"<strong>{''.join(_render_span(child) for child in span.children)}</strong>"


def render_text(spans: tuple[Span, ...] | list[Span]) -> str:
    """Render spans for a terminal: links as ``[n](url)``, emphasis unmarked."""
    parts: list[str] = []
    for span in spans:
        if isinstance(span, EmphasisSpan):
            parts.append(render_text(span.children))
        elif isinstance(span, LinkSpan):
            parts.append(f"{span.label}({span.url})")
        else:
            parts.append(span.text)
    return "".join(parts)


def format_citations(text: str, citations: list[Citation] | tuple[Citation, ...]) -> str:
    """Format answer text straight to escaped HTML markup."""
    return render_markup(format_answer(text, citations))
