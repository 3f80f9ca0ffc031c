import logging
import os

import anthropic
from anthropic.types import TextBlock

from gloonews.data import APICallUsage, Err, Ok, Usage
from gloonews.query.base import build_prompt, finalize_question

logger = logging.getLogger(__name__)


class ClaudeQuestionGenerator:
    """Generate a search question using Anthropic's Claude API.

    Args:
        model: Anthropic model ID to use.
        api_key: API key (defaults to CLAUDE_API_KEY env var).
        temperature: Sampling temperature.
        max_tokens: Completion token limit.
    """

    def __init__(
        self,
        *,
        model: str = "claude-haiku-4-5-20251001",
        api_key: str | None = None,
        temperature: float = 0.7,
        max_tokens: int = 256,
    ) -> None:
        self._model = model
        resolved_key = api_key or os.environ.get("CLAUDE_API_KEY")
        if not resolved_key:
            raise ValueError("Claude API key required. Pass api_key or set CLAUDE_API_KEY env var.")
        self._client = anthropic.AsyncAnthropic(api_key=resolved_key)
        self._temperature = temperature
        self._max_tokens = max_tokens

    async def generate(self, title: str, content: str) -> tuple[Ok[str] | Err, Usage]:
        try:
            response = await self._client.messages.create(
                model=self._model,
                max_tokens=self._max_tokens,
                temperature=self._temperature,
                messages=[{"role": "user", "content": build_prompt(title, content)}],
            )
        except anthropic.APIError as e:
            logger.warning(f"Claude question generation failed: {e}")
            return (Err(reason=f"Claude API error: {e}", stage="question"), Usage())

        usage = Usage(
            api_calls=[
                APICallUsage(
                    model=self._model,
                    input_tokens=response.usage.input_tokens,
                    output_tokens=response.usage.output_tokens,
                ),
            ],
        )

        text = "".join(block.text for block in response.content if isinstance(block, TextBlock))
        return (finalize_question(text), usage)
