"""Question generation through an OpenAI-compatible chat completions endpoint."""

import logging
import os
from typing import Any

import httpx

from gloonews.data import APICallUsage, Err, Ok, Usage
from gloonews.query.base import build_prompt, finalize_question

OPENAI_API_URL = "https://api.openai.com/v1/chat/completions"

logger = logging.getLogger(__name__)


class OpenAIQuestionGenerator:
    """Generate a search question with a single chat completion.

    Args:
        model: Chat model ID.
        api_key: API key (defaults to OPENAI_API_KEY env var).
        temperature: Sampling temperature.
        api_url: Chat completions endpoint.
        timeout: HTTP timeout in seconds.
    """

    def __init__(
        self,
        *,
        model: str = "gpt-3.5-turbo",
        api_key: str | None = None,
        temperature: float = 0.7,
        api_url: str = OPENAI_API_URL,
        timeout: float = 30.0,
    ) -> None:
        self._model = model
        self._api_key = api_key or os.environ.get("OPENAI_API_KEY")
        if not self._api_key:
            raise ValueError("OpenAI API key required. Pass api_key or set OPENAI_API_KEY env var.")
        self._temperature = temperature
        self._api_url = api_url
        self._timeout = timeout

    async def generate(self, title: str, content: str) -> tuple[Ok[str] | Err, Usage]:
        """Ask the model for a question about an article.

        Returns:
            Tuple of (question or failure, usage). Transport and response errors
            are returned as ``Err``, never raised.
        """
        payload = {
            "model": self._model,
            "messages": [{"role": "user", "content": build_prompt(title, content)}],
            "temperature": self._temperature,
        }
        headers = {"Authorization": f"Bearer {self._api_key}"}

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(self._api_url, json=payload, headers=headers)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            logger.warning(f"Question generation failed with status {e.response.status_code}")
            return (
                Err(reason=f"HTTP error {e.response.status_code}", stage="question"),
                Usage(),
            )
        except httpx.HTTPError as e:
            logger.warning(f"Question generation request failed: {e}")
            return (Err(reason=f"Request failed: {e}", stage="question"), Usage())
        except ValueError:
            logger.warning("Question generation response was not valid JSON")
            return (Err(reason="Invalid JSON response", stage="question"), Usage())

        usage = Usage(api_calls=[_usage_from(data, self._model)])
        try:
            raw = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            logger.warning("Unexpected chat completion structure")
            return (Err(reason="Unexpected response structure", stage="question"), usage)
        if not isinstance(raw, str):
            return (Err(reason="Completion content is not text", stage="question"), usage)

        return (finalize_question(raw), usage)


def _usage_from(data: Any, model: str) -> APICallUsage:
    usage = data.get("usage") if isinstance(data, dict) else None
    if not isinstance(usage, dict):
        return APICallUsage(model=model)
    return APICallUsage(
        model=str(data.get("model") or model),
        input_tokens=int(usage.get("prompt_tokens", 0) or 0),
        output_tokens=int(usage.get("completion_tokens", 0) or 0),
    )
