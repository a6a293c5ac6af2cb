"""Anthropic answer generator.

Needs the ``anthropic`` extra; the key is read from ``ANTHROPIC_API_KEY``
unless passed explicitly.
"""

from __future__ import annotations

import logging
from typing import Any

from docstore.llm.base import LLMProvider

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "claude-sonnet-4-20250514"


class AnthropicLLMProvider(LLMProvider):
    """Answer support questions with the Anthropic Messages API."""

    def __init__(
        self,
        model: str | None = None,
        api_key: str | None = None,
        max_tokens: int = 2048,
        temperature: float = 0.3,
    ):
        try:
            import anthropic
        except ImportError as exc:
            raise ImportError(
                "anthropic package required: pip install support-docstore[anthropic]"
            ) from exc

        self.model = model or DEFAULT_MODEL
        self._defaults: dict[str, Any] = {"max_tokens": max_tokens, "temperature": temperature}
        self._client: Any = anthropic.AsyncAnthropic(api_key=api_key)

    async def generate(self, prompt: str, system: str | None = None) -> str:
        extra = {"system": system} if system else {}
        message = await self._client.messages.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            **self._defaults,
            **extra,
        )
        text = "".join(block.text for block in message.content if block.type == "text")
        logger.debug("Anthropic %s answered with %d chars", self.model, len(text))
        return text

    async def aclose(self) -> None:
        await self._client.close()
