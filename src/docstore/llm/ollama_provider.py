"""Ollama answer generator for self-hosted deployments."""

from __future__ import annotations

import logging

import httpx

from docstore.llm.base import LLMProvider

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "llama3.1:8b"
OLLAMA_URL = "http://localhost:11434"


class OllamaLLMProvider(LLMProvider):
    """Answer support questions with a model served by Ollama."""

    def __init__(
        self,
        model: str | None = None,
        base_url: str = OLLAMA_URL,
        temperature: float = 0.3,
        max_tokens: int = 2048,
        timeout: float = 120.0,
    ):
        self.model = model or DEFAULT_MODEL
        self.base_url = base_url.rstrip("/")
        self.options = {"temperature": temperature, "num_predict": max_tokens}
        self._client = httpx.AsyncClient(base_url=self.base_url, timeout=timeout)

    @property
    def temperature(self) -> float:
        return self.options["temperature"]

    async def generate(self, prompt: str, system: str | None = None) -> str:
        request = {"model": self.model, "prompt": prompt, "stream": False, "options": self.options}
        if system:
            request["system"] = system

        resp = await self._client.post("/api/generate", json=request)
        resp.raise_for_status()
        answer = resp.json().get("response", "")
        logger.debug("Ollama %s answered with %d chars", self.model, len(answer))
        return answer

    async def aclose(self) -> None:
        await self._client.aclose()
