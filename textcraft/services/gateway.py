from __future__ import annotations

import asyncio
from typing import Any, Protocol

import httpx

from textcraft.core.config import Settings, get_settings
from textcraft.core.errors import GenerationError
from textcraft.core.logging import get_logger

logger = get_logger(__name__)


class TextGenerator(Protocol):
    async def generate(self, prompt: str, temperature: float, max_tokens: int | None = None) -> str:
        ...


def _content_text(content: Any) -> str | None:
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = [
            part.get("text")
            for part in content
            if isinstance(part, dict) and isinstance(part.get("text"), str)
        ]
        return "".join(parts) if parts else None
    return None


def extract_completion_text(payload: Any) -> str | None:
    """Pull the generated text out of a chat-completions style payload."""
    if not isinstance(payload, dict):
        return None

    choices = payload.get("choices")
    if isinstance(choices, list) and choices:
        first = choices[0]
        if isinstance(first, dict):
            message = first.get("message")
            if isinstance(message, dict):
                text = _content_text(message.get("content"))
                if text is not None:
                    return text
            if isinstance(first.get("text"), str):
                return first["text"]

    if isinstance(payload.get("output_text"), str):
        return payload["output_text"]

    output = payload.get("output")
    if isinstance(output, list):
        for item in output:
            if isinstance(item, dict):
                text = _content_text(item.get("content"))
                if text:
                    return text
    return None


class GroqGenerator:
    """Chat-completions client for Groq's OpenAI-compatible endpoint.

    Every failure mode (missing key, transport error, HTTP error status,
    unparseable or empty payload) surfaces as ``GenerationError``. In-flight
    requests are capped by a semaphore shared by all callers of the instance.
    """

    def __init__(self, settings: Settings | None = None, client: httpx.AsyncClient | None = None) -> None:
        self.settings = settings or get_settings()
        self._client = client
        self._owns_client = client is None
        self._semaphore = asyncio.Semaphore(max(1, self.settings.generator_max_concurrency))

    @property
    def completions_url(self) -> str:
        return f"{self.settings.groq_base_url.rstrip('/')}/chat/completions"

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.settings.generator_timeout_seconds),
                headers={
                    "Accept": "application/json",
                    "Authorization": f"Bearer {self.settings.groq_api_key}",
                },
            )
        return self._client

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
        self._client = None

    async def generate(self, prompt: str, temperature: float, max_tokens: int | None = None) -> str:
        if not self.settings.generator_configured:
            raise GenerationError("Text generator is not configured")

        request_payload = {
            "model": self.settings.groq_model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": temperature,
            "top_p": self.settings.groq_top_p,
            "max_completion_tokens": max_tokens or self.settings.groq_max_completion_tokens,
        }

        async with self._semaphore:
            try:
                response = await self._get_client().post(self.completions_url, json=request_payload)
            except httpx.HTTPError as exc:
                logger.warning("generator_request_failed", endpoint=self.completions_url, error=str(exc))
                raise GenerationError(f"Generator request failed: {exc.__class__.__name__}") from exc

        if response.status_code >= 400:
            logger.warning(
                "generator_http_error",
                endpoint=self.completions_url,
                status_code=response.status_code,
                preview=response.text[:180],
            )
            raise GenerationError(f"Generator returned HTTP {response.status_code}")

        try:
            payload = response.json()
        except ValueError as exc:
            logger.warning("generator_unparseable_response", preview=response.text[:180])
            raise GenerationError("Generator returned an unparseable response") from exc

        text = extract_completion_text(payload)
        if text is None or not text.strip():
            logger.warning("generator_empty_response", preview=str(payload)[:180])
            raise GenerationError("Generator returned no text")
        return text.strip()


_generator: GroqGenerator | None = None


def get_generator() -> TextGenerator:
    global _generator
    if _generator is None:
        _generator = GroqGenerator()
    return _generator


async def close_generator() -> None:
    global _generator
    if _generator is not None:
        await _generator.aclose()
    _generator = None
