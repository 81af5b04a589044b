from __future__ import annotations

import asyncio

from textcraft.core.errors import GenerationError
from textcraft.core.logging import get_logger
from textcraft.services.fallback import clean_generated_text
from textcraft.services.gateway import TextGenerator
from textcraft.services.prompts import build_sentence_prompt

logger = get_logger(__name__)

SENTENCE_MAX_TOKENS = 80
FORMAL_TEMPERATURE = 0.4
DEFAULT_TEMPERATURE = 0.8


class SentenceRewriter:
    def __init__(self, generator: TextGenerator, timeout_seconds: float = 30.0) -> None:
        self.generator = generator
        self.timeout_seconds = timeout_seconds

    async def rewrite(self, sentence: str, hint: str | None = None, mode: str = "human") -> str | None:
        if not isinstance(sentence, str) or not sentence.strip():
            return None

        temperature = FORMAL_TEMPERATURE if mode == "formal" else DEFAULT_TEMPERATURE
        prompt = build_sentence_prompt(sentence.strip(), hint)
        try:
            raw = await asyncio.wait_for(
                self.generator.generate(prompt, temperature, max_tokens=SENTENCE_MAX_TOKENS),
                timeout=self.timeout_seconds,
            )
        except (GenerationError, asyncio.TimeoutError) as exc:
            logger.warning("sentence_rewrite_failed", error=str(exc) or exc.__class__.__name__)
            return None
        except Exception:
            logger.exception("sentence_rewrite_crashed")
            return None

        rewritten = clean_generated_text(raw)
        return rewritten or None
