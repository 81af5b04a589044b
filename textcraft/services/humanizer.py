from __future__ import annotations

import asyncio
import random
import time
from dataclasses import asdict, dataclass, field

from textcraft.core.config import Settings, get_settings
from textcraft.core.errors import GenerationError, InvalidInputError
from textcraft.core.logging import get_logger
from textcraft.services.comparator import Comparison, compare, insight_score
from textcraft.services.detector import DetectionResult, detect
from textcraft.services.fallback import clean_generated_text, forced_rewrite, rule_based_rewrite
from textcraft.services.gateway import TextGenerator
from textcraft.services.insights import InsightReport, analyze_insights
from textcraft.services.prompts import ModeConfig, build_rewrite_prompt, draw_temperature, resolve_mode
from textcraft.utils.text import normalize_text

logger = get_logger(__name__)

STATUS_SUCCESS = "success"
STATUS_PARTIAL = "partial"
STATUS_ERROR = "error"

FALLBACK_FORCED = "forced"
FALLBACK_RULE_BASED = "rule_based"


@dataclass(frozen=True)
class HumanizerPolicy:
    max_retries: int = 3
    ai_threshold: int = 55
    force_min_probability: int = 40
    max_chars: int = 5000
    timeout_seconds: float = 30.0

    @classmethod
    def from_settings(cls, settings: Settings) -> "HumanizerPolicy":
        return cls(
            max_retries=settings.humanizer_max_retries,
            ai_threshold=settings.humanizer_ai_threshold,
            force_min_probability=settings.humanizer_force_min_probability,
            max_chars=settings.humanizer_max_chars,
            timeout_seconds=settings.generator_timeout_seconds,
        )


@dataclass
class RewriteAttempt:
    attempt_number: int
    temperature: float
    prompt: str
    candidate_text: str
    candidate_detection: DetectionResult
    candidate_insights: InsightReport
    valid: bool
    reason: str | None = None


@dataclass
class OrchestrationResult:
    status: str
    mode: str
    input: str
    output: str
    retries_used: int = 0
    forced_rewrite: bool = False
    fallback: str | None = None
    validated: bool = False
    detection_before: DetectionResult | None = None
    detection_after: DetectionResult | None = None
    insights_before: InsightReport | None = None
    insights_after: InsightReport | None = None
    comparison: Comparison | None = None
    insight_score: dict[str, int] | None = None
    attempts: list[RewriteAttempt] = field(default_factory=list)
    message: str | None = None
    latency_ms: float = 0.0

    def to_dict(self) -> dict:
        return asdict(self)


class Humanizer:
    def __init__(
        self,
        generator: TextGenerator,
        policy: HumanizerPolicy | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.generator = generator
        self.policy = policy or HumanizerPolicy.from_settings(get_settings())
        self.rng = rng or random.Random()

    def validate(self, text: object, config: ModeConfig) -> str:
        if not isinstance(text, str):
            raise InvalidInputError("Text must be a string")
        trimmed = text.strip()
        if not trimmed:
            raise InvalidInputError("Text is required")
        if len(trimmed) < config.min_chars:
            raise InvalidInputError(f"Text too short for mode '{config.name}' (minimum {config.min_chars} characters)")
        if len(trimmed) > self.policy.max_chars:
            raise InvalidInputError(f"Text too long (maximum {self.policy.max_chars} characters)")
        return trimmed

    def force_rewrite_required(self, config: ModeConfig, baseline: DetectionResult) -> bool:
        return (
            config.name == "anti-ai"
            and baseline.ai_probability >= self.policy.force_min_probability
            and baseline.sentence_count <= 1
        )

    @staticmethod
    def rejection_reason(
        original: str,
        candidate: str,
        baseline: InsightReport,
        candidate_insights: InsightReport,
        config: ModeConfig,
    ) -> str | None:
        if not candidate:
            return "empty"
        if len(candidate) < len(normalize_text(original)) * config.min_length_ratio:
            return "too_short"
        if len(candidate_insights.sentences) >= len(baseline.sentences):
            return "no_structural_improvement"
        return None

    async def _generate(self, prompt: str, temperature: float, attempt_number: int) -> str | None:
        try:
            return await asyncio.wait_for(
                self.generator.generate(prompt, temperature),
                timeout=self.policy.timeout_seconds,
            )
        except asyncio.TimeoutError:
            logger.warning(
                "humanizer_generation_timeout",
                attempt=attempt_number,
                timeout_seconds=self.policy.timeout_seconds,
            )
        except GenerationError as exc:
            logger.warning("humanizer_generation_failed", attempt=attempt_number, error=str(exc))
        except Exception:
            logger.exception("humanizer_generation_crashed", attempt=attempt_number)
        return None

    async def run(self, text: object, mode: str = "human") -> OrchestrationResult:
        start = time.perf_counter()
        config = resolve_mode(mode)

        try:
            source = self.validate(text, config)
        except InvalidInputError as exc:
            logger.info("humanizer_invalid_input", mode=config.name, reason=str(exc))
            return OrchestrationResult(
                status=STATUS_ERROR,
                mode=config.name,
                input=text if isinstance(text, str) else "",
                output="",
                message=str(exc),
            )

        detection_before = detect(source)
        insights_before = analyze_insights(source)
        force = self.force_rewrite_required(config, detection_before)
        normalized_source = normalize_text(source)

        attempts: list[RewriteAttempt] = []
        best: RewriteAttempt | None = None
        retries_used = 0

        for attempt_number in range(1, self.policy.max_retries + 1):
            retries_used = attempt_number
            prompt = build_rewrite_prompt(source, config, attempt_number)
            temperature = draw_temperature(config, self.rng)

            raw = await self._generate(prompt, temperature, attempt_number)
            if raw is None:
                continue
            candidate = clean_generated_text(raw)
            if not candidate:
                logger.warning("humanizer_empty_candidate", attempt=attempt_number)
                continue

            candidate_detection = detect(candidate)
            candidate_insights = analyze_insights(candidate)
            reason = self.rejection_reason(source, candidate, insights_before, candidate_insights, config)
            attempt = RewriteAttempt(
                attempt_number=attempt_number,
                temperature=temperature,
                prompt=prompt,
                candidate_text=candidate,
                candidate_detection=candidate_detection,
                candidate_insights=candidate_insights,
                valid=reason is None,
                reason=reason,
            )
            attempts.append(attempt)
            logger.info(
                "humanizer_attempt_scored",
                attempt=attempt_number,
                temperature=temperature,
                ai_probability=candidate_detection.ai_probability,
                valid=attempt.valid,
                reason=reason,
            )

            if force and normalize_text(candidate) == normalized_source:
                continue
            if best is None or candidate_detection.ai_probability < best.candidate_detection.ai_probability:
                best = attempt
            if attempt.valid and candidate_detection.ai_probability < self.policy.ai_threshold:
                logger.info("humanizer_early_exit", attempt=attempt_number, ai_probability=candidate_detection.ai_probability)
                break

        fallback: str | None = None
        if best is None and force:
            status, fallback = STATUS_PARTIAL, FALLBACK_FORCED
            output = forced_rewrite(source)
            message = "Generator did not change the text; forced rewrite applied."
        elif best is None:
            status, fallback = STATUS_PARTIAL, FALLBACK_RULE_BASED
            output = rule_based_rewrite(source)
            message = "Text generator unavailable; rule-based rewrite returned."
        else:
            status = STATUS_SUCCESS
            output = best.candidate_text
            message = None if best.valid else "Best possible rewrite returned."

        if best is not None:
            detection_after, insights_after = best.candidate_detection, best.candidate_insights
        else:
            detection_after, insights_after = detect(output), analyze_insights(output)

        result = OrchestrationResult(
            status=status,
            mode=config.name,
            input=source,
            output=output,
            retries_used=retries_used,
            forced_rewrite=force,
            fallback=fallback,
            validated=best is not None and best.valid,
            detection_before=detection_before,
            detection_after=detection_after,
            insights_before=insights_before,
            insights_after=insights_after,
            comparison=compare(detection_before, detection_after),
            insight_score=insight_score(insights_before, insights_after),
            attempts=attempts,
            message=message,
            latency_ms=round((time.perf_counter() - start) * 1000, 3),
        )
        logger.info(
            "humanizer_run_complete",
            mode=config.name,
            status=status,
            fallback=fallback,
            retries_used=retries_used,
            ai_before=detection_before.ai_probability,
            ai_after=detection_after.ai_probability,
            latency_ms=result.latency_ms,
        )
        return result
