from __future__ import annotations

from dataclasses import asdict, dataclass

from textcraft.core.errors import TextTooShortError
from textcraft.services.detector import DEFAULT_DETECTOR_CONFIG, DetectionResult, detect
from textcraft.services.insights import FLAG_GENERIC, InsightReport
from textcraft.utils.text import clamp, word_count

_CONFIDENCE_ORDER = ("low", "medium", "high")

SUMMARY_STRONG = "Strong humanization: AI-like signals dropped noticeably after rewriting."
SUMMARY_MODERATE = "Human-likeness improved after rewriting."
SUMMARY_NONE = "No meaningful structural improvement detected."


@dataclass(frozen=True)
class Comparison:
    ai_probability_change: int
    sentence_variance_improved: bool
    uniformity_reduced: bool
    humanization_score: int
    verdict_change: str
    summary: str


@dataclass(frozen=True)
class TextComparison:
    before: DetectionResult
    after: DetectionResult
    improvement_score: int
    humanization_score: int
    confidence: str
    summary: str

    def to_dict(self) -> dict:
        return asdict(self)


def humanization_summary(score: int) -> str:
    if score >= 80:
        return SUMMARY_STRONG
    if score >= 60:
        return SUMMARY_MODERATE
    return SUMMARY_NONE


def compare(before: DetectionResult, after: DetectionResult) -> Comparison:
    variance_improved = (
        after.signals.sentence_length_variance > before.signals.sentence_length_variance
    )
    uniformity_reduced = before.signals.uniform_sentences and not after.signals.uniform_sentences

    score = 50
    if after.ai_probability < before.ai_probability:
        score += 20
    if variance_improved:
        score += 10
    if uniformity_reduced:
        score += 10
    score = int(clamp(score, 0, 100))

    return Comparison(
        ai_probability_change=before.ai_probability - after.ai_probability,
        sentence_variance_improved=variance_improved,
        uniformity_reduced=uniformity_reduced,
        humanization_score=score,
        verdict_change=f"{before.verdict} -> {after.verdict}",
        summary=humanization_summary(score),
    )


def comparison_confidence(before: DetectionResult, after: DetectionResult, min_words: int) -> str:
    if before.word_count < min_words or after.word_count < min_words:
        return "low"
    return min(before.confidence, after.confidence, key=_CONFIDENCE_ORDER.index)


def compare_texts(original: str, rewritten: str, *, min_words: int = 50) -> TextComparison:
    for label, text in (("original", original), ("rewritten", rewritten)):
        words = word_count(text)
        if words < min_words:
            raise TextTooShortError(words, min_words, label=label)

    before = detect(original)
    after = detect(rewritten)
    comparison = compare(before, after)

    return TextComparison(
        before=before,
        after=after,
        improvement_score=max(0, comparison.ai_probability_change),
        humanization_score=comparison.humanization_score,
        confidence=comparison_confidence(before, after, DEFAULT_DETECTOR_CONFIG.low_confidence_words),
        summary=comparison.summary,
    )


def insight_score(before: InsightReport, after: InsightReport) -> dict[str, int]:
    before_generic = before.count_flag(FLAG_GENERIC)
    after_generic = after.count_flag(FLAG_GENERIC)
    improvement = max(0, before_generic - after_generic)
    return {
        "before_score": max(20, 60 - before_generic * 5),
        "after_score": min(95, 60 + improvement * 8),
        "improvement": improvement,
    }
