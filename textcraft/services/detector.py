from __future__ import annotations

import re
from collections import Counter
from dataclasses import asdict, dataclass

from textcraft.core.errors import TextTooShortError
from textcraft.utils.text import clamp, split_sentences, tokenize, word_count

HUMAN_MARKERS: tuple[str, ...] = (
    "i think",
    "i believe",
    "in my experience",
    "from my experience",
    "i noticed",
    "we found",
    "personally",
    "in my opinion",
)

_MARKER_PATTERNS = tuple(re.compile(rf"\b{re.escape(marker)}\b") for marker in HUMAN_MARKERS)

_EXPLANATIONS = {
    "human": "Sentence structure and wording show natural human variation.",
    "mixed": "Some AI-like structure detected, but human phrasing is also present.",
    "likely-ai": "Highly uniform sentence structure and generic phrasing detected.",
}


@dataclass(frozen=True)
class DetectorConfig:
    """Thresholds and weights of the rule-based detector."""

    low_richness: float = 0.45
    low_variance: float = 15.0
    very_low_variance: float = 10.0
    burst_variance: float = 25.0
    repeat_min_count: int = 3
    repeated_clusters: int = 5
    uniform_min_sentences: int = 3
    uniform_max_spread: int = 3
    many_sentences: int = 3

    richness_weight: int = 25
    variance_weight: int = 25
    repetition_weight: int = 20
    flat_weight: int = 15
    long_flat_weight: int = 15
    uniform_weight: int = 15
    marker_bonus: int = 10

    likely_ai_min: int = 70
    mixed_min: int = 40
    low_confidence_words: int = 80
    medium_confidence_words: int = 200


DEFAULT_DETECTOR_CONFIG = DetectorConfig()


@dataclass(frozen=True)
class Signals:
    vocabulary_richness: float
    sentence_length_variance: float
    repeated_word_clusters: int
    burstiness: str
    uniform_sentences: bool


@dataclass(frozen=True)
class DetectionResult:
    verdict: str
    ai_probability: int
    confidence: str
    signals: Signals
    explanation: str
    word_count: int
    sentence_count: int

    def to_dict(self) -> dict:
        return asdict(self)


def variance(values: list[int]) -> float:
    if not values:
        return 0.0
    mean = sum(values) / len(values)
    return sum((v - mean) ** 2 for v in values) / len(values)


def confidence_for(words: int, config: DetectorConfig = DEFAULT_DETECTOR_CONFIG) -> str:
    if words < config.low_confidence_words:
        return "low"
    if words < config.medium_confidence_words:
        return "medium"
    return "high"


def verdict_for(score: int, config: DetectorConfig = DEFAULT_DETECTOR_CONFIG) -> str:
    if score >= config.likely_ai_min:
        return "likely-ai"
    if score >= config.mixed_min:
        return "mixed"
    return "human"


def human_markers_in(text: str) -> list[str]:
    lowered = text.casefold()
    return [marker for marker, pattern in zip(HUMAN_MARKERS, _MARKER_PATTERNS) if pattern.search(lowered)]


def raw_score(
    *,
    richness: float,
    sentence_variance: float,
    repeated: int,
    burstiness: str,
    sentence_count: int,
    uniform: bool,
    config: DetectorConfig = DEFAULT_DETECTOR_CONFIG,
) -> int:
    score = 0
    if richness < config.low_richness:
        score += config.richness_weight
    if sentence_variance < config.low_variance:
        score += config.variance_weight
    if repeated > config.repeated_clusters:
        score += config.repetition_weight
    if burstiness == "flat":
        score += config.flat_weight
    if sentence_count > config.many_sentences and sentence_variance < config.very_low_variance:
        score += config.long_flat_weight
    if uniform:
        score += config.uniform_weight
    return int(clamp(score, 0, 100))


def detect(text: str, config: DetectorConfig = DEFAULT_DETECTOR_CONFIG) -> DetectionResult:
    tokens = tokenize(text)
    sentences = split_sentences(text) or [text]

    lengths = [len(tokenize(sentence)) for sentence in sentences]
    sentence_variance = variance(lengths)

    freq = Counter(tokens)
    repeated = sum(1 for count in freq.values() if count > config.repeat_min_count)
    richness = len(freq) / len(tokens) if tokens else 0.0

    uniform = (
        len(lengths) >= config.uniform_min_sentences
        and max(lengths) - min(lengths) <= config.uniform_max_spread
    )
    burstiness = "human-like" if sentence_variance > config.burst_variance else "flat"

    score = raw_score(
        richness=richness,
        sentence_variance=sentence_variance,
        repeated=repeated,
        burstiness=burstiness,
        sentence_count=len(sentences),
        uniform=uniform,
        config=config,
    )
    score = max(0, score - config.marker_bonus * len(human_markers_in(text)))

    verdict = verdict_for(score, config)
    words = word_count(text)

    return DetectionResult(
        verdict=verdict,
        ai_probability=score,
        confidence=confidence_for(words, config),
        signals=Signals(
            vocabulary_richness=round(richness, 2),
            sentence_length_variance=round(sentence_variance, 2),
            repeated_word_clusters=repeated,
            burstiness=burstiness,
            uniform_sentences=uniform,
        ),
        explanation=_EXPLANATIONS[verdict],
        word_count=words,
        sentence_count=len(sentences),
    )


def detect_text(text: str, *, min_words: int, config: DetectorConfig = DEFAULT_DETECTOR_CONFIG) -> DetectionResult:
    """Caller-facing detection: enforce the minimum word count, then detect."""
    words = word_count(text)
    if words < min_words:
        raise TextTooShortError(words, min_words)
    return detect(text, config)
