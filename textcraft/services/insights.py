from __future__ import annotations

import re
from dataclasses import asdict, dataclass, field

from textcraft.utils.text import split_sentences, tokenize

GENERIC_PHRASES: tuple[str, ...] = (
    "helps",
    "improves",
    "in order to",
    "is a strategy",
    "effective way",
    "important for",
    "plays a role",
    "used to",
)

# A sentence that already grounds itself in a person, a number or an example
# is not generic filler.
_CONTEXT_OVERRIDE_RE = re.compile(r"\b(i|we|my|our|example|case)\b|\d", flags=re.IGNORECASE)

FLAG_GENERIC = "generic"
FLAG_VAGUE = "vague"
FLAG_UNIFORM = "uniform-length"
_FLAG_CANDIDATE_UNIFORM = "candidate-uniform"

UNIFORM_MIN_WORDS = 10
UNIFORM_MAX_WORDS = 14
VAGUE_MAX_WORDS = 5
UNIFORM_CONSENSUS = 2

HINTS = {
    FLAG_GENERIC: "This sentence sounds abstract. Try grounding it with a real example or outcome.",
    FLAG_UNIFORM: "Several sentences have similar rhythm. Vary sentence length to sound more natural.",
    FLAG_VAGUE: "This idea is brief. Clarify it with more context or specificity.",
}
_HINT_PRIORITY = (FLAG_GENERIC, FLAG_UNIFORM, FLAG_VAGUE)

OVERALL_SUGGESTIONS: tuple[str, ...] = (
    "Vary sentence length",
    "Reduce generic definitions",
    "Add personal context",
)
SHORT_TEXT_SUGGESTIONS: tuple[str, ...] = (
    "Increase text length for deeper analysis",
    "Add personal experience or examples",
    "Avoid overly generic statements",
)
NO_FINDINGS_SUGGESTIONS: tuple[str, ...] = (
    "Vary sentence length",
    "Reduce generic definitions",
    "Add personal context",
    "Include real-world outcomes or data",
)


@dataclass
class Insight:
    index: int
    text: str
    flags: list[str] = field(default_factory=list)
    hint: str = ""


@dataclass
class InsightReport:
    sentences: list[Insight]
    overall_suggestions: list[str]

    def to_dict(self) -> dict:
        return asdict(self)

    def count_flag(self, flag: str) -> int:
        return sum(1 for insight in self.sentences if flag in insight.flags)


def is_generic(sentence: str) -> bool:
    lowered = sentence.lower()
    if not any(phrase in lowered for phrase in GENERIC_PHRASES):
        return False
    return _CONTEXT_OVERRIDE_RE.search(sentence) is None


def _sentence_flags(sentence: str) -> list[str]:
    length = len(tokenize(sentence))
    flags: list[str] = []
    if UNIFORM_MIN_WORDS <= length <= UNIFORM_MAX_WORDS:
        flags.append(_FLAG_CANDIDATE_UNIFORM)
    if length <= VAGUE_MAX_WORDS:
        flags.append(FLAG_VAGUE)
    elif is_generic(sentence):
        flags.append(FLAG_GENERIC)
    return flags


def _hint_for(flags: list[str]) -> str:
    for flag in _HINT_PRIORITY:
        if flag in flags:
            return HINTS[flag]
    return ""


def analyze_insights(text: str) -> InsightReport:
    """Flag weak sentences in two passes.

    The first pass marks each sentence on its own. Sentences of a mid-range
    length are only candidates for ``uniform-length``: the second pass keeps
    the flag when at least two sentences share it and drops it everywhere
    otherwise, so one incidental sentence length is never reported as a
    pattern. Sentences whose only flag is ``vague`` are left out.
    """
    flagged: list[Insight] = []
    for index, sentence in enumerate(split_sentences(text), start=1):
        flags = _sentence_flags(sentence)
        if flags:
            flagged.append(Insight(index=index, text=sentence, flags=flags))

    candidates = [item for item in flagged if _FLAG_CANDIDATE_UNIFORM in item.flags]
    promote = len(candidates) >= UNIFORM_CONSENSUS
    for item in candidates:
        item.flags = [
            FLAG_UNIFORM if flag == _FLAG_CANDIDATE_UNIFORM else flag
            for flag in item.flags
            if promote or flag != _FLAG_CANDIDATE_UNIFORM
        ]

    sentences = [item for item in flagged if item.flags != [FLAG_VAGUE]]
    for item in sentences:
        item.hint = _hint_for(item.flags)

    return InsightReport(sentences=sentences, overall_suggestions=list(OVERALL_SUGGESTIONS))


def insights_for_request(text: str, min_words: int) -> InsightReport:
    """Insights with never-empty suggestions, as served to callers."""
    if len(text.split()) < min_words:
        return InsightReport(sentences=[], overall_suggestions=list(SHORT_TEXT_SUGGESTIONS))

    report = analyze_insights(text)
    if not report.sentences:
        report.overall_suggestions = list(NO_FINDINGS_SUGGESTIONS)
    return report
