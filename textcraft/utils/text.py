import re

_NON_ALPHA_RE = re.compile(r"[^a-z\s]")
_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")
_SPACE_RE = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    return " ".join(text.strip().split())


def tokenize(text: str) -> list[str]:
    return _NON_ALPHA_RE.sub("", text.lower()).split()


def split_sentences(text: str) -> list[str]:
    return [chunk.strip() for chunk in _SENTENCE_SPLIT_RE.split(text) if chunk.strip()]


def word_count(text: str) -> int:
    return len(text.split())


def collapse_whitespace(text: str) -> str:
    return _SPACE_RE.sub(" ", text).strip()


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))
