from __future__ import annotations

import re

from textcraft.utils.text import collapse_whitespace, normalize_text

_SENTENCE_END = (".", "!", "?")

_BOILERPLATE_PREFIX_RE = re.compile(
    r"^\s*(?:here is the rewritten text|here's the rewritten text|rewritten text|rewritten|output|result)\s*:\s*",
    flags=re.IGNORECASE,
)
_WRAPPING_QUOTES = ('"', "'", "“", "”")

PHRASE_REPLACEMENTS: dict[str, str] = {
    "it is important to note that": "",
    "it should be noted that": "",
    "it can be observed that": "",
    "due to the fact that": "because",
    "in order to": "to",
    "a large number of": "many",
    "at this point in time": "now",
    "in the event that": "if",
    "plays a role in": "shapes",
    "is an effective way to": "is a good way to",
    "utilize": "use",
    "furthermore": "also",
    "moreover": "also",
    "therefore": "so",
    "however": "but",
    "additionally": "plus",
}

CONTRACTIONS: dict[str, str] = {
    "it is": "it's",
    "that is": "that's",
    "there is": "there's",
    "do not": "don't",
    "does not": "doesn't",
    "cannot": "can't",
    "will not": "won't",
    "is not": "isn't",
    "are not": "aren't",
    "you are": "you're",
    "we are": "we're",
}

FORCED_OPENER = "Put simply,"


def clean_generated_text(raw: str) -> str:
    out = raw.strip()
    previous = None
    while previous != out:
        previous = out
        out = _BOILERPLATE_PREFIX_RE.sub("", out).strip()
        if len(out) >= 2 and out[0] in _WRAPPING_QUOTES and out[-1] in _WRAPPING_QUOTES:
            out = out[1:-1].strip()
    return collapse_whitespace(out)


def _match_case(source: str, replacement: str) -> str:
    if replacement and source[:1].isupper():
        return replacement[0].upper() + replacement[1:]
    return replacement


def _replace_all(text: str, table: dict[str, str]) -> str:
    out = text
    for src, dst in table.items():
        pattern = re.compile(rf"\b{re.escape(src)}\b", flags=re.IGNORECASE)
        out = pattern.sub(lambda m, dst=dst: _match_case(m.group(0), dst), out)
    return out


def _tidy(text: str) -> str:
    out = re.sub(r"\s+([,.!?;:])", r"\1", text)
    out = re.sub(r"([.!?])\s*,", r"\1", out)
    out = re.sub(r"^\s*,\s*", "", out)
    out = collapse_whitespace(out)
    # Removed lead-in phrases can leave a lowercase sentence start.
    out = re.sub(r"(^|[.!?]\s+)([a-z])", lambda m: m.group(1) + m.group(2).upper(), out)
    return out


def _changed(candidate: str, original: str) -> bool:
    return bool(candidate) and candidate.casefold() != original.casefold()


def rule_based_rewrite(text: str) -> str:
    """Canonical phrase substitutions; may return the input unchanged."""
    original = normalize_text(text)
    out = _tidy(_replace_all(original, PHRASE_REPLACEMENTS))
    return out or original


def forced_rewrite(text: str) -> str:
    """Deterministic rewrite that never returns the input unchanged."""
    original = normalize_text(text)

    out = _tidy(_replace_all(original, PHRASE_REPLACEMENTS))
    if _changed(out, original):
        return out

    out = _tidy(_replace_all(original, CONTRACTIONS))
    if _changed(out, original):
        return out

    body = original
    if original[:1].isupper() and original[1:2].islower():
        body = original[0].lower() + original[1:]
    out = f"{FORCED_OPENER} {body}".strip()
    if not out.endswith(_SENTENCE_END):
        out += "."
    return out
