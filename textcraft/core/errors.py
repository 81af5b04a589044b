from __future__ import annotations


class TextcraftError(Exception):
    """Base class for errors raised by the humanization pipeline."""


class InvalidInputError(TextcraftError):
    """Input text is missing, too short or too long. Never retried."""


class TextTooShortError(TextcraftError):
    def __init__(self, word_count: int, min_words: int, label: str = "text") -> None:
        self.word_count = word_count
        self.min_words = min_words
        self.label = label
        super().__init__(f"{label.capitalize()} too short for reliable AI detection (minimum {min_words} words)")


class GenerationError(TextcraftError):
    """The text generator failed, timed out or returned nothing usable."""
