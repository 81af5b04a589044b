from __future__ import annotations

import random
from dataclasses import dataclass
from types import MappingProxyType

DEFAULT_MODE = "human"


@dataclass(frozen=True)
class ModeConfig:
    name: str
    description: str
    temperature_range: tuple[float, float]
    min_chars: int = 20
    min_length_ratio: float = 0.7
    extra_rules: tuple[str, ...] = ()
    force_variation: bool = False


MODES = MappingProxyType(
    {
        "human": ModeConfig(
            name="human",
            description="Rewrite the text so it reads as natural, casual human writing with a mixed rhythm.",
            temperature_range=(0.8, 1.1),
        ),
        "anti-ai": ModeConfig(
            name="anti-ai",
            description="Rewrite the text to break predictable AI writing patterns aggressively.",
            temperature_range=(0.95, 1.25),
            min_chars=10,
            force_variation=True,
        ),
        "shorten": ModeConfig(
            name="shorten",
            description="Reduce the length of the text without losing meaning.",
            temperature_range=(0.6, 0.8),
            min_length_ratio=0.5,
            extra_rules=(
                "Reduce length by about 30%.",
                "Do not add new ideas.",
            ),
        ),
    }
)

PREAMBLE_RULES: tuple[str, ...] = (
    "Keep the meaning identical to the original.",
    "Change sentence structure and avoid generic phrasing.",
    "Output only the rewritten text.",
    "Do not add explanations, notes or headings.",
)

VARIATION_RULES: tuple[str, ...] = (
    "Avoid predictable phrasing and stock transitions.",
    "Vary sentence length: mix short sentences with longer ones.",
    "Do not reuse the original sentence structure or word order.",
)


def resolve_mode(mode: str | None) -> ModeConfig:
    return MODES.get((mode or "").strip().lower(), MODES[DEFAULT_MODE])


def draw_temperature(config: ModeConfig, rng: random.Random) -> float:
    low, high = config.temperature_range
    return round(rng.uniform(low, high), 2)


def _bullets(rules: tuple[str, ...]) -> str:
    return "\n".join(f"- {rule}" for rule in rules)


def build_rewrite_prompt(text: str, config: ModeConfig, attempt: int) -> str:
    """Prompt for one rewrite attempt.

    Variation rules are added for modes that ask for them and on every attempt
    after the first, to move the sampler away from the rejected output.
    """
    sections = [
        "You are a skilled human editor.",
        f"Task:\n{config.description}",
        f"Rules:\n{_bullets(PREAMBLE_RULES)}",
    ]
    if config.extra_rules:
        sections.append(f"Mode rules:\n{_bullets(config.extra_rules)}")
    if config.force_variation or attempt > 1:
        sections.append(f"Variation rules:\n{_bullets(VARIATION_RULES)}")
    sections.append(f"Text:\n{text}")
    return "\n\n".join(sections)


def build_sentence_prompt(sentence: str, hint: str | None) -> str:
    return "\n\n".join(
        [
            "Rewrite the following sentence to sound more human and specific.",
            "Rules:\n"
            + _bullets(
                (
                    "Keep the original meaning.",
                    "Avoid generic phrases.",
                    "Add light realism or context.",
                    "Do not add extra claims.",
                )
            ),
            f'Sentence:\n"{sentence}"',
            f'Hint:\n"{hint or "Make it more concrete and natural."}"',
            "Return only the rewritten sentence.",
        ]
    )
