from fastapi import Depends

from textcraft.core.config import Settings, get_settings
from textcraft.services.gateway import TextGenerator, get_generator
from textcraft.services.humanizer import Humanizer, HumanizerPolicy
from textcraft.services.sentence_rewriter import SentenceRewriter


def get_humanizer(
    settings: Settings = Depends(get_settings),
    generator: TextGenerator = Depends(get_generator),
) -> Humanizer:
    return Humanizer(generator, policy=HumanizerPolicy.from_settings(settings))


def get_sentence_rewriter(
    settings: Settings = Depends(get_settings),
    generator: TextGenerator = Depends(get_generator),
) -> SentenceRewriter:
    return SentenceRewriter(generator, timeout_seconds=settings.generator_timeout_seconds)
