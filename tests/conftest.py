import pytest

from tests.stubs import REPETITIVE_SENTENCE, UNIFORM_PARAGRAPH, VARIED_REWRITE


@pytest.fixture
def uniform_paragraph() -> str:
    return UNIFORM_PARAGRAPH


@pytest.fixture
def varied_rewrite() -> str:
    return VARIED_REWRITE


@pytest.fixture
def repetitive_sentence() -> str:
    return REPETITIVE_SENTENCE
