import pytest

from textcraft.core.errors import TextTooShortError
from textcraft.services.comparator import (
    SUMMARY_NONE,
    SUMMARY_STRONG,
    compare,
    compare_texts,
    humanization_summary,
    insight_score,
)
from textcraft.services.detector import detect
from textcraft.services.insights import analyze_insights


def _long(text: str, times: int = 2) -> str:
    return " ".join([text] * times)


def test_identical_texts_show_no_improvement(uniform_paragraph):
    result = compare_texts(uniform_paragraph, uniform_paragraph)

    assert result.improvement_score == 0
    assert result.before == result.after
    assert result.humanization_score == 50
    assert result.summary == SUMMARY_NONE


def test_rewrite_improvement(uniform_paragraph, varied_rewrite):
    result = compare_texts(uniform_paragraph, varied_rewrite)

    assert result.before.ai_probability == 70
    assert result.after.ai_probability == 0
    assert result.improvement_score == 70
    assert result.humanization_score == 90
    assert result.summary == SUMMARY_STRONG


def test_improvement_score_never_negative(uniform_paragraph, varied_rewrite):
    result = compare_texts(varied_rewrite, uniform_paragraph)

    assert result.improvement_score == 0


def test_each_side_must_meet_minimum(uniform_paragraph):
    with pytest.raises(TextTooShortError) as exc:
        compare_texts(uniform_paragraph, "Far too short.")

    assert exc.value.label == "rewritten"


def test_confidence_low_below_eighty_words(uniform_paragraph):
    assert compare_texts(uniform_paragraph, uniform_paragraph).confidence == "low"


def test_confidence_uses_weaker_side(uniform_paragraph, varied_rewrite):
    original = _long(uniform_paragraph, 2)
    rewritten = _long(varied_rewrite, 4)

    result = compare_texts(original, rewritten)

    assert result.before.confidence == "medium"
    assert result.after.confidence == "high"
    assert result.confidence == "medium"


def test_compare_flags(uniform_paragraph, varied_rewrite):
    comparison = compare(detect(uniform_paragraph), detect(varied_rewrite))

    assert comparison.ai_probability_change == 70
    assert comparison.sentence_variance_improved is True
    assert comparison.uniformity_reduced is True
    assert comparison.verdict_change == "likely-ai -> human"


@pytest.mark.parametrize(("score", "prefix"), [(90, "Strong"), (60, "Human-likeness"), (50, "No meaningful")])
def test_summary_thresholds(score, prefix):
    assert humanization_summary(score).startswith(prefix)


def test_insight_score_counts_generic_sentences():
    before = analyze_insights(
        "Keyword research helps small teams pick better topics every single week. "
        "A clear editorial calendar is an effective way to keep writers on schedule."
    )
    after = analyze_insights("We rewrote it.")

    assert insight_score(before, after) == {"before_score": 50, "after_score": 76, "improvement": 2}
