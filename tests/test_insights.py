from textcraft.services.insights import (
    FLAG_GENERIC,
    FLAG_UNIFORM,
    FLAG_VAGUE,
    HINTS,
    NO_FINDINGS_SUGGESTIONS,
    OVERALL_SUGGESTIONS,
    SHORT_TEXT_SUGGESTIONS,
    analyze_insights,
    insights_for_request,
    is_generic,
)

TWELVE_WORDS_A = "The quarterly report arrived late because the printer jammed twice this morning."
TWELVE_WORDS_B = "Our designer redrew every chart after the client asked for brighter colors."
LONG_SENTENCE = (
    "Nobody on the night shift expected the delivery truck to arrive before dawn, "
    "so the loading dock stayed dark and locked until the manager finally showed up."
)


def test_short_sentence_is_dropped():
    report = analyze_insights("SEO helps.")

    assert report.sentences == []
    assert report.overall_suggestions == list(OVERALL_SUGGESTIONS)


def test_single_mid_length_sentence_is_not_uniform():
    report = analyze_insights(f"{TWELVE_WORDS_A} {LONG_SENTENCE}")

    assert len(report.sentences) == 1
    assert report.sentences[0].index == 1
    assert FLAG_UNIFORM not in report.sentences[0].flags
    assert report.sentences[0].flags == []
    assert report.sentences[0].hint == ""


def test_two_mid_length_sentences_are_both_uniform():
    report = analyze_insights(f"{TWELVE_WORDS_A} {LONG_SENTENCE}. {TWELVE_WORDS_B}")

    assert [item.index for item in report.sentences] == [1, 3]
    for item in report.sentences:
        assert item.flags == [FLAG_UNIFORM]
        assert item.hint == HINTS[FLAG_UNIFORM]


def test_generic_sentence_is_flagged_with_hint():
    text = "Content marketing plays a role in building trust with modern online audiences today."
    report = analyze_insights(text)

    assert len(report.sentences) == 1
    assert report.sentences[0].flags == [FLAG_GENERIC]
    assert report.sentences[0].hint == HINTS[FLAG_GENERIC]


def test_generic_hint_outranks_uniform():
    text = "Good keyword research helps small teams pick topics readers care about. " + TWELVE_WORDS_B
    report = analyze_insights(text)

    first = report.sentences[0]
    assert first.flags == [FLAG_UNIFORM, FLAG_GENERIC]
    assert first.hint == HINTS[FLAG_GENERIC]


def test_contextual_override_suppresses_generic():
    assert is_generic("Keyword research helps small teams pick better topics.")
    assert not is_generic("Keyword research helps our small team pick better topics.")
    assert not is_generic("Keyword research helps 3 small teams pick better topics.")
    assert not is_generic("For example, keyword research helps small teams pick topics.")
    assert not is_generic("The rollout went smoothly across every regional office.")


def test_vague_sentences_never_surface_alone():
    report = analyze_insights("It works. Fine. Keyword research really helps.")

    assert report.sentences == []
    assert all(FLAG_VAGUE not in item.flags for item in report.sentences)


def test_uniform_paragraph_flags_every_sentence(uniform_paragraph):
    report = analyze_insights(uniform_paragraph)

    assert len(report.sentences) == 5
    assert report.count_flag(FLAG_UNIFORM) == 5


def test_request_fallback_for_short_text():
    report = insights_for_request("Just a few words here.", min_words=40)

    assert report.sentences == []
    assert report.overall_suggestions == list(SHORT_TEXT_SUGGESTIONS)


def test_request_fallback_when_nothing_flagged(varied_rewrite):
    report = insights_for_request(varied_rewrite, min_words=40)

    assert report.sentences == []
    assert report.overall_suggestions == list(NO_FINDINGS_SUGGESTIONS)


def test_request_keeps_findings(uniform_paragraph):
    report = insights_for_request(uniform_paragraph, min_words=40)

    assert len(report.sentences) == 5
    assert report.overall_suggestions == list(OVERALL_SUGGESTIONS)
