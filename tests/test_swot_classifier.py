from __future__ import annotations

import random

from exam_app.constants.exam_constants import (
    DEFAULT_OPPORTUNITY_MESSAGE,
    DEFAULT_STRENGTH_MESSAGE,
    DEFAULT_THREAT_MESSAGE,
    DEFAULT_WEAKNESS_MESSAGE,
)
from exam_app.core.randomizer import build_runtime_questions
from exam_app.core.services.scorer import score_exam
from exam_app.core.services.swot_classifier import SwotThresholds, classify_topics

from conftest import make_definition

START = 1_700_000_000.0


def _result(topics, correct_topics, topic_seconds, total_seconds):
    questions = build_runtime_questions(make_definition(*topics).questions, random.Random(2))
    answers = {
        q.id: (q.answer_label if q.topic in correct_topics else 99) for q in questions
    }
    return score_exam(questions, answers, {}, topic_seconds, START, "Exam", START + total_seconds)


def test_fast_accurate_topic_is_strength_and_slow_inaccurate_is_weakness() -> None:
    # Average: 50% accuracy, 20 s/question. Math: 100%, 5 s/q. Art: 0%, 35 s/q.
    result = _result(["Math", "Math", "Art", "Art"], {"Math"}, {"Math": 10, "Art": 70}, 80)

    swot = classify_topics(result)

    assert swot.strengths == ("Math: High accuracy with excellent speed.",)
    assert swot.weaknesses == (
        "Art: Low accuracy and slow speed indicate a need for fundamental review.",
    )
    assert swot.opportunities == (DEFAULT_OPPORTUNITY_MESSAGE,)
    assert swot.threats == (DEFAULT_THREAT_MESSAGE,)


def test_accurate_but_slow_topic_is_opportunity_and_fast_inaccurate_is_threat() -> None:
    # Average 20 s/question. Math: 100%, 35 s/q. Art: 0%, 5 s/q.
    result = _result(["Math", "Math", "Art", "Art"], {"Math"}, {"Math": 70, "Art": 10}, 80)

    swot = classify_topics(result)

    assert swot.opportunities == ("Math: Good accuracy, but speed can be improved.",)
    assert swot.threats == (
        "Art: Low accuracy with fast speed might suggest guessing or careless errors.",
    )
    assert swot.strengths == (DEFAULT_STRENGTH_MESSAGE,)
    assert swot.weaknesses == (DEFAULT_WEAKNESS_MESSAGE,)


def test_single_topic_matches_its_own_average_and_gets_defaults() -> None:
    result = _result(["Math"], {"Math"}, {"Math": 10}, 10)

    swot = classify_topics(result)

    assert swot.strengths == (DEFAULT_STRENGTH_MESSAGE,)
    assert swot.weaknesses == (DEFAULT_WEAKNESS_MESSAGE,)
    assert swot.opportunities == (DEFAULT_OPPORTUNITY_MESSAGE,)
    assert swot.threats == (DEFAULT_THREAT_MESSAGE,)


def test_every_bucket_is_non_empty_when_topics_exist() -> None:
    result = _result(["A", "B", "C"], {"A", "C"}, {"A": 3, "B": 30, "C": 12}, 45)
    swot = classify_topics(result)
    for bucket in (swot.strengths, swot.weaknesses, swot.opportunities, swot.threats):
        assert bucket


def test_no_topics_yields_empty_analysis() -> None:
    result = score_exam([], {}, {}, {}, START, "Empty", START)
    swot = classify_topics(result)
    assert swot.strengths == swot.weaknesses == swot.opportunities == swot.threats == ()


def test_thresholds_are_configurable() -> None:
    # Math sits 50 points above the average, Art 50 below.
    result = _result(["Math", "Math", "Art", "Art"], {"Math"}, {"Math": 10, "Art": 70}, 80)

    strict = SwotThresholds(accurate_margin=60, inaccurate_margin=60)
    swot = classify_topics(result, strict)

    assert swot.strengths == (DEFAULT_STRENGTH_MESSAGE,)
    assert swot.weaknesses == (DEFAULT_WEAKNESS_MESSAGE,)
