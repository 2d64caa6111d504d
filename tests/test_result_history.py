from __future__ import annotations

import random

from exam_app.core.randomizer import build_runtime_questions
from exam_app.core.services.result_history import ResultHistory
from exam_app.core.services.scorer import score_exam

from conftest import make_definition

START = 1_700_000_000.0


def _result(offset: float, name: str = "Exam"):
    questions = build_runtime_questions(make_definition("Math").questions, random.Random(1))
    return score_exam(questions, {}, {}, {"Math": 0}, START, name, START + offset)


def test_history_keeps_newest_first() -> None:
    history = ResultHistory()
    first, second = _result(10), _result(20)
    history.add(first)
    history.add(second)

    assert history.entries() == [second, first]
    assert history.latest() is second
    assert history.get(first.id) is first
    assert history.get("res-missing") is None


def test_readding_the_same_result_keeps_a_single_entry() -> None:
    history = ResultHistory()
    original = _result(10)
    other = _result(20)
    history.add(original)
    history.add(other)

    assert history.add(original) is original
    assert history.entries() == [original, other]


def test_results_submitted_in_the_same_millisecond_are_both_kept() -> None:
    history = ResultHistory()
    first = _result(10, name="First")
    second = _result(10, name="Second")
    assert first.id == second.id

    history.add(first)
    stored = history.add(second)
    third = history.add(_result(10, name="Third"))

    assert stored.id == f"{first.id}-2"
    assert third.id == f"{first.id}-3"
    assert stored.exam_name == "Second"
    assert history.get(first.id) is first
    assert history.get(stored.id) is stored
    assert [r.exam_name for r in history.entries()] == ["Third", "Second", "First"]


def test_empty_history() -> None:
    history = ResultHistory()
    assert history.latest() is None
    assert history.entries() == []
