"""Shared fixtures for the exam engine tests."""

from __future__ import annotations

import random

import pytest

from exam_app.core.models import ExamDefinition, Option, Question


class FakeClock:
    """Manually advanced replacement for ``time.time``."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_question(
    text: str,
    topic: str,
    answer_label: int = 1,
    labels: tuple[int, ...] = (1, 2, 3, 4),
) -> Question:
    return Question(
        question=text,
        options=tuple(Option(label=label, value=f"{text} option {label}") for label in labels),
        answer_label=answer_label,
        topic=topic,
        explanation=f"Because {text}.",
    )


def make_definition(*topics: str, name: str = "Sample Exam") -> ExamDefinition:
    return ExamDefinition(
        name=name,
        questions=tuple(make_question(f"Q{i}", topic) for i, topic in enumerate(topics)),
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)
