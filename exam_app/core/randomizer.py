"""Shuffling helpers used when an exam session is created."""

from __future__ import annotations

from collections.abc import Sequence
import random
from typing import TypeVar

from exam_app.core.models import Question, RuntimeQuestion

T = TypeVar("T")


def shuffled(items: Sequence[T], rng: random.Random | None = None) -> list[T]:
    """Return a new list holding the same elements in random order.

    The input is never mutated. Uses a Fisher-Yates shuffle so every
    permutation is equally likely.
    """
    result = list(items)
    (rng or random).shuffle(result)
    return result


def build_runtime_questions(
    questions: Sequence[Question],
    rng: random.Random | None = None,
) -> list[RuntimeQuestion]:
    """Shuffle the question order and each question's options independently."""
    rng = rng or random.Random()
    return [
        RuntimeQuestion(
            id=f"q-{position}",
            question=question,
            shuffled_options=tuple(shuffled(question.options, rng)),
        )
        for position, question in enumerate(shuffled(questions, rng))
    ]
