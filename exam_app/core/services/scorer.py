"""Service converting the final answers of a session into an exam result."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import datetime, timezone
from types import MappingProxyType

from exam_app.core.models import ExamResult, RuntimeQuestion, UserAnswer


def score_exam(
    questions: Sequence[RuntimeQuestion],
    answers: Mapping[str, int | None],
    question_seconds: Mapping[str, float],
    topic_seconds: Mapping[str, float],
    started_at: float,
    exam_name: str,
    submitted_at: float,
) -> ExamResult:
    """Score a session. Timestamps are epoch seconds; the SWOT field is left empty."""
    user_answers: list[UserAnswer] = []
    questions_per_topic: dict[str, int] = {}
    correct_per_topic: dict[str, int] = {}

    for question in questions:
        selected = answers.get(question.id)
        is_correct = selected is not None and selected == question.answer_label
        user_answers.append(
            UserAnswer(
                question_id=question.id,
                selected_option_label=selected,
                is_correct=is_correct,
                time_spent=question_seconds.get(question.id, 0.0),
            )
        )
        questions_per_topic[question.topic] = questions_per_topic.get(question.topic, 0) + 1
        correct_per_topic[question.topic] = correct_per_topic.get(question.topic, 0) + int(is_correct)

    total = len(questions)
    correct = sum(1 for answer in user_answers if answer.is_correct)
    accuracy = (correct / total) * 100 if total > 0 else 0.0

    accuracy_per_topic = {
        topic: correct_per_topic[topic] / count for topic, count in questions_per_topic.items()
    }
    # Topics with no question in this session are dropped.
    time_per_topic = {
        topic: topic_seconds.get(topic, 0) for topic in questions_per_topic
    }

    completed_at = datetime.fromtimestamp(submitted_at, tz=timezone.utc)
    return ExamResult(
        id=f"res-{int(submitted_at * 1000)}",
        exam_name=exam_name,
        completed_at=completed_at,
        total_questions=total,
        correct_answers=correct,
        incorrect_answers=total - correct,
        accuracy=accuracy,
        total_time_taken=max(0.0, submitted_at - started_at),
        time_per_topic=MappingProxyType(time_per_topic),
        accuracy_per_topic=MappingProxyType(accuracy_per_topic),
        answers=tuple(user_answers),
        questions=tuple(questions),
    )
