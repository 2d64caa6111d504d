"""Domain models for the exam engine."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime


class ExamConfigurationError(ValueError):
    """Raised when an exam cannot be started from the supplied definition."""


@dataclass(frozen=True, slots=True)
class Option:
    """A single answer choice identified by an integer label."""

    label: int
    value: str


@dataclass(frozen=True, slots=True)
class Question:
    """Multiple-choice question as supplied by the exam definition."""

    question: str
    options: tuple[Option, ...]
    answer_label: int
    topic: str
    explanation: str = ""

    def validate(self) -> None:
        """Reject questions whose options cannot produce a single correct answer."""
        if not self.options:
            raise ExamConfigurationError("Each question must have at least one option.")
        labels = [option.label for option in self.options]
        if len(set(labels)) != len(labels):
            raise ExamConfigurationError("Option labels must be unique within a question.")
        if self.answer_label not in labels:
            raise ExamConfigurationError(
                f"Correct label {self.answer_label} is not one of the question's options."
            )


@dataclass(frozen=True, slots=True)
class ExamDefinition:
    """Named, ordered list of questions to run."""

    name: str
    questions: tuple[Question, ...]

    @property
    def topics(self) -> list[str]:
        # dict preserves first-seen order
        return list(dict.fromkeys(question.topic for question in self.questions))


@dataclass(frozen=True, slots=True)
class RuntimeQuestion:
    """Question bound to a session id with its options in display order."""

    id: str
    question: Question
    shuffled_options: tuple[Option, ...]

    @property
    def topic(self) -> str:
        return self.question.topic

    @property
    def answer_label(self) -> int:
        return self.question.answer_label

    def has_label(self, label: int) -> bool:
        return any(option.label == label for option in self.shuffled_options)

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "question": self.question.question,
            "options": [_option_to_dict(option) for option in self.question.options],
            "shuffledOptions": [_option_to_dict(option) for option in self.shuffled_options],
            "answer_label": self.question.answer_label,
            "topic": self.question.topic,
            "explanation": self.question.explanation,
        }


@dataclass(frozen=True, slots=True)
class UserAnswer:
    """Outcome for one runtime question, produced at submission."""

    question_id: str
    selected_option_label: int | None
    is_correct: bool
    time_spent: float  # seconds

    def to_dict(self) -> dict[str, object]:
        return {
            "questionId": self.question_id,
            "selectedOptionLabel": self.selected_option_label,
            "isCorrect": self.is_correct,
            "timeSpent": self.time_spent,
        }


@dataclass(frozen=True, slots=True)
class SWOTAnalysis:
    """Per-topic observations grouped into the four SWOT buckets."""

    strengths: tuple[str, ...] = ()
    weaknesses: tuple[str, ...] = ()
    opportunities: tuple[str, ...] = ()
    threats: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, list[str]]:
        return {
            "strengths": list(self.strengths),
            "weaknesses": list(self.weaknesses),
            "opportunities": list(self.opportunities),
            "threats": list(self.threats),
        }


@dataclass(frozen=True, slots=True)
class ReviewItem:
    """A runtime question paired with the answer given to it."""

    question: RuntimeQuestion
    answer: UserAnswer


@dataclass(frozen=True, slots=True)
class ExamResult:
    """Terminal summary of a submitted exam session."""

    id: str
    exam_name: str
    completed_at: datetime
    total_questions: int
    correct_answers: int
    incorrect_answers: int
    accuracy: float  # percentage, 0-100
    total_time_taken: float  # seconds
    time_per_topic: Mapping[str, float]  # read-only
    accuracy_per_topic: Mapping[str, float]  # read-only, fraction 0-1
    answers: tuple[UserAnswer, ...]
    questions: tuple[RuntimeQuestion, ...]
    swot: SWOTAnalysis = field(default_factory=SWOTAnalysis)

    @property
    def score(self) -> int:
        return self.correct_answers

    def questions_in_topic(self, topic: str) -> int:
        return sum(1 for question in self.questions if question.topic == topic)

    def review(self, question_id: str) -> ReviewItem | None:
        question = next((q for q in self.questions if q.id == question_id), None)
        answer = next((a for a in self.answers if a.question_id == question_id), None)
        if question is None or answer is None:
            return None
        return ReviewItem(question=question, answer=answer)

    def to_dict(self) -> dict[str, object]:
        """Flatten the result into JSON-compatible primitives."""
        return {
            "id": self.id,
            "examName": self.exam_name,
            "date": int(self.completed_at.timestamp() * 1000),
            "score": self.score,
            "totalQuestions": self.total_questions,
            "correctAnswers": self.correct_answers,
            "incorrectAnswers": self.incorrect_answers,
            "accuracy": self.accuracy,
            "totalTimeTaken": self.total_time_taken,
            "timePerTopic": dict(self.time_per_topic),
            "accuracyPerTopic": dict(self.accuracy_per_topic),
            "swot": self.swot.to_dict(),
            "answers": [answer.to_dict() for answer in self.answers],
            "originalQuestions": [question.to_dict() for question in self.questions],
        }


def _option_to_dict(option: Option) -> dict[str, object]:
    return {"label": option.label, "value": option.value}
