"""Service driving a single timed exam attempt from start to submission."""

from __future__ import annotations

from collections.abc import Callable
import dataclasses
from enum import Enum, auto
import logging
import random
import time

from exam_app.core.models import (
    ExamConfigurationError,
    ExamDefinition,
    ExamResult,
    RuntimeQuestion,
)
from exam_app.core.randomizer import build_runtime_questions
from exam_app.core.services.scorer import score_exam
from exam_app.core.services.swot_classifier import (
    DEFAULT_SWOT_THRESHOLDS,
    SwotThresholds,
    classify_topics,
)
from exam_app.core.services.time_accumulator import TimeAccumulator

logger = logging.getLogger(__name__)

ResultSink = Callable[[ExamResult], None]


class SessionPhase(Enum):
    """Lifecycle phases of an exam session."""

    INITIALIZING = auto()
    RUNNING = auto()
    AWAITING_CONFIRMATION = auto()
    SUBMITTING = auto()
    SUBMITTED = auto()


class ExamSession:
    """State machine for one exam attempt.

    Events are processed one at a time; each returns ``True`` when it changed
    state. Once submitted, every event is ignored and the result never changes.
    """

    def __init__(
        self,
        definition: ExamDefinition,
        timer_hours: int = 0,
        timer_minutes: int = 0,
        *,
        clock: Callable[[], float] = time.time,
        rng: random.Random | None = None,
        thresholds: SwotThresholds = DEFAULT_SWOT_THRESHOLDS,
    ) -> None:
        self._phase = SessionPhase.INITIALIZING
        if not definition.questions:
            raise ExamConfigurationError("Exam must contain at least one question.")
        if timer_hours < 0 or timer_minutes < 0:
            raise ExamConfigurationError("Timer values must not be negative.")
        for question in definition.questions:
            question.validate()

        self._definition = definition
        self._clock = clock
        self._thresholds = thresholds
        self._questions: tuple[RuntimeQuestion, ...] = tuple(
            build_runtime_questions(definition.questions, rng)
        )
        self._current_index: int = 0
        self._answers: dict[str, int] = {}
        self._remaining_seconds: int = timer_hours * 3600 + timer_minutes * 60
        self._result: ExamResult | None = None
        self._result_sinks: list[ResultSink] = []

        self._started_at: float = clock()
        self._timer = TimeAccumulator(definition.topics, clock=clock)
        self._activate_current()
        self._phase = SessionPhase.RUNNING
        logger.info(
            "Exam '%s' started: %d questions, %d seconds on the clock",
            definition.name,
            len(self._questions),
            self._remaining_seconds,
        )

    # --- Queries ---

    @property
    def phase(self) -> SessionPhase:
        return self._phase

    @property
    def exam_name(self) -> str:
        return self._definition.name

    @property
    def questions(self) -> tuple[RuntimeQuestion, ...]:
        return self._questions

    @property
    def current_index(self) -> int:
        return self._current_index

    @property
    def current_question(self) -> RuntimeQuestion:
        return self._questions[self._current_index]

    @property
    def remaining_seconds(self) -> int:
        return self._remaining_seconds

    @property
    def started_at(self) -> float:
        return self._started_at

    @property
    def result(self) -> ExamResult | None:
        return self._result

    @property
    def is_submitted(self) -> bool:
        return self._phase is SessionPhase.SUBMITTED

    @property
    def unattempted_count(self) -> int:
        return len(self._questions) - len(self._answers)

    def selected_label(self, question_id: str | None = None) -> int | None:
        return self._answers.get(question_id or self.current_question.id)

    def answers(self) -> dict[str, int]:
        return dict(self._answers)

    def question_seconds(self) -> dict[str, float]:
        return self._timer.question_seconds()

    def topic_seconds(self) -> dict[str, float]:
        return self._timer.topic_seconds()

    def add_result_sink(self, sink: ResultSink) -> None:
        """Register a callback receiving the result once the session is submitted."""
        self._result_sinks.append(sink)

    # --- Events ---

    def select_option(self, label: int) -> bool:
        if not self._accepts_exam_input():
            return False
        question = self.current_question
        if not question.has_label(label):
            raise ValueError(f"Option {label} does not belong to question {question.id}.")
        self._answers[question.id] = label
        return True

    def go_next(self) -> bool:
        if not self._accepts_exam_input() or self._current_index >= len(self._questions) - 1:
            return False
        self._move_to(self._current_index + 1)
        return True

    def go_previous(self) -> bool:
        if not self._accepts_exam_input() or self._current_index <= 0:
            return False
        self._move_to(self._current_index - 1)
        return True

    def tick(self) -> bool:
        """Advance the countdown by one second, submitting when it runs out."""
        if self._phase not in (SessionPhase.RUNNING, SessionPhase.AWAITING_CONFIRMATION):
            logger.debug("Ignoring tick in phase %s", self._phase.name)
            return False
        self._remaining_seconds = max(0, self._remaining_seconds - 1)
        if self._remaining_seconds == 0:
            logger.info("Time is up for exam '%s'; submitting automatically", self.exam_name)
            self._submit()
            return True
        self._timer.add_topic_second()
        return True

    def request_submit(self) -> bool:
        if self._phase is not SessionPhase.RUNNING:
            return False
        unattempted = self.unattempted_count
        if unattempted > 0:
            self._phase = SessionPhase.AWAITING_CONFIRMATION
            logger.info("Submission requested with %d unattempted question(s)", unattempted)
            return True
        self._submit()
        return True

    def confirm_submit(self) -> bool:
        if self._phase is not SessionPhase.AWAITING_CONFIRMATION:
            return False
        self._submit()
        return True

    def cancel_submit(self) -> bool:
        if self._phase is not SessionPhase.AWAITING_CONFIRMATION:
            return False
        self._phase = SessionPhase.RUNNING
        logger.info("Submission cancelled")
        return True

    # --- Internals ---

    def _accepts_exam_input(self) -> bool:
        if self._phase is SessionPhase.RUNNING:
            return True
        logger.debug("Ignoring exam input in phase %s", self._phase.name)
        return False

    def _activate_current(self) -> None:
        question = self.current_question
        self._timer.activate(question.id, question.topic)

    def _move_to(self, index: int) -> None:
        self._timer.record_elapsed_for_active_question()
        self._current_index = index
        self._activate_current()

    def _submit(self) -> None:
        if self._phase in (SessionPhase.SUBMITTING, SessionPhase.SUBMITTED):
            return
        self._phase = SessionPhase.SUBMITTING
        self._timer.record_elapsed_for_active_question()

        scored = score_exam(
            questions=self._questions,
            answers=self._answers,
            question_seconds=self._timer.question_seconds(),
            topic_seconds=self._timer.topic_seconds(),
            started_at=self._started_at,
            exam_name=self._definition.name,
            submitted_at=self._clock(),
        )
        self._result = dataclasses.replace(scored, swot=classify_topics(scored, self._thresholds))
        self._phase = SessionPhase.SUBMITTED
        logger.info(
            "Exam '%s' submitted: %d/%d correct (%.1f%%)",
            self.exam_name,
            self._result.correct_answers,
            self._result.total_questions,
            self._result.accuracy,
        )
        for sink in self._result_sinks:
            sink(self._result)
