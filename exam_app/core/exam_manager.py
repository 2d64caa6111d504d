"""Business logic shared between the tick scheduler and the API."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
import random
from threading import Lock
import time
from typing import Protocol

from exam_app.constants.exam_constants import DEFAULT_TIMER_HOURS, DEFAULT_TIMER_MINUTES
from exam_app.core.models import ExamDefinition, ExamResult, ReviewItem, RuntimeQuestion
from exam_app.core.services.exam_session import ExamSession, SessionPhase
from exam_app.core.services.result_history import ResultHistory
from exam_app.core.services.swot_classifier import DEFAULT_SWOT_THRESHOLDS, SwotThresholds


class TickScheduler(Protocol):
    def start(self) -> None: ...

    def stop(self) -> None: ...


SchedulerFactory = Callable[[Callable[[], None]], TickScheduler]


@dataclass(slots=True)
class SessionSnapshot:
    """Read-only view of the running exam returned to consumers."""

    exam_name: str
    phase: SessionPhase
    started_at: float  # epoch seconds
    current_index: int
    question_count: int
    remaining_seconds: int
    current_question: RuntimeQuestion
    selected_label: int | None
    unattempted_count: int
    result_id: str | None


class ExamManager:
    """Facade over the active exam session, its tick source and the result history."""

    def __init__(
        self,
        scheduler_factory: SchedulerFactory | None = None,
        history: ResultHistory | None = None,
        *,
        clock: Callable[[], float] = time.time,
        rng: random.Random | None = None,
        thresholds: SwotThresholds = DEFAULT_SWOT_THRESHOLDS,
    ) -> None:
        self._lock = Lock()
        self._history = history or ResultHistory()
        self._session: ExamSession | None = None
        self._result_id: str | None = None
        self._clock = clock
        self._rng = rng
        self._thresholds = thresholds
        self._scheduler = scheduler_factory(self.tick) if scheduler_factory else None

    # --- Session lifecycle ---

    def start_exam(
        self,
        definition: ExamDefinition,
        timer_hours: int = DEFAULT_TIMER_HOURS,
        timer_minutes: int = DEFAULT_TIMER_MINUTES,
    ) -> SessionSnapshot:
        with self._lock:
            # A rejected definition leaves the running exam and its ticks untouched.
            session = ExamSession(
                definition,
                timer_hours,
                timer_minutes,
                clock=self._clock,
                rng=self._rng,
                thresholds=self._thresholds,
            )
            session.add_result_sink(self._on_submitted)
            if self._scheduler is not None:
                self._scheduler.stop()
            self._session = session
            self._result_id = None
            if self._scheduler is not None:
                self._scheduler.start()
            return self._snapshot(session)

    def has_session(self) -> bool:
        with self._lock:
            return self._session is not None

    def get_state(self) -> SessionSnapshot:
        with self._lock:
            return self._snapshot(self._require_session())

    # --- Driving events ---

    def select_option(self, label: int) -> bool:
        with self._lock:
            return self._require_session().select_option(label)

    def go_next(self) -> bool:
        with self._lock:
            return self._require_session().go_next()

    def go_previous(self) -> bool:
        with self._lock:
            return self._require_session().go_previous()

    def request_submit(self) -> bool:
        with self._lock:
            return self._require_session().request_submit()

    def confirm_submit(self) -> bool:
        with self._lock:
            return self._require_session().confirm_submit()

    def cancel_submit(self) -> bool:
        with self._lock:
            return self._require_session().cancel_submit()

    def tick(self) -> bool:
        with self._lock:
            if self._session is None:
                return False
            return self._session.tick()

    # --- Results ---

    def list_results(self) -> list[ExamResult]:
        with self._lock:
            return self._history.entries()

    def get_latest_result(self) -> ExamResult | None:
        with self._lock:
            return self._history.latest()

    def get_result(self, result_id: str) -> ExamResult | None:
        with self._lock:
            return self._history.get(result_id)

    def get_review_item(self, result_id: str, question_id: str) -> ReviewItem | None:
        with self._lock:
            result = self._history.get(result_id)
            return result.review(question_id) if result else None

    # --- Internals ---

    def _require_session(self) -> ExamSession:
        if self._session is None:
            raise RuntimeError("No exam has been started.")
        return self._session

    def _on_submitted(self, result: ExamResult) -> None:
        # Called from inside a session event, so the lock is already held.
        if self._scheduler is not None:
            self._scheduler.stop()
        self._result_id = self._history.add(result).id

    def _snapshot(self, session: ExamSession) -> SessionSnapshot:
        return SessionSnapshot(
            exam_name=session.exam_name,
            phase=session.phase,
            started_at=session.started_at,
            current_index=session.current_index,
            question_count=len(session.questions),
            remaining_seconds=session.remaining_seconds,
            current_question=session.current_question,
            selected_label=session.selected_label(),
            unattempted_count=session.unattempted_count,
            result_id=self._result_id if session.is_submitted else None,
        )
