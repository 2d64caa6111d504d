"""Service attributing elapsed time to the active question and topic."""

from __future__ import annotations

from collections.abc import Callable, Iterable
import time


class TimeAccumulator:
    """Tracks seconds spent per question (wall-clock deltas) and per topic (ticks).

    The two totals are kept independently: question totals come from clock
    deltas flushed on navigation and submission, topic totals grow by one
    second for every countdown tick. They are not reconciled.
    """

    def __init__(
        self,
        topics: Iterable[str],
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._clock = clock
        self._question_seconds: dict[str, float] = {}
        self._topic_seconds: dict[str, float] = {topic: 0 for topic in topics}
        self._active_question_id: str | None = None
        self._active_topic: str | None = None
        self._active_since: float = clock()

    def activate(self, question_id: str, topic: str) -> None:
        """Make a question active and restart its attribution interval."""
        self._active_question_id = question_id
        self._active_topic = topic
        self._active_since = self._clock()

    def record_elapsed_for_active_question(self) -> float:
        """Add the time since the last flush to the active question and return it."""
        now = self._clock()
        elapsed = max(0.0, now - self._active_since)
        self._active_since = now
        if self._active_question_id is not None:
            self._question_seconds[self._active_question_id] = (
                self._question_seconds.get(self._active_question_id, 0.0) + elapsed
            )
        return elapsed

    def add_topic_second(self) -> None:
        if self._active_topic is None:
            return
        self._topic_seconds[self._active_topic] = self._topic_seconds.get(self._active_topic, 0) + 1

    def question_seconds(self) -> dict[str, float]:
        return dict(self._question_seconds)

    def topic_seconds(self) -> dict[str, float]:
        return dict(self._topic_seconds)
