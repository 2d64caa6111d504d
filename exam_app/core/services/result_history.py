"""Service keeping the results produced by submitted sessions."""

from __future__ import annotations

import dataclasses
import logging

from exam_app.core.models import ExamResult

logger = logging.getLogger(__name__)


class ResultHistory:
    """In-memory result sink, newest result first."""

    def __init__(self) -> None:
        self._results: list[ExamResult] = []

    def add(self, result: ExamResult) -> ExamResult:
        """Store a result and return the entry as stored.

        Adding the same result again moves it to the front. A different result
        whose id is already taken is stored under a suffixed id, so two exams
        submitted in the same millisecond both stay reachable.
        """
        if any(r.id == result.id and r is not result for r in self._results):
            taken = {r.id for r in self._results}
            suffix = 2
            while f"{result.id}-{suffix}" in taken:
                suffix += 1
            logger.warning("Result id %s already in use, storing as %s-%d", result.id, result.id, suffix)
            result = dataclasses.replace(result, id=f"{result.id}-{suffix}")
        self._results = [result] + [r for r in self._results if r.id != result.id]
        logger.info("Stored result %s for exam '%s'", result.id, result.exam_name)
        return result

    def entries(self) -> list[ExamResult]:
        return list(self._results)

    def latest(self) -> ExamResult | None:
        return self._results[0] if self._results else None

    def get(self, result_id: str) -> ExamResult | None:
        return next((r for r in self._results if r.id == result_id), None)
