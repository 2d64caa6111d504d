from __future__ import annotations

import logging

from exam_app.core.services.exam_session import ExamSession
from exam_app.utils.logging_config import configure_logging

from conftest import make_definition


def test_configure_logging_returns_package_logger() -> None:
    assert configure_logging().name == "exam_app"


def test_session_logs_start_and_submission(caplog, clock, rng) -> None:
    with caplog.at_level(logging.INFO, logger="exam_app"):
        session = ExamSession(make_definition("Math", name="Logged"), 0, 1, clock=clock, rng=rng)
        session.select_option(session.current_question.answer_label)
        session.request_submit()

    messages = [record.getMessage() for record in caplog.records]
    assert "Exam 'Logged' started: 1 questions, 60 seconds on the clock" in messages
    assert "Exam 'Logged' submitted: 1/1 correct (100.0%)" in messages
