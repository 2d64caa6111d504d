"""FastAPI server that drives the exam engine over HTTP."""

from __future__ import annotations

from threading import Thread

from fastapi import Depends, FastAPI, HTTPException
from pydantic import BaseModel, Field
import uvicorn

from exam_app.constants.about import APP_ABOUT_TEXT, APP_NAME, APP_VERSION
from exam_app.constants.exam_constants import DEFAULT_TIMER_HOURS, DEFAULT_TIMER_MINUTES
from exam_app.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from exam_app.core.exam_manager import ExamManager, SessionSnapshot
from exam_app.core.formatting import format_duration
from exam_app.core.markdown_math_renderer import renderer
from exam_app.core.models import ExamDefinition, ExamResult, Option, Question


class OptionPayload(BaseModel):
    """A single answer choice."""

    label: int
    value: str


class QuestionPayload(BaseModel):
    """One multiple-choice question of an exam definition."""

    question: str
    options: list[OptionPayload] = Field(min_length=1)
    answer_label: int
    topic: str
    explanation: str = ""

    def to_question(self) -> Question:
        return Question(
            question=self.question,
            options=tuple(Option(label=o.label, value=o.value) for o in self.options),
            answer_label=self.answer_label,
            topic=self.topic,
            explanation=self.explanation,
        )


class StartExamPayload(BaseModel):
    """Payload schema for starting an exam."""

    name: str
    questions: list[QuestionPayload] = Field(min_length=1)
    timer_hours: int = Field(default=DEFAULT_TIMER_HOURS, ge=0)
    timer_minutes: int = Field(default=DEFAULT_TIMER_MINUTES, ge=0)

    def to_definition(self) -> ExamDefinition:
        return ExamDefinition(
            name=self.name,
            questions=tuple(q.to_question() for q in self.questions),
        )


class AnswerPayload(BaseModel):
    """Payload schema for selecting an option on the current question."""

    label: int


def _serialize_state(snapshot: SessionSnapshot) -> dict[str, object]:
    return {
        "exam_name": snapshot.exam_name,
        "phase": snapshot.phase.name.lower(),
        "started_at": int(snapshot.started_at * 1000),
        "current_index": snapshot.current_index,
        "question_count": snapshot.question_count,
        "remaining_seconds": snapshot.remaining_seconds,
        "remaining_display": format_duration(snapshot.remaining_seconds),
        "question": renderer.render_question(snapshot.current_question),
        "selected_label": snapshot.selected_label,
        "unattempted_count": snapshot.unattempted_count,
        "result_id": snapshot.result_id,
    }


def _serialize_result(result: ExamResult) -> dict[str, object]:
    payload = result.to_dict()
    payload["totalTimeDisplay"] = format_duration(result.total_time_taken)
    return payload


def _get_exam_manager_dependency(exam_manager: ExamManager):
    def dependency() -> ExamManager:
        return exam_manager

    return dependency


def create_api_app(exam_manager: ExamManager) -> FastAPI:
    """Create a FastAPI application wired to the provided exam manager."""
    app = FastAPI(title=f"{APP_NAME} API", version=APP_VERSION, description=APP_ABOUT_TEXT)
    exam_manager_dep = _get_exam_manager_dependency(exam_manager)

    def run_event(manager: ExamManager, event: str, *args: object) -> dict[str, object]:
        try:
            accepted = getattr(manager, event)(*args)
            state = manager.get_state()
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        except RuntimeError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        return {"accepted": accepted, "state": _serialize_state(state)}

    @app.post("/exam", status_code=201)
    def start_exam(
        payload: StartExamPayload,
        manager: ExamManager = Depends(exam_manager_dep),
    ) -> dict[str, object]:
        try:
            snapshot = manager.start_exam(
                payload.to_definition(),
                timer_hours=payload.timer_hours,
                timer_minutes=payload.timer_minutes,
            )
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return _serialize_state(snapshot)

    @app.get("/exam")
    def get_exam(manager: ExamManager = Depends(exam_manager_dep)) -> dict[str, object]:
        try:
            return _serialize_state(manager.get_state())
        except RuntimeError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc

    @app.post("/exam/answer")
    def select_option(
        payload: AnswerPayload,
        manager: ExamManager = Depends(exam_manager_dep),
    ) -> dict[str, object]:
        return run_event(manager, "select_option", payload.label)

    @app.post("/exam/next")
    def go_next(manager: ExamManager = Depends(exam_manager_dep)) -> dict[str, object]:
        return run_event(manager, "go_next")

    @app.post("/exam/previous")
    def go_previous(manager: ExamManager = Depends(exam_manager_dep)) -> dict[str, object]:
        return run_event(manager, "go_previous")

    @app.post("/exam/submit")
    def request_submit(manager: ExamManager = Depends(exam_manager_dep)) -> dict[str, object]:
        return run_event(manager, "request_submit")

    @app.post("/exam/submit/confirm")
    def confirm_submit(manager: ExamManager = Depends(exam_manager_dep)) -> dict[str, object]:
        return run_event(manager, "confirm_submit")

    @app.post("/exam/submit/cancel")
    def cancel_submit(manager: ExamManager = Depends(exam_manager_dep)) -> dict[str, object]:
        return run_event(manager, "cancel_submit")

    @app.get("/results")
    def list_results(manager: ExamManager = Depends(exam_manager_dep)) -> list[dict[str, object]]:
        return [_serialize_result(result) for result in manager.list_results()]

    @app.get("/results/latest")
    def latest_result(manager: ExamManager = Depends(exam_manager_dep)) -> dict[str, object]:
        result = manager.get_latest_result()
        if result is None:
            raise HTTPException(status_code=404, detail="No exam has been submitted yet.")
        return _serialize_result(result)

    @app.get("/results/{result_id}")
    def get_result(
        result_id: str,
        manager: ExamManager = Depends(exam_manager_dep),
    ) -> dict[str, object]:
        result = manager.get_result(result_id)
        if result is None:
            raise HTTPException(status_code=404, detail=f"Unknown result '{result_id}'.")
        return _serialize_result(result)

    @app.get("/results/{result_id}/review/{question_id}")
    def review_question(
        result_id: str,
        question_id: str,
        manager: ExamManager = Depends(exam_manager_dep),
    ) -> dict[str, object]:
        item = manager.get_review_item(result_id, question_id)
        if item is None:
            raise HTTPException(status_code=404, detail="Question not found in this result.")
        question = item.question.question
        return {
            **renderer.render_question(item.question),
            "answer_label": question.answer_label,
            "selected_label": item.answer.selected_option_label,
            "is_correct": item.answer.is_correct,
            "time_spent": item.answer.time_spent,
            "explanation_html": renderer.render_fragment(question.explanation),
        }

    return app


def start_api_server(
    exam_manager: ExamManager,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
) -> Thread:
    """Start the FastAPI server in a background daemon thread."""
    app = create_api_app(exam_manager)
    config = uvicorn.Config(app=app, host=host, port=port, log_level="info")
    server = uvicorn.Server(config)

    def run_server() -> None:
        server.run()

    thread = Thread(target=run_server, name="ExamApiServer", daemon=True)
    thread.start()
    return thread
