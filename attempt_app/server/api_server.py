"""FastAPI server that exposes the running attempt to a second front-end."""

from __future__ import annotations

from threading import Thread

from fastapi import Depends, FastAPI, HTTPException
from pydantic import BaseModel
import uvicorn

from attempt_app.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from attempt_app.core.attempt_session import AttemptSession
from attempt_app.core.markdown_math_renderer import renderer
from attempt_app.core.models import AttemptResult
from attempt_app.core.services.submission import SubmissionState


class AnswerPayload(BaseModel):
    """Payload schema for selecting an option."""

    question_id: str
    option_id: str


class ReviewPayload(BaseModel):
    question_id: str


class NavigatePayload(BaseModel):
    index: int


class SubmitPayload(BaseModel):
    """Payload schema for a submit request; gaps must be confirmed explicitly."""

    confirm_unanswered: bool = False


def _get_session_dependency(session: AttemptSession):
    def dependency() -> AttemptSession:
        return session

    return dependency


def _result_payload(result: AttemptResult | None) -> dict[str, object] | None:
    if result is None:
        return None
    return {
        "score": result.score,
        "total": result.total,
        "percentage": result.percentage,
        "passed": result.passed,
    }


def _locked_detail(session: AttemptSession) -> str:
    if session.is_backgrounded():
        return "Attempt is paused while the app is in the background."
    state = session.get_submission_state()
    if state is SubmissionState.SUBMITTED:
        return "Attempt has already been submitted."
    if state is not SubmissionState.IN_PROGRESS:
        return "Attempt is being submitted."
    return "Time limit reached; the attempt can only be submitted."


def create_api_app(session: AttemptSession) -> FastAPI:
    """Create a FastAPI application wired to the provided attempt session."""
    app = FastAPI(title="AttemptQt API", version="0.1.0")
    session_dep = _get_session_dependency(session)

    @app.get("/attempt")
    def get_attempt(manager: AttemptSession = Depends(session_dep)) -> dict[str, object]:
        attempt = manager.attempt
        return {
            "attempt_id": attempt.attempt_id,
            "test_id": attempt.test_id,
            "test_title": manager.test_title,
            "end_time": attempt.end_time.isoformat(),
            "remaining_seconds": manager.get_remaining_seconds(),
            "is_backgrounded": manager.is_backgrounded(),
            "is_time_up": manager.is_time_up(),
            "current_index": manager.get_current_index(),
            "question_count": manager.get_question_count(),
            "unanswered_count": manager.get_unanswered_count(),
            "submission_state": manager.get_submission_state().name.lower(),
            "question_statuses": [status.name.lower() for status in manager.get_question_statuses()],
            "result": _result_payload(manager.get_result()),
        }

    @app.get("/questions/{index}")
    def get_question(index: int, manager: AttemptSession = Depends(session_dep)) -> dict[str, object]:
        try:
            question = manager.get_question_at_index(index)
        except IndexError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        answer = manager.get_answer(question.id)
        return {
            "index": index,
            "question_id": question.id,
            "subject_name": question.subject_name,
            "question_html": renderer.render_question_fragment(question),
            "options": [
                {"id": option.id, "label": option.label, "html": renderer.render_inline(option.text)}
                for option in question.options
            ],
            "selected_option_id": answer.selected_option_id if answer else None,
            "is_marked_for_review": bool(answer and answer.is_marked_for_review),
        }

    @app.post("/answer")
    def select_answer(payload: AnswerPayload, manager: AttemptSession = Depends(session_dep)) -> dict[str, object]:
        try:
            accepted = manager.select_option(payload.question_id, payload.option_id)
        except LookupError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        if not accepted:
            raise HTTPException(status_code=409, detail=_locked_detail(manager))
        return {"question_id": payload.question_id, "selected_option_id": payload.option_id}

    @app.post("/review")
    def toggle_review(payload: ReviewPayload, manager: AttemptSession = Depends(session_dep)) -> dict[str, object]:
        try:
            accepted = manager.toggle_review(payload.question_id)
        except LookupError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        if not accepted:
            raise HTTPException(status_code=409, detail=_locked_detail(manager))
        answer = manager.get_answer(payload.question_id)
        return {
            "question_id": payload.question_id,
            "is_marked_for_review": bool(answer and answer.is_marked_for_review),
        }

    @app.post("/navigate")
    def navigate(payload: NavigatePayload, manager: AttemptSession = Depends(session_dep)) -> dict[str, object]:
        if not manager.is_interactive():
            raise HTTPException(status_code=409, detail=_locked_detail(manager))
        manager.go_to(payload.index)
        return {"current_index": manager.get_current_index()}

    @app.post("/submit", status_code=202)
    def submit(payload: SubmitPayload, manager: AttemptSession = Depends(session_dep)) -> dict[str, object]:
        prompt = manager.prepare_submit()
        if prompt is None:
            raise HTTPException(status_code=409, detail=_locked_detail(manager))
        if prompt.has_gaps and not payload.confirm_unanswered:
            raise HTTPException(
                status_code=409,
                detail=f"{prompt.unanswered_count} question(s) unanswered; confirm to submit anyway.",
            )
        if not manager.submit():
            raise HTTPException(status_code=409, detail=_locked_detail(manager))
        return {
            "submission_state": manager.get_submission_state().name.lower(),
            "result": _result_payload(manager.get_result()),
        }

    @app.get("/result")
    def get_result(manager: AttemptSession = Depends(session_dep)) -> dict[str, object]:
        result = _result_payload(manager.get_result())
        if result is None:
            raise HTTPException(status_code=404, detail="Attempt has not been submitted yet.")
        return result

    return app


def start_api_server(
    session: AttemptSession,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
) -> Thread:
    """Start the FastAPI server in a background daemon thread."""
    app = create_api_app(session)
    config = uvicorn.Config(app=app, host=host, port=port, log_level="info")
    server = uvicorn.Server(config)

    def run_server() -> None:
        server.run()

    thread = Thread(target=run_server, name="AttemptApiServer", daemon=True)
    thread.start()
    return thread
