"""Utilities for loading an attempt bundle handed over by the backend.

File format (JSON, camelCase keys as produced by the backend):

    {
      "test": {"id": "t1", "title": "Physics Mock 1", "passingScore": 70},
      "attempt": {
        "attemptId": "a1", "testId": "t1", "status": "in_progress",
        "startTime": "2026-01-01T10:00:00Z",
        "endTime": "2026-01-01T11:20:00Z",
        "answers": [{"questionId": "q1", "selectedOptionId": "opt-0", "isMarkedForReview": false}]
      },
      "questions": [
        {"id": "q1", "order": 1, "subjectName": "Physics", "text": "...",
         "options": [{"id": "opt-0", "label": "A", "text": "..."}],
         "correctOptionId": "opt-0", "explanation": "..."}
      ]
    }

Stored answers may also use the compact ``[questionIndex, selectedIndex, isMarkedForReview]``
tuple form; those are translated to ids against the ordered question list.

Architecture note:
    The end time is mandatory. The client never derives a deadline from a
    duration, so a bundle without ``endTime`` is rejected instead of guessed.
"""

from __future__ import annotations

from datetime import datetime, timezone
import json
import logging
from pathlib import Path
from typing import Any

from attempt_app.constants.attempt_constants import DEFAULT_PASSING_SCORE, OPTION_LABELS
from attempt_app.core.models import Answer, Attempt, AttemptBundle, Question, QuestionOption

logger = logging.getLogger(__name__)


class AttemptImportError(Exception):
    """Raised when an attempt bundle cannot be parsed."""


def load_attempt_from_file(file_path: Path) -> AttemptBundle:
    try:
        payload = json.loads(file_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise AttemptImportError(f"Attempt file is not valid JSON: {exc.msg} (line {exc.lineno}).") from exc
    bundle = parse_attempt_bundle(payload)
    bundle.source_path = file_path
    logger.info(
        "Loaded attempt %s with %d questions from %s",
        bundle.attempt.attempt_id,
        len(bundle.questions),
        file_path,
    )
    return bundle


def parse_attempt_bundle(payload: dict[str, Any]) -> AttemptBundle:
    if not isinstance(payload, dict):
        raise AttemptImportError("Attempt bundle must be a JSON object.")

    test = payload.get("test") or {}
    attempt = parse_attempt(_require(payload, "attempt"))
    if attempt.status != "in_progress":
        raise AttemptImportError(f"Attempt {attempt.attempt_id} is {attempt.status}, not in progress.")

    raw_questions = _require(payload, "questions")
    if not isinstance(raw_questions, list):
        raise AttemptImportError("'questions' must be a list.")
    questions = sorted((parse_question(raw) for raw in raw_questions), key=lambda q: q.order)

    seen: set[str] = set()
    for question in questions:
        if question.id in seen:
            raise AttemptImportError(f"Duplicate question id {question.id!r}.")
        seen.add(question.id)

    passing_score = _parse_passing_score(test.get("passingScore", DEFAULT_PASSING_SCORE))
    answers = _parse_answers(payload["attempt"].get("answers") or [], questions)

    return AttemptBundle(
        attempt=attempt,
        questions=questions,
        passing_score=passing_score,
        test_title=str(test.get("title") or ""),
        answers=answers,
    )


def parse_attempt(raw: dict[str, Any]) -> Attempt:
    if not isinstance(raw, dict):
        raise AttemptImportError("'attempt' must be an object.")
    start_time = parse_timestamp(_require(raw, "startTime"), "startTime")
    end_time = parse_timestamp(_require(raw, "endTime"), "endTime")
    if end_time <= start_time:
        raise AttemptImportError("endTime must be later than startTime.")
    return Attempt(
        attempt_id=str(_require(raw, "attemptId")),
        test_id=str(_require(raw, "testId")),
        start_time=start_time,
        end_time=end_time,
        status=str(raw.get("status", "in_progress")),
    )


def parse_question(raw: dict[str, Any]) -> Question:
    if not isinstance(raw, dict):
        raise AttemptImportError("Each question must be an object.")
    question_id = str(_require(raw, "id"))
    text = str(raw.get("text") or "").strip()
    if not text:
        raise AttemptImportError(f"Question {question_id!r} has no text.")

    raw_options = raw.get("options") or []
    if not raw_options:
        raise AttemptImportError(f"Question {question_id!r} must have at least one option.")
    options = tuple(_parse_option(opt, idx) for idx, opt in enumerate(raw_options))
    option_ids = [option.id for option in options]
    if len(set(option_ids)) != len(option_ids):
        raise AttemptImportError(f"Question {question_id!r} has duplicate option ids.")

    correct_option_id = raw.get("correctOptionId")
    if correct_option_id is None and "correctIndex" in raw:
        correct_index = raw["correctIndex"]
        if not isinstance(correct_index, int) or not 0 <= correct_index < len(options):
            raise AttemptImportError(f"Question {question_id!r} has an invalid correctIndex.")
        correct_option_id = options[correct_index].id
    if correct_option_id not in option_ids:
        raise AttemptImportError(f"Question {question_id!r} names an unknown correct option.")

    try:
        order = int(raw.get("order", 0))
    except (TypeError, ValueError) as exc:
        raise AttemptImportError(f"Question {question_id!r} has a non-numeric order.") from exc

    return Question(
        id=question_id,
        order=order,
        text=text,
        options=options,
        correct_option_id=str(correct_option_id),
        subject_name=str(raw.get("subjectName") or ""),
        explanation=str(raw.get("explanation") or ""),
    )


def parse_timestamp(value: Any, field_name: str) -> datetime:
    """Parse an ISO-8601 string; naive values are taken as UTC."""
    if not isinstance(value, str) or not value.strip():
        raise AttemptImportError(f"{field_name} must be an ISO-8601 string.")
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as exc:
        raise AttemptImportError(f"{field_name} is not a valid ISO-8601 timestamp: {value!r}.") from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _parse_option(raw: Any, index: int) -> QuestionOption:
    default_label = OPTION_LABELS[index] if index < len(OPTION_LABELS) else str(index + 1)
    if isinstance(raw, str):
        # Plain option text, as older question documents stored it.
        return QuestionOption(id=f"opt-{index}", label=default_label, text=raw.strip())
    if not isinstance(raw, dict):
        raise AttemptImportError("Options must be objects or strings.")
    text = str(raw.get("text") or "").strip()
    if not text:
        raise AttemptImportError("Option text cannot be empty.")
    return QuestionOption(
        id=str(raw.get("id") or f"opt-{index}"),
        label=str(raw.get("label") or default_label),
        text=text,
    )


def _parse_answers(raw_answers: list[Any], questions: list[Question]) -> list[Answer]:
    answers: list[Answer] = []
    for raw in raw_answers:
        if isinstance(raw, str):
            try:
                raw = json.loads(raw)
            except json.JSONDecodeError as exc:
                raise AttemptImportError(f"Stored answer is not valid JSON: {raw!r}.") from exc
        if isinstance(raw, list):
            answer = _answer_from_tuple(raw, questions)
            if answer is not None:
                answers.append(answer)
            continue
        if not isinstance(raw, dict):
            raise AttemptImportError("Stored answers must be objects or [index, option, flag] lists.")
        answers.append(
            Answer(
                question_id=str(_require(raw, "questionId")),
                selected_option_id=raw.get("selectedOptionId"),
                is_marked_for_review=bool(raw.get("isMarkedForReview", False)),
            )
        )
    return answers


def _answer_from_tuple(raw: list[Any], questions: list[Question]) -> Answer | None:
    if len(raw) != 3:
        raise AttemptImportError(f"Answer tuple must have three entries: {raw!r}.")
    question_index, selected_index, is_marked = raw
    if not isinstance(question_index, int) or not 0 <= question_index < len(questions):
        logger.warning("Dropping stored answer for unknown question index %r", question_index)
        return None
    question = questions[question_index]
    selected_option_id = None
    if isinstance(selected_index, int) and 0 <= selected_index < len(question.options):
        selected_option_id = question.options[selected_index].id
    return Answer(
        question_id=question.id,
        selected_option_id=selected_option_id,
        is_marked_for_review=bool(is_marked),
    )


def _parse_passing_score(value: Any) -> int:
    try:
        score = int(value)
    except (TypeError, ValueError) as exc:
        raise AttemptImportError("passingScore must be an integer percentage.") from exc
    if not 0 <= score <= 100:
        raise AttemptImportError("passingScore must be between 0 and 100.")
    return score


def _require(raw: dict[str, Any], key: str) -> Any:
    if key not in raw or raw[key] is None:
        raise AttemptImportError(f"Missing required field '{key}'.")
    return raw[key]
