"""Writes submitted attempt results to disk as JSON."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone
import json
import logging
from pathlib import Path

from attempt_app.core.models import Answer, Attempt, AttemptResult

logger = logging.getLogger(__name__)


def save_result_to_file(
    file_path: Path,
    attempt: Attempt,
    answers: list[Answer],
    result: AttemptResult,
    submitted_at: datetime | None = None,
) -> Path:
    """Persist the result document and return the resolved path."""
    file_path = file_path.resolve()
    file_path.parent.mkdir(parents=True, exist_ok=True)
    document = serialize_result(attempt, answers, result, submitted_at or datetime.now(timezone.utc))
    file_path.write_text(json.dumps(document, indent=2) + "\n", encoding="utf-8")
    logger.info("Result for attempt %s written to %s", attempt.attempt_id, file_path)
    return file_path


def serialize_result(
    attempt: Attempt,
    answers: list[Answer],
    result: AttemptResult,
    submitted_at: datetime,
) -> dict[str, object]:
    return {
        "attemptId": attempt.attempt_id,
        "testId": attempt.test_id,
        "startTime": attempt.start_time.isoformat(),
        "endTime": attempt.end_time.isoformat(),
        "submittedAt": submitted_at.isoformat(),
        "score": result.score,
        "total": result.total,
        "percentage": result.percentage,
        "passed": result.passed,
        "answers": [
            {
                "questionId": answer.question_id,
                "selectedOptionId": answer.selected_option_id,
                "isMarkedForReview": answer.is_marked_for_review,
            }
            for answer in sorted(answers, key=lambda a: str(a.question_id))
        ],
    }


class ResultFileSubmitter:
    """Attempt submitter that stores each result as ``<results_dir>/<attempt id>.json``."""

    def __init__(self, results_dir: Path) -> None:
        self._results_dir = results_dir
        self.last_written: Path | None = None

    def __call__(
        self,
        attempt: Attempt,
        answers: list[Answer],
        result: AttemptResult,
        on_success: Callable[[], None],
        on_failure: Callable[[Exception], None],
    ) -> None:
        try:
            self.last_written = save_result_to_file(
                self._results_dir / f"{attempt.attempt_id}.json", attempt, answers, result
            )
        except OSError as exc:
            on_failure(exc)
            return
        on_success()
