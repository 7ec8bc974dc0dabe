import json
from datetime import datetime, timezone

from attempt_app.core.models import Answer, AttemptResult
from attempt_app.core.result_exporter import ResultFileSubmitter, save_result_to_file

from conftest import make_bundle

RESULT = AttemptResult(score=2, total=4, percentage=50, passed=False)
ANSWERS = [Answer("q2", "q2-o1", True), Answer("q1", "q1-o0")]


class TestSaveResultToFile:
    def test_writes_camel_case_document(self, tmp_path):
        attempt = make_bundle().attempt
        submitted_at = datetime(2026, 1, 1, 10, 30, tzinfo=timezone.utc)

        path = save_result_to_file(tmp_path / "out" / "a1.json", attempt, ANSWERS, RESULT, submitted_at)

        document = json.loads(path.read_text(encoding="utf-8"))
        assert document["attemptId"] == "a1"
        assert document["testId"] == "t1"
        assert document["submittedAt"] == "2026-01-01T10:30:00+00:00"
        assert (document["score"], document["total"], document["percentage"], document["passed"]) == (2, 4, 50, False)
        assert document["answers"] == [
            {"questionId": "q1", "selectedOptionId": "q1-o0", "isMarkedForReview": False},
            {"questionId": "q2", "selectedOptionId": "q2-o1", "isMarkedForReview": True},
        ]


class TestResultFileSubmitter:
    def test_success_writes_attempt_file(self, tmp_path):
        submitter = ResultFileSubmitter(tmp_path)
        outcomes = []

        submitter(make_bundle().attempt, ANSWERS, RESULT, lambda: outcomes.append("ok"), outcomes.append)

        assert outcomes == ["ok"]
        assert submitter.last_written == (tmp_path / "a1.json").resolve()
        assert submitter.last_written.exists()

    def test_os_error_reports_failure(self, tmp_path):
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("file in the way", encoding="utf-8")
        submitter = ResultFileSubmitter(blocker)
        outcomes = []

        submitter(make_bundle().attempt, ANSWERS, RESULT, lambda: outcomes.append("ok"), outcomes.append)

        assert len(outcomes) == 1
        assert isinstance(outcomes[0], OSError)
        assert submitter.last_written is None
