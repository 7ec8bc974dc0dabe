import copy
import json
from datetime import datetime, timezone

import pytest

from attempt_app.core.attempt_importer import (
    AttemptImportError,
    load_attempt_from_file,
    parse_attempt_bundle,
    parse_timestamp,
)

BUNDLE = {
    "test": {"id": "t1", "title": "Physics Mock 1", "passingScore": 60},
    "attempt": {
        "attemptId": "a1",
        "testId": "t1",
        "status": "in_progress",
        "startTime": "2026-01-01T10:00:00Z",
        "endTime": "2026-01-01T11:20:00Z",
        "answers": [{"questionId": "q2", "selectedOptionId": "b", "isMarkedForReview": True}],
    },
    "questions": [
        {
            "id": "q2",
            "order": 2,
            "text": "Second",
            "options": [{"id": "a", "label": "A", "text": "one"}, {"id": "b", "label": "B", "text": "two"}],
            "correctOptionId": "a",
        },
        {
            "id": "q1",
            "order": 1,
            "subjectName": "Physics",
            "text": "First $E=mc^2$",
            "options": [{"id": "x", "text": "yes"}, {"id": "y", "text": "no"}],
            "correctOptionId": "y",
            "explanation": "Because.",
        },
    ],
}


def _bundle(**overrides):
    payload = copy.deepcopy(BUNDLE)
    for path, value in overrides.items():
        section, _, key = path.partition("__")
        if key:
            payload[section][key] = value
        else:
            payload[section] = value
    return payload


class TestParseAttemptBundle:
    def test_parses_fields(self):
        bundle = parse_attempt_bundle(_bundle())
        assert bundle.attempt.attempt_id == "a1"
        assert bundle.attempt.end_time == datetime(2026, 1, 1, 11, 20, tzinfo=timezone.utc)
        assert bundle.passing_score == 60
        assert bundle.test_title == "Physics Mock 1"
        assert [q.id for q in bundle.questions] == ["q1", "q2"]
        assert bundle.questions[0].subject_name == "Physics"
        assert bundle.questions[0].explanation == "Because."

    def test_missing_labels_default_to_letters(self):
        bundle = parse_attempt_bundle(_bundle())
        assert [option.label for option in bundle.questions[0].options] == ["A", "B"]

    def test_stored_answers(self):
        answer = parse_attempt_bundle(_bundle()).answers[0]
        assert (answer.question_id, answer.selected_option_id, answer.is_marked_for_review) == ("q2", "b", True)

    def test_tuple_and_json_string_answers(self):
        payload = _bundle(attempt__answers=["[1, 0, false]", [0, None, True], [9, 0, False]])
        answers = parse_attempt_bundle(payload).answers
        assert [(a.question_id, a.selected_option_id, a.is_marked_for_review) for a in answers] == [
            ("q2", "a", False),
            ("q1", None, True),
        ]

    def test_plain_string_options_and_correct_index(self):
        payload = _bundle()
        payload["questions"] = [{"id": "q1", "text": "Pick", "options": ["red", "blue"], "correctIndex": 1}]
        question = parse_attempt_bundle(payload).questions[0]
        assert [option.id for option in question.options] == ["opt-0", "opt-1"]
        assert question.correct_option_id == "opt-1"

    def test_default_passing_score(self):
        payload = _bundle()
        del payload["test"]
        assert parse_attempt_bundle(payload).passing_score == 70

    def test_missing_end_time_is_rejected(self):
        payload = _bundle()
        del payload["attempt"]["endTime"]
        with pytest.raises(AttemptImportError, match="endTime"):
            parse_attempt_bundle(payload)

    def test_end_before_start_is_rejected(self):
        with pytest.raises(AttemptImportError, match="later than"):
            parse_attempt_bundle(_bundle(attempt__endTime="2026-01-01T09:00:00Z"))

    def test_finished_attempt_is_rejected(self):
        with pytest.raises(AttemptImportError, match="not in progress"):
            parse_attempt_bundle(_bundle(attempt__status="completed"))

    def test_empty_options_are_rejected(self):
        payload = _bundle()
        payload["questions"][0]["options"] = []
        with pytest.raises(AttemptImportError, match="at least one option"):
            parse_attempt_bundle(payload)

    def test_duplicate_option_ids_are_rejected(self):
        payload = _bundle()
        payload["questions"][0]["options"][1]["id"] = "a"
        with pytest.raises(AttemptImportError, match="duplicate option ids"):
            parse_attempt_bundle(payload)

    def test_unknown_correct_option_is_rejected(self):
        payload = _bundle()
        payload["questions"][0]["correctOptionId"] = "zzz"
        with pytest.raises(AttemptImportError, match="unknown correct option"):
            parse_attempt_bundle(payload)

    def test_duplicate_question_ids_are_rejected(self):
        payload = _bundle()
        payload["questions"][1]["id"] = "q2"
        with pytest.raises(AttemptImportError, match="Duplicate question id"):
            parse_attempt_bundle(payload)

    def test_passing_score_out_of_range(self):
        with pytest.raises(AttemptImportError, match="between 0 and 100"):
            parse_attempt_bundle(_bundle(test__passingScore=120))


class TestParseTimestamp:
    def test_zulu_suffix(self):
        assert parse_timestamp("2026-01-01T10:00:00Z", "t").tzinfo is not None

    def test_naive_is_utc(self):
        assert parse_timestamp("2026-01-01T10:00:00", "t").tzinfo == timezone.utc

    def test_garbage(self):
        with pytest.raises(AttemptImportError, match="ISO-8601"):
            parse_timestamp("yesterday", "startTime")


class TestLoadAttemptFromFile:
    def test_loads_and_records_source(self, tmp_path):
        path = tmp_path / "attempt.json"
        path.write_text(json.dumps(BUNDLE), encoding="utf-8")
        bundle = load_attempt_from_file(path)
        assert bundle.source_path == path
        assert len(bundle.questions) == 2

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(AttemptImportError, match="not valid JSON"):
            load_attempt_from_file(path)

    def test_missing_file_propagates_os_error(self, tmp_path):
        with pytest.raises(OSError):
            load_attempt_from_file(tmp_path / "missing.json")
