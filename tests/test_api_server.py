import pytest
from fastapi.testclient import TestClient

from attempt_app.core.services.attempt_clock import AppLifecycleState
from attempt_app.server.api_server import create_api_app


@pytest.fixture
def client(session):
    return TestClient(create_api_app(session))


class TestReadEndpoints:
    def test_attempt_snapshot(self, client):
        body = client.get("/attempt").json()
        assert body["attempt_id"] == "a1"
        assert body["remaining_seconds"] == 4800
        assert body["question_count"] == 4
        assert body["submission_state"] == "in_progress"
        assert body["question_statuses"][0] == "current"
        assert body["result"] is None

    def test_question_includes_rendered_html(self, client):
        body = client.get("/questions/0").json()
        assert body["question_id"] == "q1"
        assert '<p class="subject">Physics</p>' in body["question_html"]
        assert [option["label"] for option in body["options"]] == ["A", "B", "C", "D"]
        assert body["selected_option_id"] is None

    def test_question_out_of_range(self, client):
        assert client.get("/questions/9").status_code == 404

    def test_result_before_submit(self, client):
        assert client.get("/result").status_code == 404


class TestAnswerEndpoints:
    def test_select_answer(self, client, session):
        response = client.post("/answer", json={"question_id": "q1", "option_id": "q1-o2"})
        assert response.status_code == 200
        assert session.get_answer("q1").selected_option_id == "q1-o2"

    def test_unknown_question(self, client):
        response = client.post("/answer", json={"question_id": "zz", "option_id": "q1-o2"})
        assert response.status_code == 404

    def test_unknown_option(self, client):
        response = client.post("/answer", json={"question_id": "q1", "option_id": "q2-o0"})
        assert response.status_code == 422

    def test_locked_while_backgrounded(self, client, lifecycle):
        lifecycle.emit(AppLifecycleState.BACKGROUND)
        response = client.post("/answer", json={"question_id": "q1", "option_id": "q1-o0"})
        assert response.status_code == 409
        assert "paused" in response.json()["detail"]

    def test_toggle_review(self, client):
        response = client.post("/review", json={"question_id": "q3"})
        assert response.json() == {"question_id": "q3", "is_marked_for_review": True}

    def test_navigate(self, client):
        assert client.post("/navigate", json={"index": 2}).json() == {"current_index": 2}
        assert client.post("/navigate", json={"index": 10}).json() == {"current_index": 2}


class TestSubmitEndpoint:
    def test_unconfirmed_gaps_are_refused(self, client, session):
        response = client.post("/submit", json={})
        assert response.status_code == 409
        assert "4 question(s) unanswered" in response.json()["detail"]
        assert session.get_result() is None

    def test_confirmed_submit_returns_result(self, client):
        client.post("/answer", json={"question_id": "q1", "option_id": "q1-o0"})
        response = client.post("/submit", json={"confirm_unanswered": True})
        assert response.status_code == 202
        body = response.json()
        assert body["submission_state"] == "submitted"
        assert body["result"] == {"score": 1, "total": 4, "percentage": 25, "passed": False}
        assert client.get("/result").json()["percentage"] == 25

    def test_second_submit_conflicts(self, client):
        client.post("/submit", json={"confirm_unanswered": True})
        response = client.post("/submit", json={"confirm_unanswered": True})
        assert response.status_code == 409
