from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta, timezone

import pytest

from attempt_app.core.attempt_session import AttemptSession
from attempt_app.core.models import Answer, Attempt, AttemptBundle, Question, QuestionOption
from attempt_app.core.services.attempt_clock import AppLifecycleState

START = datetime(2026, 1, 1, 10, 0, tzinfo=timezone.utc)


class FakeScheduler:
    def __init__(self) -> None:
        self.callback: Callable[[], None] | None = None
        self.interval_ms: int | None = None
        self.start_calls = 0
        self.stop_calls = 0

    @property
    def running(self) -> bool:
        return self.callback is not None

    def start(self, interval_ms: int, callback: Callable[[], None]) -> None:
        self.interval_ms = interval_ms
        self.callback = callback
        self.start_calls += 1

    def stop(self) -> None:
        self.callback = None
        self.stop_calls += 1

    def fire(self) -> None:
        if self.callback is not None:
            self.callback()


class FakeSubscription:
    def __init__(self, source: "FakeLifecycle", callback: Callable[[AppLifecycleState], None]) -> None:
        self._source = source
        self._callback = callback

    def remove(self) -> None:
        self._source.callbacks.remove(self._callback)


class FakeLifecycle:
    def __init__(self) -> None:
        self.callbacks: list[Callable[[AppLifecycleState], None]] = []

    def subscribe(self, callback: Callable[[AppLifecycleState], None]) -> FakeSubscription:
        self.callbacks.append(callback)
        return FakeSubscription(self, callback)

    def emit(self, state: AppLifecycleState) -> None:
        for callback in list(self.callbacks):
            callback(state)


class FakeNow:
    """Manually advanced wall clock."""

    def __init__(self, current: datetime) -> None:
        self.current = current

    def __call__(self) -> datetime:
        return self.current

    def advance(self, seconds: float) -> None:
        self.current += timedelta(seconds=seconds)


class RecordingSubmitter:
    """Submitter that either answers immediately or holds the callbacks for the test."""

    def __init__(self, mode: str = "succeed") -> None:
        self.mode = mode
        self.calls: list[tuple[Attempt, list[Answer], object]] = []
        self.pending: list[tuple[Callable[[], None], Callable[[Exception], None]]] = []

    def __call__(self, attempt, answers, result, on_success, on_failure) -> None:
        self.calls.append((attempt, answers, result))
        if self.mode == "succeed":
            on_success()
        elif self.mode == "fail":
            on_failure(OSError("network down"))
        elif self.mode == "raise":
            raise RuntimeError("submitter crashed")
        else:
            self.pending.append((on_success, on_failure))


def make_question(question_id: str, order: int, correct_index: int = 0, option_count: int = 4) -> Question:
    options = tuple(
        QuestionOption(id=f"{question_id}-o{idx}", label="ABCDEF"[idx], text=f"Option {idx}")
        for idx in range(option_count)
    )
    return Question(
        id=question_id,
        order=order,
        text=f"Question {order} text with $x^{order}$",
        options=options,
        correct_option_id=options[correct_index].id,
        subject_name="Physics",
    )


def make_bundle(
    question_count: int = 4,
    duration_seconds: int = 80 * 60,
    answers: list[Answer] | None = None,
    passing_score: int = 70,
) -> AttemptBundle:
    questions = [make_question(f"q{idx + 1}", idx + 1) for idx in range(question_count)]
    attempt = Attempt(
        attempt_id="a1",
        test_id="t1",
        start_time=START,
        end_time=START + timedelta(seconds=duration_seconds),
    )
    return AttemptBundle(
        attempt=attempt,
        questions=questions,
        passing_score=passing_score,
        test_title="Physics Mock 1",
        answers=list(answers or []),
    )


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def lifecycle() -> FakeLifecycle:
    return FakeLifecycle()


@pytest.fixture
def now() -> FakeNow:
    return FakeNow(START)


@pytest.fixture
def submitter() -> RecordingSubmitter:
    return RecordingSubmitter()


@pytest.fixture
def bundle() -> AttemptBundle:
    return make_bundle()


@pytest.fixture
def session(bundle, scheduler, lifecycle, submitter, now) -> AttemptSession:
    attempt_session = AttemptSession(bundle, scheduler, lifecycle, submitter, now=now)
    attempt_session.start()
    return attempt_session
