"""Business logic for one timed attempt, shared between the Qt window and the API."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
import logging
from threading import RLock
from typing import Protocol

from attempt_app.core.models import (
    Answer,
    Attempt,
    AttemptBundle,
    AttemptResult,
    Question,
    QuestionReview,
    QuestionStatus,
    ReviewSummary,
)
from attempt_app.core.services.answer_set import AnswerSet
from attempt_app.core.services.attempt_clock import (
    AttemptClock,
    LifecycleSource,
    PeriodicScheduler,
    utc_now,
)
from attempt_app.core.services.scorer import build_review, score_answers
from attempt_app.core.services.submission import (
    SubmissionMachine,
    SubmissionState,
    SubmissionTrigger,
)

logger = logging.getLogger(__name__)


class AttemptSubmitter(Protocol):
    """Hands a scored attempt to whoever persists it.

    Implementations call exactly one of the callbacks, either before returning or
    later from any thread. Raising is treated the same as calling ``on_failure``.
    """

    def __call__(
        self,
        attempt: Attempt,
        answers: list[Answer],
        result: AttemptResult,
        on_success: Callable[[], None],
        on_failure: Callable[[Exception], None],
    ) -> None: ...


@dataclass(slots=True, frozen=True)
class SubmitPrompt:
    """What the UI needs to pick the right confirmation dialog."""

    unanswered_count: int

    @property
    def has_gaps(self) -> bool:
        return self.unanswered_count > 0


class AttemptSession:
    """Facade over the clock, answer set, navigation cursor and submission machine."""

    def __init__(
        self,
        bundle: AttemptBundle,
        scheduler: PeriodicScheduler,
        lifecycle: LifecycleSource,
        submitter: AttemptSubmitter,
        now: Callable[[], datetime] = utc_now,
    ) -> None:
        self._lock = RLock()
        self._bundle = bundle
        self._questions: list[Question] = list(bundle.questions)
        self._question_index = {q.id: idx for idx, q in enumerate(self._questions)}
        self._submitter = submitter

        self._answers = AnswerSet.from_answers(bundle.answers)
        self._machine = SubmissionMachine()
        self._clock = AttemptClock(
            end_time=bundle.attempt.end_time,
            scheduler=scheduler,
            lifecycle=lifecycle,
            on_expiry=self._handle_expiry,
            now=now,
        )
        self._current_index: int = 0
        self._result: AttemptResult | None = None
        self._submission_token: int = 0
        self._started: bool = False

        self._time_up_listeners: list[Callable[[], None]] = []
        self._submitted_listeners: list[Callable[[AttemptResult], None]] = []
        self._failed_listeners: list[Callable[[Exception, bool], None]] = []

    # --- Lifecycle ---

    def start(self) -> None:
        with self._lock:
            if self._started:
                return
            self._started = True
            logger.info(
                "Starting attempt %s (%d questions, deadline %s)",
                self._bundle.attempt.attempt_id,
                len(self._questions),
                self._bundle.attempt.end_time.isoformat(),
            )
            self._clock.start()

    def close(self) -> None:
        """Tear down the clock when the attempt screen goes away."""
        with self._lock:
            self._clock.close()

    def add_time_up_listener(self, callback: Callable[[], None]) -> None:
        self._time_up_listeners.append(callback)

    def add_submitted_listener(self, callback: Callable[[AttemptResult], None]) -> None:
        self._submitted_listeners.append(callback)

    def add_submit_failed_listener(self, callback: Callable[[Exception, bool], None]) -> None:
        self._failed_listeners.append(callback)

    # --- Read-only state ---

    @property
    def attempt(self) -> Attempt:
        return self._bundle.attempt

    @property
    def test_title(self) -> str:
        return self._bundle.test_title

    @property
    def passing_score(self) -> int:
        return self._bundle.passing_score

    def get_questions(self) -> list[Question]:
        return list(self._questions)

    def get_question_count(self) -> int:
        return len(self._questions)

    def get_question_at_index(self, index: int) -> Question:
        if not 0 <= index < len(self._questions):
            raise IndexError(f"Question index {index} out of range")
        return self._questions[index]

    def get_current_index(self) -> int:
        with self._lock:
            return self._current_index

    def get_current_question(self) -> Question | None:
        with self._lock:
            if not self._questions:
                return None
            return self._questions[self._current_index]

    def get_remaining_seconds(self) -> int:
        return self._clock.remaining_seconds

    def is_backgrounded(self) -> bool:
        return self._clock.is_backgrounded

    def is_time_up(self) -> bool:
        return self._clock.has_expired

    def get_submission_state(self) -> SubmissionState:
        with self._lock:
            return self._machine.state

    def is_interactive(self) -> bool:
        """True when answers, flags and navigation may change."""
        with self._lock:
            return self._can_mutate()

    def get_answer(self, question_id: str) -> Answer | None:
        with self._lock:
            return self._answers.get(question_id)

    def get_answers(self) -> list[Answer]:
        with self._lock:
            return self._answers.answers()

    def get_unanswered_count(self) -> int:
        with self._lock:
            answered = self._answers.answered_count(self._question_index)
            return len(self._questions) - answered

    def get_question_statuses(self) -> list[QuestionStatus]:
        with self._lock:
            statuses: list[QuestionStatus] = []
            for idx, question in enumerate(self._questions):
                if idx == self._current_index:
                    statuses.append(QuestionStatus.CURRENT)
                elif self._answers.is_answered(question.id):
                    statuses.append(QuestionStatus.ANSWERED)
                elif self._answers.is_flagged(question.id):
                    statuses.append(QuestionStatus.FLAGGED)
                else:
                    statuses.append(QuestionStatus.UNANSWERED)
            return statuses

    def get_result(self) -> AttemptResult | None:
        with self._lock:
            return self._result

    def get_review(self) -> tuple[list[QuestionReview], ReviewSummary]:
        with self._lock:
            return build_review(self._questions, self._answers.answers())

    # --- Answer mutation ---

    def select_option(self, question_id: str, option_id: str) -> bool:
        """Record a selection. Returns False when interaction is currently disabled."""
        with self._lock:
            question = self._require_question(question_id)
            if question.option_by_id(option_id) is None:
                raise ValueError(f"Option {option_id!r} does not belong to question {question_id!r}.")
            if not self._can_mutate():
                return False
            self._answers.select_option(question_id, option_id)
            return True

    def toggle_review(self, question_id: str) -> bool:
        with self._lock:
            self._require_question(question_id)
            if not self._can_mutate():
                return False
            self._answers.toggle_review(question_id)
            return True

    # --- Navigation ---

    def go_to(self, index: int) -> bool:
        """Move to a question. Out-of-range targets are ignored."""
        with self._lock:
            if not self._can_mutate():
                return False
            if not 0 <= index < len(self._questions):
                return False
            self._current_index = index
            return True

    def go_next(self) -> bool:
        with self._lock:
            return self.go_to(self._current_index + 1)

    def go_previous(self) -> bool:
        with self._lock:
            return self.go_to(self._current_index - 1)

    # --- Submission ---

    def prepare_submit(self) -> SubmitPrompt | None:
        """Return what the confirmation dialog needs, or None if submitting is not possible."""
        with self._lock:
            if self._clock.is_backgrounded or not self._machine.is_in_progress():
                return None
            return SubmitPrompt(unanswered_count=self.get_unanswered_count())

    def submit(self) -> bool:
        """Submit after the user confirmed. After the deadline this acts as a retry of the auto-submit."""
        with self._lock:
            if self._clock.is_backgrounded:
                logger.info("Submit ignored while the attempt is backgrounded")
                return False
            trigger = SubmissionTrigger.EXPIRY if self._clock.has_expired else SubmissionTrigger.MANUAL
        return self._begin_submission(trigger)

    def _handle_expiry(self) -> None:
        if self._begin_submission(SubmissionTrigger.EXPIRY, notify_time_up=True):
            return
        logger.info("Deadline reached while a submission was already in flight")

    def _begin_submission(self, trigger: SubmissionTrigger, notify_time_up: bool = False) -> bool:
        with self._lock:
            if not self._machine.begin(trigger):
                return False
            self._clock.halt()
            self._submission_token += 1
            token = self._submission_token
            answers = self._answers.answers()
            result = score_answers(self._questions, answers, self._bundle.passing_score)

        logger.info(
            "Submitting attempt %s (%s): %d/%d correct",
            self._bundle.attempt.attempt_id,
            trigger.name,
            result.score,
            result.total,
        )
        if notify_time_up:
            for listener in list(self._time_up_listeners):
                listener()

        try:
            self._submitter(
                self._bundle.attempt,
                answers,
                result,
                lambda: self._handle_submit_success(token, result),
                lambda exc: self._handle_submit_failure(token, exc),
            )
        except Exception as exc:
            logger.exception("Submitter raised while handing off attempt %s", self._bundle.attempt.attempt_id)
            self._handle_submit_failure(token, exc)
        return True

    def _handle_submit_success(self, token: int, result: AttemptResult) -> None:
        with self._lock:
            if token != self._submission_token or self._machine.state is not SubmissionState.SUBMITTING:
                return
            self._machine.complete()
            self._result = result
            self._clock.close()
        for listener in list(self._submitted_listeners):
            listener(result)

    def _handle_submit_failure(self, token: int, error: Exception) -> None:
        with self._lock:
            if token != self._submission_token or self._machine.state is not SubmissionState.SUBMITTING:
                return
            failed_trigger = self._machine.trigger
            self._machine.fail(error)
            expired = self._clock.is_past_deadline()
            if not expired:
                self._clock.resume()
        logger.warning("Submission of attempt %s failed: %s", self._bundle.attempt.attempt_id, error)
        for listener in list(self._failed_listeners):
            listener(error, expired)
        if expired and failed_trigger is SubmissionTrigger.MANUAL:
            # Deadline passed while a manual submission was in flight: expire again
            # right away. A failed automatic submission waits for an explicit retry.
            self._clock.resume()

    # --- Helpers ---

    def _can_mutate(self) -> bool:
        return (
            not self._clock.is_backgrounded
            and not self._clock.has_expired
            and self._machine.is_in_progress()
        )

    def _require_question(self, question_id: str) -> Question:
        idx = self._question_index.get(question_id)
        if idx is None:
            raise LookupError(f"Unknown question {question_id!r}.")
        return self._questions[idx]
