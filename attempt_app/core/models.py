"""Domain models for the attempt client."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from pathlib import Path


@dataclass(slots=True, frozen=True)
class QuestionOption:
    """A single selectable option of a multiple-choice question."""

    id: str
    label: str
    text: str


@dataclass(slots=True, frozen=True)
class Question:
    """Multiple-choice question with exactly one correct option."""

    id: str
    order: int
    text: str
    options: tuple[QuestionOption, ...]
    correct_option_id: str
    subject_name: str = ""
    explanation: str = ""

    def option_by_id(self, option_id: str) -> QuestionOption | None:
        return next((option for option in self.options if option.id == option_id), None)


@dataclass(slots=True, frozen=True)
class Attempt:
    """One timed test-taking session. ``end_time`` is issued by the server and never extended."""

    attempt_id: str
    test_id: str
    start_time: datetime
    end_time: datetime
    status: str = "in_progress"


@dataclass(slots=True)
class Answer:
    """Student intent for one question; selection and review flag are independent."""

    question_id: str
    selected_option_id: str | None = None
    is_marked_for_review: bool = False

    @property
    def is_answered(self) -> bool:
        return self.selected_option_id is not None


@dataclass(slots=True, frozen=True)
class AttemptResult:
    """Outcome of scoring an attempt."""

    score: int
    total: int
    percentage: int
    passed: bool


@dataclass(slots=True, frozen=True)
class QuestionReview:
    """Per-question row shown on the review screen."""

    question: Question
    selected_option_id: str | None
    is_correct: bool
    is_marked_for_review: bool


@dataclass(slots=True, frozen=True)
class ReviewSummary:
    correct_count: int
    incorrect_count: int
    unanswered_count: int


class QuestionStatus(Enum):
    """Palette status for a question button."""

    CURRENT = auto()
    ANSWERED = auto()
    FLAGGED = auto()
    UNANSWERED = auto()


@dataclass(slots=True)
class AttemptBundle:
    """Everything needed to run one attempt, as handed over by the backend."""

    attempt: Attempt
    questions: list[Question]
    passing_score: int
    test_title: str = ""
    answers: list[Answer] = field(default_factory=list)
    source_path: Path | None = None
