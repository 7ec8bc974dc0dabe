"""Service holding the student's in-memory answers for an attempt."""

from __future__ import annotations

from collections.abc import Iterable

from attempt_app.core.models import Answer


class AnswerSet:
    """Mutable mapping of question id to the student's answer.

    Correctness is never checked here; that only happens when the attempt is scored.
    """

    def __init__(self) -> None:
        self._answers: dict[str, Answer] = {}

    @classmethod
    def from_answers(cls, answers: Iterable[Answer]) -> "AnswerSet":
        """Seed a set from answers already stored on the attempt."""
        answer_set = cls()
        for answer in answers:
            answer_set._answers[answer.question_id] = Answer(
                question_id=answer.question_id,
                selected_option_id=answer.selected_option_id,
                is_marked_for_review=answer.is_marked_for_review,
            )
        return answer_set

    def select_option(self, question_id: str, option_id: str) -> Answer:
        """Insert or replace the selection for a question, keeping its review flag."""
        existing = self._answers.get(question_id)
        answer = Answer(
            question_id=question_id,
            selected_option_id=option_id,
            is_marked_for_review=existing.is_marked_for_review if existing else False,
        )
        self._answers[question_id] = answer
        return answer

    def toggle_review(self, question_id: str) -> Answer:
        """Flip the review flag, creating an unanswered entry when needed."""
        existing = self._answers.get(question_id)
        answer = Answer(
            question_id=question_id,
            selected_option_id=existing.selected_option_id if existing else None,
            is_marked_for_review=not (existing.is_marked_for_review if existing else False),
        )
        self._answers[question_id] = answer
        return answer

    def get(self, question_id: str) -> Answer | None:
        return self._answers.get(question_id)

    def answers(self) -> list[Answer]:
        """Return copies of all recorded answers."""
        return [
            Answer(a.question_id, a.selected_option_id, a.is_marked_for_review)
            for a in self._answers.values()
        ]

    def is_answered(self, question_id: str) -> bool:
        answer = self._answers.get(question_id)
        return answer is not None and answer.is_answered

    def is_flagged(self, question_id: str) -> bool:
        answer = self._answers.get(question_id)
        return answer is not None and answer.is_marked_for_review

    def answered_count(self, question_ids: Iterable[str] | None = None) -> int:
        if question_ids is None:
            return sum(1 for a in self._answers.values() if a.is_answered)
        return sum(1 for qid in question_ids if self.is_answered(qid))

    def __len__(self) -> int:
        return len(self._answers)
