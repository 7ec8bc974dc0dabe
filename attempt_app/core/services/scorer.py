"""Scoring of recorded answers against a question bank's answer key.

Answers may reference their question either by id or by position in the ordered
question list. References that do not resolve are skipped: they count neither as
correct nor as incorrect, while the denominator is always the number of questions.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from decimal import ROUND_HALF_UP, Decimal

from attempt_app.core.models import (
    Answer,
    AttemptResult,
    Question,
    QuestionReview,
    ReviewSummary,
)


def score_answers(
    questions: Sequence[Question],
    answers: Iterable[Answer],
    passing_score: int = 0,
) -> AttemptResult:
    """Count correct answers and derive the rounded percentage.

    Args:
        questions: Ordered question list (may be empty)
        answers: Recorded answers; review flags have no effect on correctness
        passing_score: Minimum percentage needed to pass

    Returns:
        AttemptResult with score, total, percentage and pass status
    """
    total = len(questions)
    if total == 0:
        return AttemptResult(score=0, total=0, percentage=0, passed=0 >= passing_score)

    resolved = _resolve_answers(questions, answers)
    score = sum(
        1
        for question in questions
        if question.id in resolved
        and resolved[question.id].selected_option_id == question.correct_option_id
    )

    percentage = calculate_percentage(score, total)
    return AttemptResult(
        score=score,
        total=total,
        percentage=percentage,
        passed=percentage >= passing_score,
    )


def calculate_percentage(score: int, total: int) -> int:
    """Return ``score / total * 100`` rounded half-up, or 0 when there is nothing to score."""
    if total <= 0:
        return 0
    exact = Decimal(score) * 100 / Decimal(total)
    return int(exact.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def build_review(
    questions: Sequence[Question],
    answers: Iterable[Answer],
) -> tuple[list[QuestionReview], ReviewSummary]:
    """Pair every question with the student's answer for the review screen."""
    resolved = _resolve_answers(questions, answers)
    reviews: list[QuestionReview] = []
    correct = incorrect = unanswered = 0
    for question in questions:
        answer = resolved.get(question.id)
        selected = answer.selected_option_id if answer else None
        is_correct = selected is not None and selected == question.correct_option_id
        if selected is None:
            unanswered += 1
        elif is_correct:
            correct += 1
        else:
            incorrect += 1
        reviews.append(
            QuestionReview(
                question=question,
                selected_option_id=selected,
                is_correct=is_correct,
                is_marked_for_review=bool(answer and answer.is_marked_for_review),
            )
        )

    summary = ReviewSummary(
        correct_count=correct,
        incorrect_count=incorrect,
        unanswered_count=unanswered,
    )
    return reviews, summary


def _resolve_answers(questions: Sequence[Question], answers: Iterable[Answer]) -> dict[str, Answer]:
    """Map question id to answer; a later answer for the same question replaces an earlier one."""
    by_id = {question.id: question for question in questions}
    resolved: dict[str, Answer] = {}
    for answer in answers:
        question = _resolve_question(answer.question_id, questions, by_id)
        if question is not None:
            resolved[question.id] = answer
    return resolved


def _resolve_question(
    reference: str | int,
    questions: Sequence[Question],
    by_id: dict[str, Question],
) -> Question | None:
    if isinstance(reference, int) and not isinstance(reference, bool):
        if 0 <= reference < len(questions):
            return questions[reference]
        return None
    return by_id.get(reference)
