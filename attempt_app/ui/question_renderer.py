"""Question rendering utilities for the attempt and review views."""

from __future__ import annotations

import html

from attempt_app.constants.ui_constants import REVIEW_NOT_ANSWERED
from attempt_app.core.markdown_math_renderer import renderer
from attempt_app.core.models import Question, QuestionReview


def render_question(question: Question, font_size: int = 14) -> str:
    """Render the question stem (subject line plus Markdown/LaTeX text) as a full document.

    Options are shown as separate buttons, so only the stem goes to the web view.
    """
    fragment = renderer.render_question_fragment(question)
    return renderer.wrap_with_mathjax(fragment, title=question.id, font_size=font_size)


def render_review(reviews: list[QuestionReview], font_size: int = 12) -> str:
    """Render every question with the selected and the correct option highlighted."""
    sections: list[str] = []
    for number, review in enumerate(reviews, start=1):
        question = review.question
        correct = question.option_by_id(question.correct_option_id)
        selected = question.option_by_id(review.selected_option_id) if review.selected_option_id else None

        if selected is None:
            verdict = f'<span style="color:#666666">{html.escape(REVIEW_NOT_ANSWERED)}</span>'
        elif review.is_correct:
            verdict = '<span style="color:#107C10">&#10004; Correct</span>'
        else:
            verdict = '<span style="color:#D13438">&#10008; Incorrect</span>'

        lines = [
            f"<h3>Question {number} {verdict}</h3>",
            renderer.render_question_fragment(question),
            "<ul>",
        ]
        for option in question.options:
            marks = []
            if correct is not None and option.id == correct.id:
                marks.append("<strong>correct answer</strong>")
            if selected is not None and option.id == selected.id:
                marks.append("<em>your answer</em>")
            suffix = f" ({', '.join(marks)})" if marks else ""
            lines.append(
                f"<li>{html.escape(option.label)}. {renderer.render_inline(option.text)}{suffix}</li>"
            )
        lines.append("</ul>")
        if question.explanation:
            lines.append(f'<div class="explanation">{renderer.render_fragment(question.explanation)}</div>')
        sections.append("\n".join(lines))
    return renderer.wrap_with_mathjax("\n<hr/>\n".join(sections), title="Review", font_size=font_size)
