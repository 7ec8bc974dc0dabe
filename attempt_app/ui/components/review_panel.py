"""Results overview and per-question review shown after submission."""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWebEngineWidgets import QWebEngineView
from PySide6.QtWidgets import QGroupBox, QHBoxLayout, QLabel, QVBoxLayout, QWidget

from attempt_app.constants.ui_constants import (
    REVIEW_FAILED_TEXT,
    REVIEW_PASSED_TEXT,
    REVIEW_TITLE,
)
from attempt_app.core.attempt_session import AttemptSession
from attempt_app.core.models import AttemptResult
from attempt_app.styling.styles import Styles
from attempt_app.ui.question_renderer import render_review


class ReviewPanel(QWidget):
    """Read-only view of a submitted attempt."""

    def __init__(self, session: AttemptSession, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.session = session
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        self.percentage_label = QLabel("", self)
        self.percentage_label.setAlignment(Qt.AlignCenter)
        self.percentage_label.setStyleSheet("font-size: 36pt; font-weight: bold;")
        layout.addWidget(self.percentage_label)

        self.outcome_label = QLabel("", self)
        self.outcome_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.outcome_label)

        counts_row = QHBoxLayout()
        self.correct_label = QLabel("", self)
        self.incorrect_label = QLabel("", self)
        self.unanswered_label = QLabel("", self)
        self.total_label = QLabel("", self)
        for label in (self.correct_label, self.incorrect_label, self.unanswered_label, self.total_label):
            label.setAlignment(Qt.AlignCenter)
            counts_row.addWidget(label)
        layout.addLayout(counts_row)

        review_group = QGroupBox(REVIEW_TITLE, self)
        review_layout = QVBoxLayout()
        review_group.setLayout(review_layout)
        self.review_view = QWebEngineView(review_group)
        review_layout.addWidget(self.review_view)
        layout.addWidget(review_group, stretch=1)

    def show_result(self, result: AttemptResult) -> None:
        reviews, summary = self.session.get_review()
        self.percentage_label.setText(f"{result.percentage}%")
        self.outcome_label.setText(REVIEW_PASSED_TEXT if result.passed else REVIEW_FAILED_TEXT)
        self.outcome_label.setStyleSheet(Styles.get_outcome_style(result.passed))
        self.correct_label.setText(f"Correct: {summary.correct_count}")
        self.incorrect_label.setText(f"Incorrect: {summary.incorrect_count}")
        self.unanswered_label.setText(f"Unanswered: {summary.unanswered_count}")
        self.total_label.setText(f"Total: {result.total}")
        self.review_view.setHtml(render_review(reviews))
