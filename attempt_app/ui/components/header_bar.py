"""Header with the countdown, question counter and submit button."""

from __future__ import annotations

from collections.abc import Callable

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QHBoxLayout, QLabel, QPushButton, QVBoxLayout, QWidget

from attempt_app.constants.attempt_constants import TIME_WARNING_WINDOW_SECONDS
from attempt_app.constants.ui_constants import (
    HEADER_ABOUT_BUTTON,
    HEADER_HELP_BUTTON,
    HEADER_QUESTION_TEMPLATE,
    HEADER_SUBMIT_BUTTON,
    PAUSED_BANNER_TEXT,
    TIME_UP_BANNER_TEXT,
)
from attempt_app.core.attempt_session import AttemptSession
from attempt_app.core.services.attempt_clock import format_remaining
from attempt_app.core.services.submission import SubmissionState
from attempt_app.styling.styles import Styles


class HeaderBar(QWidget):
    """Top bar of the attempt view."""

    def __init__(
        self,
        session: AttemptSession,
        on_submit: Callable[[], None],
        on_help: Callable[[], None],
        on_about: Callable[[], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.session = session
        self._warning_active: bool | None = None
        self._build_ui(on_submit, on_help, on_about)

    def _build_ui(
        self,
        on_submit: Callable[[], None],
        on_help: Callable[[], None],
        on_about: Callable[[], None],
    ) -> None:
        layout = QVBoxLayout()
        layout.setContentsMargins(0, 0, 0, 0)
        self.setLayout(layout)

        top_row = QHBoxLayout()
        self.title_label = QLabel(self.session.test_title, self)
        self.title_label.setStyleSheet(Styles.get_large_label_style())
        top_row.addWidget(self.title_label)
        top_row.addStretch()

        self.help_button = QPushButton(HEADER_HELP_BUTTON, self)
        self.help_button.clicked.connect(on_help)
        top_row.addWidget(self.help_button)

        self.about_button = QPushButton(HEADER_ABOUT_BUTTON, self)
        self.about_button.clicked.connect(on_about)
        top_row.addWidget(self.about_button)
        layout.addLayout(top_row)

        status_row = QHBoxLayout()
        self.question_label = QLabel("", self)
        status_row.addWidget(self.question_label)
        status_row.addStretch()

        self.timer_label = QLabel("--:--", self)
        self.timer_label.setAlignment(Qt.AlignCenter)
        status_row.addWidget(self.timer_label)
        status_row.addStretch()

        self.submit_button = QPushButton(HEADER_SUBMIT_BUTTON, self)
        self.submit_button.clicked.connect(on_submit)
        status_row.addWidget(self.submit_button)
        layout.addLayout(status_row)

        self.banner_label = QLabel("", self)
        self.banner_label.setAlignment(Qt.AlignCenter)
        self.banner_label.setStyleSheet(Styles.get_banner_style())
        self.banner_label.setVisible(False)
        layout.addWidget(self.banner_label)

    def refresh(self) -> None:
        remaining = self.session.get_remaining_seconds()
        self.timer_label.setText(format_remaining(remaining))
        self._set_warning(0 < remaining <= TIME_WARNING_WINDOW_SECONDS)

        self.question_label.setText(
            HEADER_QUESTION_TEMPLATE.format(
                current=self.session.get_current_index() + 1,
                total=self.session.get_question_count(),
            )
        )

        if self.session.is_backgrounded():
            self._show_banner(PAUSED_BANNER_TEXT)
        elif self.session.is_time_up():
            self._show_banner(TIME_UP_BANNER_TEXT)
        else:
            self.banner_label.setVisible(False)

        can_submit = (
            not self.session.is_backgrounded()
            and self.session.get_submission_state() is SubmissionState.IN_PROGRESS
        )
        self.submit_button.setEnabled(can_submit)

    def _show_banner(self, text: str) -> None:
        self.banner_label.setText(text)
        self.banner_label.setVisible(True)

    def _set_warning(self, enabled: bool) -> None:
        if enabled == self._warning_active:
            return
        self._warning_active = enabled
        self.timer_label.setStyleSheet(Styles.get_timer_style(enabled))
