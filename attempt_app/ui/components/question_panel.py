"""Component showing the current question with its option buttons and review flag."""

from __future__ import annotations

from PySide6.QtWebEngineWidgets import QWebEngineView
from PySide6.QtWidgets import QHBoxLayout, QPushButton, QVBoxLayout, QWidget

from attempt_app.constants.ui_constants import FLAG_BUTTON_MARK, FLAG_BUTTON_UNMARK
from attempt_app.core.attempt_session import AttemptSession
from attempt_app.core.models import Question
from attempt_app.ui.question_renderer import render_question


class QuestionPanel(QWidget):
    """Renders one question; option buttons are rebuilt when the question changes."""

    def __init__(self, session: AttemptSession, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.session = session
        self._font_size: int = 14
        self._shown_question_id: str | None = None
        self.option_buttons: list[QPushButton] = []
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        self.preview_view = QWebEngineView(self)
        layout.addWidget(self.preview_view, stretch=1)

        self.options_layout = QVBoxLayout()
        layout.addLayout(self.options_layout)

        flag_row = QHBoxLayout()
        flag_row.addStretch()
        self.flag_button = QPushButton(FLAG_BUTTON_MARK, self)
        self.flag_button.setCheckable(True)
        self.flag_button.clicked.connect(self._handle_flag)
        flag_row.addWidget(self.flag_button)
        layout.addLayout(flag_row)

    def refresh(self) -> None:
        question = self.session.get_current_question()
        if question is None:
            return
        if question.id != self._shown_question_id:
            self._display_question(question)

        answer = self.session.get_answer(question.id)
        selected = answer.selected_option_id if answer else None
        flagged = bool(answer and answer.is_marked_for_review)
        interactive = self.session.is_interactive()

        for option, button in zip(question.options, self.option_buttons):
            button.setChecked(option.id == selected)
            button.setEnabled(interactive)
        self.flag_button.setChecked(flagged)
        self.flag_button.setText(FLAG_BUTTON_UNMARK if flagged else FLAG_BUTTON_MARK)
        self.flag_button.setEnabled(interactive)

    def _display_question(self, question: Question) -> None:
        self._shown_question_id = question.id
        self.preview_view.setHtml(render_question(question, self._font_size))

        while self.options_layout.count():
            item = self.options_layout.takeAt(0)
            widget = item.widget()
            if widget is not None:
                widget.deleteLater()

        self.option_buttons = []
        for option in question.options:
            button = QPushButton(f"{option.label}. {option.text}", self)
            button.setCheckable(True)
            button.clicked.connect(
                lambda _checked=False, qid=question.id, oid=option.id: self._handle_select(qid, oid)
            )
            self.options_layout.addWidget(button)
            self.option_buttons.append(button)

    def _handle_select(self, question_id: str, option_id: str) -> None:
        self.session.select_option(question_id, option_id)
        self.refresh()

    def _handle_flag(self) -> None:
        question = self.session.get_current_question()
        if question is not None:
            self.session.toggle_review(question.id)
        self.refresh()
