"""Previous/next buttons and the numbered question palette."""

from __future__ import annotations

from PySide6.QtWidgets import QHBoxLayout, QPushButton, QScrollArea, QWidget

from attempt_app.constants.ui_constants import NAV_NEXT_BUTTON, NAV_PREVIOUS_BUTTON
from attempt_app.core.attempt_session import AttemptSession
from attempt_app.core.models import QuestionStatus
from attempt_app.styling.styles import Styles


class NavigationBar(QWidget):
    def __init__(self, session: AttemptSession, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.session = session
        self.palette_buttons: list[QPushButton] = []
        self._shown_statuses: list[QuestionStatus] = []
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QHBoxLayout()
        self.setLayout(layout)

        self.previous_button = QPushButton(NAV_PREVIOUS_BUTTON, self)
        self.previous_button.clicked.connect(self._handle_previous)
        layout.addWidget(self.previous_button)

        palette_container = QWidget(self)
        palette_layout = QHBoxLayout()
        palette_layout.setContentsMargins(0, 0, 0, 0)
        palette_container.setLayout(palette_layout)
        for idx in range(self.session.get_question_count()):
            button = QPushButton(str(idx + 1), palette_container)
            button.clicked.connect(lambda _checked=False, target=idx: self._handle_jump(target))
            palette_layout.addWidget(button)
            self.palette_buttons.append(button)
        palette_layout.addStretch()

        scroll = QScrollArea(self)
        scroll.setWidgetResizable(True)
        scroll.setWidget(palette_container)
        scroll.setFixedHeight(56)
        layout.addWidget(scroll, stretch=1)

        self.next_button = QPushButton(NAV_NEXT_BUTTON, self)
        self.next_button.clicked.connect(self._handle_next)
        layout.addWidget(self.next_button)

    def refresh(self) -> None:
        interactive = self.session.is_interactive()
        index = self.session.get_current_index()
        count = self.session.get_question_count()
        self.previous_button.setEnabled(interactive and index > 0)
        self.next_button.setEnabled(interactive and index < count - 1)

        statuses = self.session.get_question_statuses()
        for idx, (button, status) in enumerate(zip(self.palette_buttons, statuses)):
            button.setEnabled(interactive)
            if idx < len(self._shown_statuses) and self._shown_statuses[idx] is status:
                continue
            button.setStyleSheet(Styles.get_palette_button_style(status))
        self._shown_statuses = statuses

    def _handle_previous(self) -> None:
        self.session.go_previous()

    def _handle_next(self) -> None:
        self.session.go_next()

    def _handle_jump(self, index: int) -> None:
        self.session.go_to(index)
