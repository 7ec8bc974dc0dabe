"""Qt main window running one timed attempt and its review."""

from __future__ import annotations

from enum import Enum, auto

from PySide6.QtCore import Qt, QTimer, Signal
from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import QMainWindow, QStackedWidget, QVBoxLayout, QWidget

from attempt_app.constants.about import (
    APP_ABOUT_TEXT,
    APP_LICENSE,
    APP_NAME,
    APP_VERSION,
    HELP_TEXT,
)
from attempt_app.constants.ui_constants import SUBMIT_FAILED_MESSAGE, SUBMIT_FAILED_TITLE, WINDOW_TITLE
from attempt_app.core.attempt_session import AttemptSession
from attempt_app.core.models import AttemptResult
from attempt_app.styling.styles import Styles
from attempt_app.ui.components.header_bar import HeaderBar
from attempt_app.ui.components.navigation_bar import NavigationBar
from attempt_app.ui.components.question_panel import QuestionPanel
from attempt_app.ui.components.review_panel import ReviewPanel
from attempt_app.ui.dialog_helpers import (
    ask_retry_submission,
    confirm_submit,
    confirm_submit_with_unanswered,
    show_error,
    show_info,
    show_time_up,
)

REFRESH_INTERVAL_MS = 250


class WindowMode(Enum):
    ATTEMPT = auto()
    REVIEW = auto()


class AttemptWindow(QMainWindow):
    """Main window: attempt view while in progress, review view once submitted."""

    # Session listener bridges, delivered to the GUI thread.
    time_up = Signal()
    submitted = Signal(object)
    submit_failed = Signal(object, bool)

    def __init__(self, session: AttemptSession) -> None:
        super().__init__()
        self.setWindowTitle(f"{WINDOW_TITLE} - {session.test_title}" if session.test_title else WINDOW_TITLE)
        self.session = session
        self._mode = WindowMode.ATTEMPT

        self._build_ui()
        self._connect_session()
        self._configure_refresh_timer()
        self.setStyleSheet(Styles.get_main_window_style())

    def _build_ui(self) -> None:
        self.mode_stack = QStackedWidget(self)
        self.setCentralWidget(self.mode_stack)

        attempt_view = QWidget(self)
        attempt_layout = QVBoxLayout()
        attempt_view.setLayout(attempt_layout)

        self.header_bar = HeaderBar(
            self.session,
            on_submit=self._handle_submit,
            on_help=self._handle_help,
            on_about=self._handle_about,
            parent=attempt_view,
        )
        self.question_panel = QuestionPanel(self.session, attempt_view)
        self.navigation_bar = NavigationBar(self.session, attempt_view)
        attempt_layout.addWidget(self.header_bar)
        attempt_layout.addWidget(self.question_panel, stretch=1)
        attempt_layout.addWidget(self.navigation_bar)

        self.review_panel = ReviewPanel(self.session, self)

        self.mode_stack.addWidget(attempt_view)
        self.mode_stack.addWidget(self.review_panel)
        self._set_mode(WindowMode.ATTEMPT)

    def _connect_session(self) -> None:
        self.time_up.connect(self._handle_time_up, Qt.QueuedConnection)
        self.submitted.connect(self._handle_submitted, Qt.QueuedConnection)
        self.submit_failed.connect(self._handle_submit_failed, Qt.QueuedConnection)
        self.session.add_time_up_listener(self.time_up.emit)
        self.session.add_submitted_listener(self.submitted.emit)
        self.session.add_submit_failed_listener(self.submit_failed.emit)

    def _configure_refresh_timer(self) -> None:
        self.refresh_timer = QTimer(self)
        self.refresh_timer.setInterval(REFRESH_INTERVAL_MS)
        self.refresh_timer.timeout.connect(self._refresh_state)
        self.refresh_timer.start()

    def _refresh_state(self) -> None:
        if self._mode != WindowMode.ATTEMPT:
            return
        self.header_bar.refresh()
        self.question_panel.refresh()
        self.navigation_bar.refresh()

    def _set_mode(self, mode: WindowMode) -> None:
        self._mode = mode
        index_map = {
            WindowMode.ATTEMPT: 0,
            WindowMode.REVIEW: 1,
        }
        self.mode_stack.setCurrentIndex(index_map[mode])

    def _handle_submit(self) -> None:
        prompt = self.session.prepare_submit()
        if prompt is None:
            return
        if prompt.has_gaps:
            confirmed = confirm_submit_with_unanswered(self, prompt.unanswered_count)
        else:
            confirmed = confirm_submit(self)
        if confirmed:
            self.session.submit()
        self._refresh_state()

    def _handle_time_up(self) -> None:
        self._refresh_state()
        show_time_up(self)

    def _handle_submitted(self, result: AttemptResult) -> None:
        self.refresh_timer.stop()
        self.review_panel.show_result(result)
        self._set_mode(WindowMode.REVIEW)

    def _handle_submit_failed(self, error: Exception, expired: bool) -> None:
        self._refresh_state()
        if not expired:
            show_error(self, SUBMIT_FAILED_TITLE, f"{SUBMIT_FAILED_MESSAGE}\n\n{error}")
            return
        # Past the deadline the attempt stays locked until a retry goes through.
        if ask_retry_submission(self, str(error)):
            self.session.submit()

    def _handle_about(self) -> None:
        details = (
            f"{APP_NAME} v{APP_VERSION}\n"
            f"License: {APP_LICENSE}\n\n"
            f"{APP_ABOUT_TEXT}"
        )
        show_info(self, f"About {APP_NAME}", details)

    def _handle_help(self) -> None:
        show_info(self, f"{APP_NAME} Help", HELP_TEXT)

    def closeEvent(self, event: QCloseEvent) -> None:
        self.refresh_timer.stop()
        self.session.close()
        super().closeEvent(event)
