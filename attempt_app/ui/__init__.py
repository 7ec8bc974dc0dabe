"""Qt UI components for the attempt client.

The window lives in ``attempt_app.ui.attempt_window``; it pulls in QtWebEngine, so it is
not imported here.
"""

from .dialog_helpers import (
    ask_retry_submission,
    confirm_submit,
    confirm_submit_with_unanswered,
    show_error,
    show_info,
    show_time_up,
)
from .qt_scheduling import QtLifecycleSource, QtTickScheduler
from .question_renderer import render_question, render_review

__all__ = [
    "QtLifecycleSource",
    "QtTickScheduler",
    "ask_retry_submission",
    "confirm_submit",
    "confirm_submit_with_unanswered",
    "show_error",
    "show_info",
    "show_time_up",
    "render_question",
    "render_review",
]
