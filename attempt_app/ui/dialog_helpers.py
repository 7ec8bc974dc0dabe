"""Helper functions for the confirmation and notice dialogs of the attempt window."""

from __future__ import annotations

from PySide6.QtGui import QFont
from PySide6.QtWidgets import QMessageBox, QWidget

from attempt_app.constants.ui_constants import (
    SUBMIT_FAILED_MESSAGE,
    SUBMIT_FAILED_TITLE,
    SUBMIT_MESSAGE,
    SUBMIT_TITLE,
    TIME_UP_MESSAGE,
    TIME_UP_TITLE,
    UNANSWERED_TEMPLATE,
    UNANSWERED_TITLE,
)


def _apply_optional_font(widget: QWidget, font_point_size: int | None) -> None:
    """Apply font size to a widget when requested."""
    if font_point_size is None or font_point_size <= 0:
        return

    font: QFont = widget.font()
    font.setPointSize(font_point_size)
    widget.setFont(font)


def _ask(parent: QWidget, title: str, message: str) -> bool:
    reply = QMessageBox.question(
        parent,
        title,
        message,
        QMessageBox.Yes | QMessageBox.No,
        QMessageBox.No
    )
    return reply == QMessageBox.Yes


def confirm_submit(parent: QWidget) -> bool:
    """Ask the student to confirm a submission with every question answered.

    Returns:
        True if user confirmed, False otherwise
    """
    return _ask(parent, SUBMIT_TITLE, SUBMIT_MESSAGE)


def confirm_submit_with_unanswered(parent: QWidget, unanswered_count: int) -> bool:
    """Warn about unanswered questions before submitting.

    Args:
        parent: Parent widget for the dialog
        unanswered_count: Number of questions without a selected option

    Returns:
        True if user wants to submit anyway, False otherwise
    """
    message = UNANSWERED_TEMPLATE.format(
        count=unanswered_count,
        plural="" if unanswered_count == 1 else "s",
    )
    return _ask(parent, UNANSWERED_TITLE, message)


def show_time_up(parent: QWidget) -> None:
    show_info(parent, TIME_UP_TITLE, TIME_UP_MESSAGE)


def ask_retry_submission(parent: QWidget, detail: str) -> bool:
    """Offer to retry a submission that failed after the deadline.

    Returns:
        True if user wants to retry now, False to leave the attempt locked
    """
    msg_box = QMessageBox(parent)
    msg_box.setIcon(QMessageBox.Critical)
    msg_box.setWindowTitle(SUBMIT_FAILED_TITLE)
    msg_box.setText(SUBMIT_FAILED_MESSAGE)
    msg_box.setInformativeText(detail)
    msg_box.setStandardButtons(QMessageBox.Retry | QMessageBox.Cancel)
    msg_box.setDefaultButton(QMessageBox.Retry)
    return msg_box.exec() == QMessageBox.Retry


def show_error(parent: QWidget, title: str, message: str) -> None:
    """Show error dialog.

    Args:
        parent: Parent widget for the dialog
        title: Dialog title
        message: Error message
    """
    QMessageBox.critical(parent, title, message)


def show_info(
    parent: QWidget,
    title: str,
    message: str,
    *,
    font_point_size: int | None = None,
) -> None:
    """Show information dialog.

    Args:
        parent: Parent widget for the dialog
        title: Dialog title
        message: Information message
    """
    msg_box = QMessageBox(parent)
    msg_box.setIcon(QMessageBox.Information)
    msg_box.setWindowTitle(title)
    msg_box.setText(message)
    msg_box.setStandardButtons(QMessageBox.Ok)
    _apply_optional_font(msg_box, font_point_size)
    if font_point_size is not None and font_point_size > 0:
        msg_box.setStyleSheet(
            f"QLabel {{ font-size: {font_point_size}pt; }}\n"
            f"QPushButton {{ font-size: {font_point_size}pt; }}"
        )
    msg_box.exec()
