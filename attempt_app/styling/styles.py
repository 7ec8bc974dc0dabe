"""Centralized styles and font definitions for the application."""

from attempt_app.core.models import QuestionStatus

from .color_palette import ColorPalette, Theme

_STATUS_COLORS = {
    QuestionStatus.CURRENT: ColorPalette.STATUS_CURRENT,
    QuestionStatus.ANSWERED: ColorPalette.STATUS_ANSWERED,
    QuestionStatus.FLAGGED: ColorPalette.STATUS_FLAGGED,
    QuestionStatus.UNANSWERED: ColorPalette.STATUS_UNANSWERED,
}


class Styles:
    """Helper class to generate Qt stylesheets based on the current theme."""

    @staticmethod
    def get_main_window_style(theme: Theme = Theme.LIGHT) -> str:
        return f"""
            QMainWindow {{
                background-color: {ColorPalette.BACKGROUND_PRIMARY.get(theme)};
                color: {ColorPalette.TEXT_PRIMARY.get(theme)};
            }}
            QWidget {{
                background-color: {ColorPalette.BACKGROUND_PRIMARY.get(theme)};
                color: {ColorPalette.TEXT_PRIMARY.get(theme)};
                font-family: 'Segoe UI', 'Roboto', sans-serif;
                font-size: 14px;
            }}
            QLabel {{
                color: {ColorPalette.TEXT_PRIMARY.get(theme)};
            }}
            QPushButton {{
                background-color: {ColorPalette.BUTTON_SECONDARY_BG.get(theme)};
                color: {ColorPalette.TEXT_PRIMARY.get(theme)};
                border: 1px solid {ColorPalette.BORDER_PRIMARY.get(theme)};
                border-radius: 4px;
                padding: 6px 12px;
            }}
            QPushButton:hover {{
                background-color: {ColorPalette.BUTTON_HOVER_BG.get(theme)};
            }}
            QPushButton:checked {{
                background-color: {ColorPalette.BUTTON_PRIMARY_BG.get(theme)};
                color: {ColorPalette.BUTTON_PRIMARY_TEXT.get(theme)};
                border: 1px solid {ColorPalette.BUTTON_PRIMARY_BG.get(theme)};
            }}
            QPushButton:disabled {{
                color: {ColorPalette.TEXT_SECONDARY.get(theme)};
            }}
            QGroupBox {{
                border: 1px solid {ColorPalette.BORDER_PRIMARY.get(theme)};
                border-radius: 6px;
                margin-top: 6px;
                padding-top: 10px;
            }}
            QGroupBox::title {{
                subcontrol-origin: margin;
                left: 10px;
                padding: 0 3px 0 3px;
            }}
        """

    @staticmethod
    def get_large_label_style() -> str:
        return "font-size: 16pt; font-weight: bold;"

    @staticmethod
    def get_timer_style(warning: bool, theme: Theme = Theme.LIGHT) -> str:
        base = "font-size: 16pt; font-weight: bold; padding: 2px 8px; border-radius: 4px;"
        if not warning:
            return base
        return base + f" color: #FFFFFF; background-color: {ColorPalette.ERROR.get(theme)};"

    @staticmethod
    def get_banner_style(theme: Theme = Theme.LIGHT) -> str:
        return (
            f"background-color: {ColorPalette.WARNING.get(theme)};"
            " color: #000000; font-weight: bold; padding: 6px; border-radius: 4px;"
        )

    @staticmethod
    def get_palette_button_style(status: QuestionStatus, theme: Theme = Theme.LIGHT) -> str:
        background = _STATUS_COLORS[status].get(theme)
        text = ColorPalette.TEXT_PRIMARY.get(theme)
        if status in (QuestionStatus.CURRENT, QuestionStatus.ANSWERED):
            text = ColorPalette.BUTTON_PRIMARY_TEXT.get(theme)
        return (
            f"QPushButton {{ background-color: {background}; color: {text};"
            " min-width: 32px; padding: 4px; border-radius: 4px; }"
        )

    @staticmethod
    def get_outcome_style(passed: bool, theme: Theme = Theme.LIGHT) -> str:
        color = ColorPalette.SUCCESS if passed else ColorPalette.ERROR
        return f"font-size: 20pt; font-weight: bold; color: {color.get(theme)};"
