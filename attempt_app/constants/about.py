"""Static metadata describing AttemptQt."""

APP_NAME = "AttemptQt"
APP_VERSION = "0.1"
APP_LICENSE = "MIT License"
APP_ABOUT_TEXT = (
    "AttemptQt runs a single timed multiple-choice test attempt. "
    "Questions support Markdown and LaTeX, the countdown follows the deadline issued "
    "by the server, and answers are scored and handed off in one batch when you submit."
)

HELP_TEXT = (
    "Pick an option to answer the current question. Use the flag button to mark a question "
    "for review; flagged questions keep their selected answer.\n\n"
    "The numbered buttons at the bottom jump between questions:\n"
    "  blue = current, green = answered, amber = flagged, grey = not answered yet.\n\n"
    "The test is paused while the window is in the background. The clock keeps running, "
    "so return to the window to continue. When time runs out your answers are submitted automatically."
)
