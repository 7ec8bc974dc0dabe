"""Qt UI constants used across widgets."""

WINDOW_TITLE: str = "AttemptQt"
LOADING_MESSAGE: str = "Loading test..."

HEADER_QUESTION_TEMPLATE: str = "Question {current}/{total}"
HEADER_SUBMIT_BUTTON: str = "Submit"
HEADER_HELP_BUTTON: str = "Help"
HEADER_ABOUT_BUTTON: str = "About"

PAUSED_BANNER_TEXT: str = "Test paused - Return to the app to continue"
TIME_UP_BANNER_TEXT: str = "Time is up - submit to finish the test"

NAV_PREVIOUS_BUTTON: str = "Previous"
NAV_NEXT_BUTTON: str = "Next"
FLAG_BUTTON_MARK: str = "Mark for review"
FLAG_BUTTON_UNMARK: str = "Unmark review"

TIME_UP_TITLE: str = "Time Up!"
TIME_UP_MESSAGE: str = "Your test has been submitted automatically."
SUBMIT_TITLE: str = "Submit Test"
SUBMIT_MESSAGE: str = "Are you sure you want to submit your test?"
UNANSWERED_TITLE: str = "Unanswered Questions"
UNANSWERED_TEMPLATE: str = "You have {count} unanswered question{plural}. Do you want to submit anyway?"
SUBMIT_FAILED_TITLE: str = "Error"
SUBMIT_FAILED_MESSAGE: str = "Failed to submit test. Please try again."

REVIEW_TITLE: str = "Question Review"
REVIEW_PASSED_TEXT: str = "Great Job! You Passed!"
REVIEW_FAILED_TEXT: str = "Keep Practicing"
REVIEW_NOT_ANSWERED: str = "Not answered"
