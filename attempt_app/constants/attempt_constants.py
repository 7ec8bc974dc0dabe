"""Attempt-related constants shared across UI and core layers."""

TICK_INTERVAL_MS: int = 1000
TIME_WARNING_WINDOW_SECONDS: int = 300
DEFAULT_PASSING_SCORE: int = 70
DEFAULT_RESULTS_DIR: str = "results"
OPTION_LABELS: tuple[str, ...] = ("A", "B", "C", "D", "E", "F")
