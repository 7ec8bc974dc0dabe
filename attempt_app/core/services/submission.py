"""Explicit state machine guarding the single transition out of an in-progress attempt."""

from __future__ import annotations

from enum import Enum, auto
import logging

logger = logging.getLogger(__name__)


class SubmissionState(Enum):
    IN_PROGRESS = auto()
    SUBMITTING = auto()
    SUBMITTED = auto()
    FAILED = auto()


class SubmissionTrigger(Enum):
    MANUAL = auto()
    EXPIRY = auto()


class SubmissionMachine:
    """Tracks submission progress; only one trigger may leave ``IN_PROGRESS``.

    ``FAILED`` is transient: ``fail()`` records it and immediately hands control
    back to ``IN_PROGRESS`` so the student can retry.
    """

    def __init__(self) -> None:
        self._state = SubmissionState.IN_PROGRESS
        self._trigger: SubmissionTrigger | None = None
        self._last_error: Exception | None = None
        self._history: list[SubmissionState] = [SubmissionState.IN_PROGRESS]

    @property
    def state(self) -> SubmissionState:
        return self._state

    @property
    def trigger(self) -> SubmissionTrigger | None:
        return self._trigger

    @property
    def last_error(self) -> Exception | None:
        return self._last_error

    @property
    def history(self) -> list[SubmissionState]:
        return list(self._history)

    def is_in_progress(self) -> bool:
        return self._state is SubmissionState.IN_PROGRESS

    def begin(self, trigger: SubmissionTrigger) -> bool:
        """Enter ``SUBMITTING``. Returns False when another trigger already won."""
        if self._state is not SubmissionState.IN_PROGRESS:
            logger.debug("Ignoring %s submission while %s", trigger.name, self._state.name)
            return False
        self._trigger = trigger
        self._last_error = None
        self._set_state(SubmissionState.SUBMITTING)
        return True

    def complete(self) -> None:
        if self._state is not SubmissionState.SUBMITTING:
            raise RuntimeError(f"Cannot complete a submission while {self._state.name}.")
        self._set_state(SubmissionState.SUBMITTED)

    def fail(self, error: Exception) -> None:
        if self._state is not SubmissionState.SUBMITTING:
            raise RuntimeError(f"Cannot fail a submission while {self._state.name}.")
        self._last_error = error
        self._set_state(SubmissionState.FAILED)
        self._trigger = None
        self._set_state(SubmissionState.IN_PROGRESS)

    def _set_state(self, state: SubmissionState) -> None:
        logger.info("Submission state %s -> %s", self._state.name, state.name)
        self._state = state
        self._history.append(state)
