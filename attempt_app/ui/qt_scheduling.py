"""Qt implementations of the clock's scheduler and lifecycle protocols."""

from __future__ import annotations

from collections.abc import Callable

from PySide6.QtCore import QObject, Qt, QTimer, Signal, Slot
from PySide6.QtGui import QGuiApplication

from attempt_app.core.services.attempt_clock import AppLifecycleState


def map_application_state(state: Qt.ApplicationState) -> AppLifecycleState:
    """Translate Qt's application state into the clock's lifecycle vocabulary."""
    if state == Qt.ApplicationState.ApplicationActive:
        return AppLifecycleState.ACTIVE
    if state == Qt.ApplicationState.ApplicationInactive:
        return AppLifecycleState.INACTIVE
    # Hidden and Suspended both mean the window is no longer visible.
    return AppLifecycleState.BACKGROUND


class QtTickScheduler(QObject):
    """Periodic callback backed by a QTimer living on the GUI thread.

    ``start`` and ``stop`` may be called from the API thread; the timer itself is
    only touched from the thread this object lives in.
    """

    _start_requested = Signal(int)
    _stop_requested = Signal()

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._timer = QTimer(self)
        self._callback: Callable[[], None] | None = None
        self._timer.timeout.connect(self._fire)
        # Auto connections run directly on the owning thread and queue from any other.
        self._start_requested.connect(self._start_timer)
        self._stop_requested.connect(self._timer.stop)

    def start(self, interval_ms: int, callback: Callable[[], None]) -> None:
        self._callback = callback
        self._start_requested.emit(interval_ms)

    def stop(self) -> None:
        self._callback = None
        self._stop_requested.emit()

    def is_active(self) -> bool:
        return self._timer.isActive()

    @Slot(int)
    def _start_timer(self, interval_ms: int) -> None:
        self._timer.setInterval(interval_ms)
        self._timer.start()

    def _fire(self) -> None:
        if self._callback is not None:
            self._callback()


class _QtSubscription:
    def __init__(self, app: QGuiApplication, slot: Callable[[Qt.ApplicationState], None]) -> None:
        self._app = app
        self._slot: Callable[[Qt.ApplicationState], None] | None = slot

    def remove(self) -> None:
        if self._slot is None:
            return
        self._app.applicationStateChanged.disconnect(self._slot)
        self._slot = None


class QtLifecycleSource:
    """Forwards QGuiApplication state changes to clock subscribers."""

    def __init__(self, app: QGuiApplication) -> None:
        self._app = app

    def subscribe(self, callback: Callable[[AppLifecycleState], None]) -> _QtSubscription:
        def slot(state: Qt.ApplicationState) -> None:
            callback(map_application_state(state))

        self._app.applicationStateChanged.connect(slot)
        return _QtSubscription(self._app, slot)
