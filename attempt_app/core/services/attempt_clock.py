"""Deadline-driven countdown for a timed attempt.

Architecture note:
    Remaining time is always recomputed from the absolute end time instead of being
    decremented per tick. Periodic timers are not guaranteed to fire while the app is
    in the background, so the value shown after returning to the foreground comes
    from the wall clock rather than from how many ticks happened to arrive.

    The clock owns two resources: a cancellable periodic callback and a lifecycle
    subscription. Both are supplied through the small protocols below so the core
    never imports Qt; ``close()`` releases them together.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone
from enum import Enum, auto
import logging
import math
from typing import Protocol

from attempt_app.constants.attempt_constants import TICK_INTERVAL_MS

logger = logging.getLogger(__name__)


class AppLifecycleState(Enum):
    """Application state as reported by the host platform."""

    ACTIVE = auto()
    INACTIVE = auto()
    BACKGROUND = auto()


class PeriodicScheduler(Protocol):
    def start(self, interval_ms: int, callback: Callable[[], None]) -> None: ...

    def stop(self) -> None: ...


class Subscription(Protocol):
    def remove(self) -> None: ...


class LifecycleSource(Protocol):
    def subscribe(self, callback: Callable[[AppLifecycleState], None]) -> Subscription: ...


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class AttemptClock:
    """Converts an absolute deadline into seconds remaining and fires expiry once."""

    def __init__(
        self,
        end_time: datetime,
        scheduler: PeriodicScheduler,
        lifecycle: LifecycleSource,
        on_expiry: Callable[[], None],
        now: Callable[[], datetime] = utc_now,
        tick_interval_ms: int = TICK_INTERVAL_MS,
    ) -> None:
        if end_time.tzinfo is None:
            end_time = end_time.replace(tzinfo=timezone.utc)
        self._end_time = end_time
        self._scheduler = scheduler
        self._lifecycle = lifecycle
        self._on_expiry = on_expiry
        self._now = now
        self._tick_interval_ms = tick_interval_ms

        self._remaining_seconds: int = 0
        self._is_backgrounded: bool = False
        self._expired: bool = False
        self._running: bool = False
        self._closed: bool = False
        self._subscription: Subscription | None = None

    @property
    def end_time(self) -> datetime:
        return self._end_time

    @property
    def remaining_seconds(self) -> int:
        return self._remaining_seconds

    @property
    def is_backgrounded(self) -> bool:
        return self._is_backgrounded

    @property
    def has_expired(self) -> bool:
        return self._expired

    def is_past_deadline(self) -> bool:
        return self._compute_remaining() <= 0

    def start(self) -> None:
        """Subscribe to lifecycle changes, tick once, then tick periodically."""
        if self._closed:
            raise RuntimeError("Clock has been closed.")
        if self._subscription is None:
            self._subscription = self._lifecycle.subscribe(self.handle_lifecycle_change)
        self.tick()
        if not self._expired:
            self._start_scheduler()

    def tick(self) -> int:
        """Recompute the remaining seconds from the wall clock."""
        self._remaining_seconds = self._compute_remaining()
        if self._remaining_seconds <= 0:
            self._fire_expiry()
        return self._remaining_seconds

    def handle_lifecycle_change(self, state: AppLifecycleState) -> None:
        if state is AppLifecycleState.ACTIVE:
            if self._is_backgrounded:
                self.on_foreground_transition()
        elif not self._is_backgrounded:
            self.on_background_transition()

    def on_background_transition(self) -> None:
        logger.info("Attempt window moved to the background; interaction paused")
        self._is_backgrounded = True

    def on_foreground_transition(self) -> None:
        self._is_backgrounded = False
        remaining = self.tick()
        logger.info("Attempt window back in the foreground with %ss remaining", remaining)

    def halt(self) -> None:
        """Cancel the periodic tick while keeping the lifecycle subscription."""
        self._stop_scheduler()

    def resume(self) -> None:
        """Re-arm expiry and restart ticking after an interrupted submission."""
        if self._closed:
            return
        self._expired = False
        self.tick()
        if not self._expired:
            self._start_scheduler()

    def close(self) -> None:
        """Release the scheduler and the lifecycle subscription."""
        if self._closed:
            return
        self._closed = True
        self._stop_scheduler()
        if self._subscription is not None:
            self._subscription.remove()
            self._subscription = None

    def _compute_remaining(self) -> int:
        delta = (self._end_time - self._now()).total_seconds()
        return max(0, math.floor(delta))

    def _fire_expiry(self) -> None:
        self._remaining_seconds = 0
        if self._expired:
            return
        self._expired = True
        self._stop_scheduler()
        logger.info("Attempt deadline %s reached", self._end_time.isoformat())
        self._on_expiry()

    def _start_scheduler(self) -> None:
        if self._running:
            return
        self._running = True
        self._scheduler.start(self._tick_interval_ms, self.tick)

    def _stop_scheduler(self) -> None:
        if not self._running:
            return
        self._running = False
        self._scheduler.stop()


def format_remaining(seconds: int) -> str:
    """Render seconds as ``MM:SS``; minutes are not wrapped into hours."""
    minutes, secs = divmod(max(0, seconds), 60)
    return f"{minutes:02d}:{secs:02d}"
