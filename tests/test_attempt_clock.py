from datetime import timedelta

import pytest

from attempt_app.core.services.attempt_clock import AppLifecycleState, AttemptClock, format_remaining

from conftest import START


@pytest.fixture
def expiries():
    return []


@pytest.fixture
def clock(scheduler, lifecycle, now, expiries):
    return AttemptClock(
        end_time=START + timedelta(minutes=80),
        scheduler=scheduler,
        lifecycle=lifecycle,
        on_expiry=lambda: expiries.append(now()),
        now=now,
    )


class TestAttemptClock:
    def test_start_reports_full_window(self, clock, scheduler, lifecycle):
        clock.start()
        assert 4799 <= clock.remaining_seconds <= 4800
        assert scheduler.running
        assert scheduler.interval_ms == 1000
        assert len(lifecycle.callbacks) == 1

    def test_remaining_is_recomputed_from_deadline(self, clock, scheduler, now):
        clock.start()
        now.advance(125.7)
        scheduler.fire()
        assert clock.remaining_seconds == 4800 - 126

    def test_expiry_fires_exactly_once(self, clock, scheduler, now, expiries):
        clock.start()
        now.advance(80 * 60 + 5)
        scheduler.fire()
        clock.tick()
        clock.tick()
        assert len(expiries) == 1
        assert clock.remaining_seconds == 0
        assert clock.has_expired
        assert not scheduler.running

    def test_start_after_deadline_expires_without_scheduling(self, clock, scheduler, now, expiries):
        now.advance(80 * 60)
        clock.start()
        assert len(expiries) == 1
        assert scheduler.start_calls == 0

    def test_background_sets_flag_without_stopping_time(self, clock, lifecycle, now):
        clock.start()
        lifecycle.emit(AppLifecycleState.BACKGROUND)
        assert clock.is_backgrounded
        now.advance(600)
        lifecycle.emit(AppLifecycleState.ACTIVE)
        assert not clock.is_backgrounded
        assert clock.remaining_seconds == 4200

    def test_inactive_counts_as_background(self, clock, lifecycle):
        clock.start()
        lifecycle.emit(AppLifecycleState.INACTIVE)
        assert clock.is_backgrounded

    def test_foreground_after_deadline_expires_immediately(self, clock, lifecycle, now, expiries):
        clock.start()
        lifecycle.emit(AppLifecycleState.BACKGROUND)
        now.advance(2 * 60 * 60)
        lifecycle.emit(AppLifecycleState.ACTIVE)
        assert clock.remaining_seconds == 0
        assert len(expiries) == 1

    def test_repeated_active_state_is_ignored(self, clock, lifecycle, now, expiries):
        clock.start()
        now.advance(80 * 60)
        lifecycle.emit(AppLifecycleState.ACTIVE)
        assert expiries == []

    def test_close_releases_scheduler_and_subscription(self, clock, scheduler, lifecycle):
        clock.start()
        clock.close()
        clock.close()
        assert not scheduler.running
        assert scheduler.stop_calls == 1
        assert lifecycle.callbacks == []

    def test_start_after_close_is_rejected(self, clock):
        clock.close()
        with pytest.raises(RuntimeError, match="closed"):
            clock.start()

    def test_halt_and_resume(self, clock, scheduler, now, expiries):
        clock.start()
        clock.halt()
        assert not scheduler.running
        now.advance(60)
        clock.resume()
        assert scheduler.running
        assert clock.remaining_seconds == 4740
        assert expiries == []

    def test_resume_past_deadline_fires_again(self, clock, scheduler, now, expiries):
        clock.start()
        now.advance(80 * 60)
        scheduler.fire()
        clock.resume()
        assert len(expiries) == 2
        assert not scheduler.running

    def test_naive_end_time_is_treated_as_utc(self, scheduler, lifecycle, now):
        naive_clock = AttemptClock(
            end_time=(START + timedelta(minutes=1)).replace(tzinfo=None),
            scheduler=scheduler,
            lifecycle=lifecycle,
            on_expiry=lambda: None,
            now=now,
        )
        naive_clock.start()
        assert naive_clock.remaining_seconds == 60


class TestFormatRemaining:
    def test_minutes_and_seconds(self):
        assert format_remaining(4800) == "80:00"
        assert format_remaining(65) == "01:05"

    def test_negative_clamps_to_zero(self):
        assert format_remaining(-3) == "00:00"
