"""Tests for the injectable clock."""

from datetime import datetime, timedelta, timezone

from app.core.clock import DeterministicClock, SystemClock, get_clock


class TestDeterministicClock:

    def test_returns_fixed_time_until_advanced(self):
        clock = DeterministicClock(datetime(2024, 5, 1, 8, 0, 0))
        assert clock.now() == clock.now() == datetime(2024, 5, 1, 8, 0, 0)

    def test_advance_accumulates_seconds(self):
        clock = DeterministicClock(datetime(2024, 5, 1, 8, 0, 0))
        clock.advance(60)
        clock.advance(61 * 60)
        assert clock.now() == datetime(2024, 5, 1, 9, 2, 0)

    def test_set_time_resets_advance(self):
        clock = DeterministicClock()
        clock.advance(3600)
        clock.set_time(datetime(2030, 1, 1))
        assert clock.now() == datetime(2030, 1, 1)


class TestSystemClock:

    def test_now_is_naive_utc(self):
        now = SystemClock().now()
        assert now.tzinfo is None
        assert abs(datetime.now(timezone.utc).replace(tzinfo=None) - now) < timedelta(seconds=5)

    def test_dependency_returns_system_clock(self):
        assert isinstance(get_clock(), SystemClock)
