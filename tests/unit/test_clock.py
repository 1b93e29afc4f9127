"""
test_clock.py - Unit tests for clock.py
"""

import pytest
from datetime import date, datetime, timedelta

from warehouse import Clock, SystemClock, ManualClock


class TestManualClock:
    """Tests for ManualClock."""

    def test_default_epoch(self):
        clock = ManualClock()
        assert clock.now() == datetime(1970, 1, 1)
        assert clock.today() == date(1970, 1, 1)

    def test_initial_time(self):
        t = datetime(2025, 1, 15, 9, 30)
        clock = ManualClock(t)
        assert clock.now() == t
        assert clock.today() == date(2025, 1, 15)

    def test_advance_time(self):
        clock = ManualClock(datetime(2025, 1, 15, 9, 30))
        clock.advance_time(datetime(2025, 1, 15, 18, 0))
        assert clock.now() == datetime(2025, 1, 15, 18, 0)

    def test_advance_to_same_time_allowed(self):
        t = datetime(2025, 1, 15, 9, 30)
        clock = ManualClock(t)
        clock.advance_time(t)
        assert clock.now() == t

    def test_cannot_move_backwards(self):
        clock = ManualClock(datetime(2025, 1, 15, 9, 30))
        with pytest.raises(ValueError, match="backwards"):
            clock.advance_time(datetime(2025, 1, 14))

    def test_advance_days(self):
        clock = ManualClock(datetime(2025, 1, 31, 12, 0))
        clock.advance_days(1)
        assert clock.today() == date(2025, 2, 1)
        assert clock.now() == datetime(2025, 2, 1, 12, 0)

    def test_advance_negative_days_raises(self):
        clock = ManualClock(datetime(2025, 1, 31))
        with pytest.raises(ValueError):
            clock.advance_days(-1)

    def test_satisfies_protocol(self):
        assert isinstance(ManualClock(), Clock)


class TestSystemClock:
    """Tests for SystemClock."""

    def test_satisfies_protocol(self):
        assert isinstance(SystemClock(), Clock)

    def test_reads_wall_clock(self):
        before = datetime.now()
        now = SystemClock().now()
        after = datetime.now()
        assert before <= now <= after

    def test_today_matches_now(self):
        clock = SystemClock()
        assert clock.today() in {clock.now().date(), clock.now().date() - timedelta(days=1)}
