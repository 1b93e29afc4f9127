"""
clock.py - Time sources for the warehouse engine

The engine never reads the wall clock directly. It asks an injected Clock for
the current timestamp (log entries) and the current date (expiry checks).

Classes:
- Clock: Protocol defining the time interface
- SystemClock: Reads the local wall clock
- ManualClock: Logical clock that only moves when told to, for tests and replays
"""

from datetime import date, datetime, timedelta
from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    """
    Protocol for time sources.

    Implementations must provide now() and today(). today() must agree with
    now().date() so that log timestamps and expiry checks stay consistent.
    """

    def now(self) -> datetime:
        """Return the current timestamp."""
        ...

    def today(self) -> date:
        """Return the current calendar date."""
        ...


class SystemClock:
    """Clock backed by the local wall clock."""

    def now(self) -> datetime:
        return datetime.now()

    def today(self) -> date:
        return self.now().date()

    def __repr__(self):
        return "SystemClock()"


class ManualClock:
    """
    Logical clock with an explicitly controlled current time.

    Time can only move forward, never backward.

    Example:
        clock = ManualClock(datetime(2025, 1, 15, 9, 0))
        warehouse = Warehouse(clock=clock, verbose=False)
        ...
        clock.advance_days(31)
        warehouse.sweep_expired()
    """

    def __init__(self, initial_time: Optional[datetime] = None):
        """
        Initialize the clock.

        Args:
            initial_time: Starting time (default: 1970-01-01 00:00)
        """
        self._current_time = initial_time or datetime(1970, 1, 1)

    def now(self) -> datetime:
        return self._current_time

    def today(self) -> date:
        return self._current_time.date()

    def advance_time(self, new_time: datetime) -> None:
        """
        Move the clock to a new time.

        Raises:
            ValueError: If new_time is before the current time
        """
        if new_time < self._current_time:
            raise ValueError(
                f"Cannot move time backwards: {new_time} < {self._current_time}"
            )
        self._current_time = new_time

    def advance_days(self, days: int) -> None:
        """Move the clock forward by a whole number of days."""
        self.advance_time(self._current_time + timedelta(days=days))

    def __repr__(self):
        return f"ManualClock({self._current_time.isoformat()})"
