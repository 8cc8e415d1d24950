# File: habit_tracker/core/clock.py
"""
Clock capability used for "today" lookups (current streak, nearest due goal).

Production code uses the UTC wall clock; tests inject a FixedClock so the
streak and due-date logic stays deterministic.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Union

import pytz


class Clock(ABC):
    """Produces the current calendar date."""

    @abstractmethod
    def today(self) -> date:
        """Return the current UTC date."""


class SystemClock(Clock):
    """Wall clock pinned to UTC to avoid local day-boundary skew."""

    def today(self) -> date:
        return datetime.now(pytz.utc).date()


class FixedClock(Clock):
    """Clock frozen on a given date."""

    def __init__(self, fixed: Union[str, date]):
        if isinstance(fixed, str):
            fixed = datetime.strptime(fixed, "%Y-%m-%d").date()
        self.fixed = fixed

    def today(self) -> date:
        return self.fixed

    def __repr__(self) -> str:
        return f"FixedClock({self.fixed.isoformat()})"
