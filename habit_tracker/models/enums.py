# File: habit_tracker/models/enums.py

from enum import Enum


class Frequency(Enum):
    """Habit frequency options."""
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class Priority(Enum):
    """Habit and goal priority, stored by integer value in snapshots."""
    LOW = 0
    MEDIUM = 1
    HIGH = 2

    @property
    def label(self) -> str:
        return self.name.capitalize()


def parse_priority(raw) -> Priority:
    """Accept a Priority, its integer value or its name; fall back to MEDIUM."""
    if isinstance(raw, Priority):
        return raw
    try:
        if isinstance(raw, str):
            # Handle "High" as well as "Priority.HIGH"
            return Priority[raw.split('.')[-1].strip().upper()]
        return Priority(int(raw))
    except (KeyError, ValueError, TypeError):
        return Priority.MEDIUM
