"""Personal habit and goal tracker: scheduling, streaks and progress."""

__version__ = "1.0.0"
