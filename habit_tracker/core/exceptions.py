# File: habit_tracker/core/exceptions.py
"""
Custom exceptions for the habit tracker.

The domain core never raises; these are used by the persistence and
configuration layers.
"""


class HabitTrackerError(Exception):
    """Base exception for all habit tracker errors"""
    pass


class SnapshotError(HabitTrackerError):
    """Raised when a persisted snapshot cannot be read or decoded"""
    pass


class ConfigurationError(HabitTrackerError):
    """Raised when required configuration is missing or invalid"""
    pass
