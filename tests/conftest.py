# File: tests/conftest.py
"""
Pytest configuration and shared fixtures.
Provides reusable habits, goals and managers for all tests.
"""

import os
import sys
from pathlib import Path
from unittest.mock import Mock

import pytest

# Keep test runs from writing log files
os.environ.setdefault("HABIT_TRACKER_LOG_TO_FILE", "false")

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from habit_tracker.core.clock import FixedClock
from habit_tracker.core.habit_manager import HabitManager
from habit_tracker.models.category import Category
from habit_tracker.models.enums import Frequency, Priority
from habit_tracker.models.goals import Goal
from habit_tracker.models.habits import Habit
from habit_tracker.services.notification_service import NotificationService
from habit_tracker.services.repository import InMemoryHabitRepository


# ==================== Clock Fixtures ====================

@pytest.fixture
def fixed_clock():
    """Clock frozen on Wednesday 2025-09-10."""
    return FixedClock("2025-09-10")


# ==================== Category Fixtures ====================

@pytest.fixture
def health_category():
    return Category("c1", "Health", "Body and mind")


@pytest.fixture
def admin_category():
    return Category("c2", "Admin")


# ==================== Habit Fixtures ====================

@pytest.fixture
def daily_habit(health_category):
    """Create a daily habit."""
    return Habit("h1", "Drink water", Frequency.DAILY, health_category, Priority.HIGH)


@pytest.fixture
def weekly_habit(admin_category):
    """Create a weekly habit on the default day (Monday)."""
    return Habit("h2", "Weekly review", Frequency.WEEKLY, admin_category)


@pytest.fixture
def monthly_habit(admin_category):
    """Create a monthly habit on the default day (the 1st)."""
    return Habit("h3", "Pay rent", Frequency.MONTHLY, admin_category, Priority.LOW)


@pytest.fixture
def sample_habits(daily_habit, weekly_habit, monthly_habit):
    """Collection of sample habits."""
    return [daily_habit, weekly_habit, monthly_habit]


# ==================== Goal Fixtures ====================

@pytest.fixture
def september_goal(daily_habit, weekly_habit):
    """Goal due at the end of September 2025."""
    return Goal(
        "g1", "Routine", [daily_habit, weekly_habit],
        Priority.HIGH, "Keep the routine", "2025-09-30"
    )


# ==================== Manager Fixtures ====================

@pytest.fixture
def repository():
    return InMemoryHabitRepository()


@pytest.fixture
def mock_notifier():
    """Notifier double recording reminders."""
    return Mock(spec=NotificationService)


@pytest.fixture
def manager(repository, mock_notifier, fixed_clock):
    """Empty manager wired with a fixed clock."""
    return HabitManager(repository, mock_notifier, fixed_clock)


@pytest.fixture
def populated_manager(manager, health_category, admin_category, sample_habits, september_goal):
    """Manager holding two categories, three habits and one goal."""
    manager.add_category(health_category)
    manager.add_category(admin_category)
    for habit in sample_habits:
        manager.add_habit(habit)
    manager.add_goal(september_goal)
    return manager
