# File: habit_tracker/processors/habit_processor.py
"""
Habit filtering for a given day.
Selects habits based on archived status, schedule and completion.
"""

from typing import Iterable, List

from habit_tracker.models.common import DateLike, to_iso_date
from habit_tracker.models.habits import Habit
from habit_tracker.utils.logger import setup_logger

logger = setup_logger(__name__)


def filter_habits(
    habits: Iterable[Habit],
    day: DateLike,
    include_completed: bool = True
) -> List[Habit]:
    """
    Filters habits down to those the schedule expects on a given day.

    Habits are filtered based on:
    - Archived status (archived habits are skipped)
    - Schedule (``Habit.is_due_on``)
    - Completion, when ``include_completed`` is False

    Args:
        habits: Habits to filter
        day: The day to check (ISO string or date)
        include_completed: Keep habits already completed on that day

    Returns:
        Habits due on the day, in input order

    Example:
        >>> pending = filter_habits(repo.get_all(), '2025-09-01', include_completed=False)
    """
    day_iso = to_iso_date(day)
    habits = list(habits)
    logger.debug(f"Filtering {len(habits)} habits for {day_iso}")

    relevant = []
    archived_count = 0
    completed_count = 0

    for habit in habits:
        if habit.archived:
            archived_count += 1
            continue

        if not habit.is_due_on(day_iso):
            continue

        if not include_completed and habit.is_completed_on(day_iso):
            completed_count += 1
            continue

        relevant.append(habit)

    logger.debug(
        f"Filtered habits for {day_iso}: {len(relevant)} relevant, "
        f"{archived_count} archived, {completed_count} already completed"
    )
    return relevant


def filter_completed(habits: Iterable[Habit], day: DateLike) -> List[Habit]:
    """Non-archived habits completed on the given day, due or not."""
    return [h for h in habits if not h.archived and h.is_completed_on(day)]
