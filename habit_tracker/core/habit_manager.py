# File: habit_tracker/core/habit_manager.py
"""
Habit manager facade.
Coordinates the habit repository, categories, goals and reminders.

Mutators on an unknown habit id return None, goal mutators return False;
callers must check before acting on the result.
"""

from dataclasses import dataclass
from datetime import timedelta
from typing import Dict, Iterable, List, Optional, Union

from habit_tracker.core.clock import Clock, SystemClock
from habit_tracker.core.config_manager import Config
from habit_tracker.models.category import Category
from habit_tracker.models.common import DateLike, parse_iso_date
from habit_tracker.models.enums import Frequency, Priority
from habit_tracker.models.goals import Goal
from habit_tracker.models.habits import Habit
from habit_tracker.processors.habit_processor import filter_completed, filter_habits
from habit_tracker.services.notification_service import NotificationService
from habit_tracker.services.repository import HabitRepository
from habit_tracker.utils.logger import setup_logger

logger = setup_logger(__name__)


@dataclass
class NearestGoalProgress:
    """Progress of the goal whose due date is closest."""
    goal_id: str
    goal_name: str
    due_date: str
    progress: float


class HabitManager:
    """
    Orchestration facade over habits, categories and goals.

    Habits live in the repository; goals hold references to those same
    habit objects, so removing a habit sweeps it out of every goal.
    """

    def __init__(
        self,
        repository: HabitRepository,
        notifier: NotificationService,
        clock: Optional[Clock] = None
    ):
        """
        Initialize the manager.

        Args:
            repository: Canonical habit store
            notifier: Reminder delivery
            clock: Source of "today" (defaults to the UTC wall clock)
        """
        self.repository = repository
        self.notifier = notifier
        self.clock = clock or SystemClock()
        self.categories: Dict[str, Category] = {}
        self.goals: Dict[str, Goal] = {}

    # ==================== Categories ====================

    def add_category(self, category: Category) -> None:
        self.categories[category.id] = category

    def get_category(self, category_id: str) -> Optional[Category]:
        return self.categories.get(category_id)

    def get_all_categories(self) -> List[Category]:
        return list(self.categories.values())

    def _ensure_default_category(self) -> Category:
        default = self.categories.get(Config.DEFAULT_CATEGORY_ID)
        if default is None:
            default = Category(Config.DEFAULT_CATEGORY_ID, Config.DEFAULT_CATEGORY_NAME)
            self.add_category(default)
            logger.debug("Created default category")
        return default

    # ==================== Habits ====================

    def create_habit(
        self,
        id: str,
        name: str,
        frequency: Union[Frequency, str] = Frequency.DAILY,
        category: Optional[Category] = None,
        priority: Priority = Priority.MEDIUM,
        description: Optional[str] = None
    ) -> Habit:
        """Create a habit, falling back to the default category, and store it."""
        habit = Habit(
            id=id,
            name=name,
            frequency=frequency,
            category=category or self._ensure_default_category(),
            priority=priority,
            description=description,
        )
        self.repository.save(habit)
        logger.info(f"Created habit '{name}' ({habit.frequency_value})")
        return habit

    def add_habit(self, habit: Habit) -> None:
        self.repository.save(habit)

    def get_habit(self, habit_id: str) -> Optional[Habit]:
        return self.repository.get_by_id(habit_id)

    def get_all_habits(self, include_archived: bool = False) -> List[Habit]:
        return self.repository.get_all(include_archived=include_archived)

    def get_habits_by_category(self, category_id: str) -> List[Habit]:
        return [h for h in self.repository.get_all() if h.category.id == category_id]

    def remove_habit(self, habit_id: str) -> bool:
        """Delete a habit from the repository and from every goal."""
        if self.repository.get_by_id(habit_id) is None:
            return False

        self.repository.delete(habit_id)
        for goal in self.goals.values():
            goal.remove_habit(habit_id)

        logger.info(f"Removed habit {habit_id}")
        return True

    def _mutate(self, habit_id: str, action) -> Optional[Habit]:
        habit = self.repository.get_by_id(habit_id)
        if habit is None:
            logger.debug(f"Habit not found: {habit_id}")
            return None
        action(habit)
        self.repository.save(habit)
        return habit

    def update_habit(
        self,
        habit_id: str,
        name: Optional[str] = None,
        description: Optional[str] = None,
        priority: Optional[Priority] = None
    ) -> Optional[Habit]:
        """Update the given fields only; None leaves a field unchanged."""
        def apply(habit: Habit) -> None:
            if name is not None:
                habit.name = name
            if description is not None:
                habit.description = description
            if priority is not None:
                habit.priority = priority

        return self._mutate(habit_id, apply)

    def rename_habit(self, habit_id: str, name: str) -> Optional[Habit]:
        return self._mutate(habit_id, lambda h: setattr(h, 'name', name))

    def set_description(self, habit_id: str, description: Optional[str] = None) -> Optional[Habit]:
        return self._mutate(habit_id, lambda h: setattr(h, 'description', description))

    def set_category(self, habit_id: str, category_id: Optional[str] = None) -> Optional[Habit]:
        """Move a habit to a known category. Without an id the habit is re-saved as is."""
        if category_id is None:
            return self._mutate(habit_id, lambda h: None)

        category = self.categories.get(category_id)
        if category is None:
            logger.debug(f"Category not found: {category_id}")
            return None
        return self._mutate(habit_id, lambda h: setattr(h, 'category', category))

    def set_frequency(self, habit_id: str, frequency: Union[Frequency, str]) -> Optional[Habit]:
        return self._mutate(habit_id, lambda h: h.set_frequency(frequency))

    def set_days_of_week(self, habit_id: str, days: Iterable[int]) -> Optional[Habit]:
        days = list(days)
        return self._mutate(habit_id, lambda h: h.set_days_of_week(days))

    def set_day_of_month(self, habit_id: str, day: int) -> Optional[Habit]:
        return self._mutate(habit_id, lambda h: h.set_day_of_month(day))

    def archive_habit(self, habit_id: str) -> Optional[Habit]:
        return self._mutate(habit_id, Habit.archive)

    def unarchive_habit(self, habit_id: str) -> Optional[Habit]:
        return self._mutate(habit_id, Habit.unarchive)

    def toggle_habit(self, habit_id: str, day: DateLike) -> Optional[Habit]:
        return self._mutate(habit_id, lambda h: h.toggle_completed(day))

    def set_done(self, habit_id: str, done: bool, day: DateLike) -> Optional[Habit]:
        def apply(habit: Habit) -> None:
            if done:
                habit.mark_as_completed(day)
            else:
                habit.unmark_as_completed(day)

        return self._mutate(habit_id, apply)

    def complete_with_note(self, habit_id: str, day: DateLike, note: str) -> Optional[Habit]:
        return self._mutate(habit_id, lambda h: h.complete_with_note(day, note))

    # ==================== Selectors ====================

    def due_on(self, day: DateLike) -> List[Habit]:
        """Non-archived habits the schedule expects on the day."""
        return filter_habits(self.repository.get_all(), day)

    def completed_on(self, day: DateLike) -> List[Habit]:
        return filter_completed(self.repository.get_all(), day)

    def pending_on(self, day: DateLike) -> List[Habit]:
        """Habits due on the day and not yet completed."""
        return filter_habits(self.repository.get_all(), day, include_completed=False)

    def next_available_date(self, habit_id: str, from_date: DateLike) -> Optional[str]:
        """
        First day on or after from_date where the habit is due and not completed.

        The search is bounded by Config.NEXT_DATE_LOOKAHEAD_DAYS, so a habit
        that is never due yields None.
        """
        habit = self.repository.get_by_id(habit_id)
        start = parse_iso_date(from_date)
        if habit is None or start is None:
            return None

        for offset in range(Config.NEXT_DATE_LOOKAHEAD_DAYS):
            candidate = start + timedelta(days=offset)
            if habit.is_due_on(candidate) and not habit.is_completed_on(candidate):
                return candidate.isoformat()
        return None

    # ==================== Streaks & totals ====================

    def get_current_streak(self, habit_id: Optional[str] = None) -> int:
        """Current streak of one habit, or the best one across active habits."""
        if habit_id is not None:
            habit = self.repository.get_by_id(habit_id)
            return habit.get_current_streak(self.clock) if habit else 0
        return max((h.get_current_streak(self.clock) for h in self.repository.get_all()), default=0)

    def get_longest_streak(self, habit_id: Optional[str] = None) -> int:
        """Longest streak of one habit, or the best one across active habits."""
        if habit_id is not None:
            habit = self.repository.get_by_id(habit_id)
            return habit.get_longest_streak() if habit else 0
        return max((h.get_longest_streak() for h in self.repository.get_all()), default=0)

    def total_success(self, start_date: DateLike, end_date: DateLike) -> int:
        """Number of completion records within the range across active habits."""
        start = parse_iso_date(start_date)
        end = parse_iso_date(end_date)
        if start is None or end is None:
            return 0

        total = 0
        for habit in self.repository.get_all():
            for raw in habit.completed_dates:
                day = parse_iso_date(raw)
                if day is not None and start <= day <= end:
                    total += 1
        return total

    # ==================== Goals ====================

    def add_goal(self, goal: Goal) -> None:
        self.goals[goal.id] = goal

    def get_goal(self, goal_id: str) -> Optional[Goal]:
        return self.goals.get(goal_id)

    def get_all_goals(self) -> List[Goal]:
        return list(self.goals.values())

    def remove_goal(self, goal_id: str) -> bool:
        """Remove a goal; its habits are left untouched."""
        return self.goals.pop(goal_id, None) is not None

    def add_habit_to_goal(self, goal_id: str, habit_id: str) -> bool:
        goal = self.goals.get(goal_id)
        habit = self.repository.get_by_id(habit_id)
        if goal is None or habit is None:
            return False
        if not goal.has_habit(habit_id):
            goal.add_habit(habit)
        return True

    def remove_habit_from_goal(self, goal_id: str, habit_id: str) -> bool:
        goal = self.goals.get(goal_id)
        if goal is None:
            return False
        goal.remove_habit(habit_id)
        return True

    def set_goal_due_date(self, goal_id: str, due_date: Optional[str] = None) -> bool:
        goal = self.goals.get(goal_id)
        if goal is None:
            return False
        goal.set_due_date(due_date)
        return True

    def set_goal_description(self, goal_id: str, description: Optional[str] = None) -> bool:
        goal = self.goals.get(goal_id)
        if goal is None:
            return False
        goal.set_description(description)
        return True

    # ==================== Progress ====================

    def get_overall_progress(self, start_date: DateLike, end_date: DateLike) -> float:
        """Mean progress over every active habit, regardless of goals."""
        habits = self.repository.get_all()
        if not habits:
            return 0.0
        return sum(h.get_progress(start_date, end_date) for h in habits) / len(habits)

    def get_overall_progress_from_goals(self, start_date: DateLike) -> float:
        """Mean progress of the goals that have a due date, each up to that date."""
        with_due = [g for g in self.goals.values() if g.due_date]
        if not with_due:
            return 0.0
        return sum(g.get_progress(start_date) for g in with_due) / len(with_due)

    def get_nearest_due_date_progress(
        self,
        start_date: DateLike,
        reference_date: Optional[DateLike] = None
    ) -> Optional[NearestGoalProgress]:
        """
        Progress of the goal with the closest due date.

        The earliest due date on or after the reference date wins; when every
        due date has passed, the earliest due date overall is used instead.

        Args:
            start_date: Start of the progress range
            reference_date: Day to measure from (default: today per the clock)

        Returns:
            NearestGoalProgress, or None when no goal has a due date
        """
        dated = []
        for goal in self.goals.values():
            due = parse_iso_date(goal.due_date) if goal.due_date else None
            if due is not None:
                dated.append((due, goal))
        if not dated:
            return None

        reference = parse_iso_date(reference_date) if reference_date is not None else self.clock.today()

        # sorted() is stable: equal due dates keep insertion order
        pool = sorted(dated, key=lambda pair: pair[0])
        upcoming = [pair for pair in pool if reference is not None and pair[0] >= reference]
        _, goal = (upcoming or pool)[0]

        return NearestGoalProgress(
            goal_id=goal.id,
            goal_name=goal.name,
            due_date=goal.due_date,
            progress=goal.get_progress(start_date),
        )

    # ==================== Notifications ====================

    def _notify(self, habits: List[Habit]) -> int:
        sent = 0
        for habit in habits:
            try:
                self.notifier.send_reminder(habit)
                sent += 1
            except Exception as e:
                # Reminders are fire-and-forget
                logger.warning(f"Reminder for habit {habit.id} failed: {e}")
        return sent

    def send_reminders(self) -> int:
        """Remind about every active habit. Returns the number delivered."""
        return self._notify(self.repository.get_all())

    def send_due_reminders(self, day: Optional[DateLike] = None) -> int:
        """Remind about habits still pending on the day (default: today)."""
        day = day if day is not None else self.clock.today()
        return self._notify(self.pending_on(day))
