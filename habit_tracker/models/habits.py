# File: habit_tracker/models/habits.py

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Dict, Iterable, List, Optional, Set, Union

from habit_tracker.core.clock import Clock, SystemClock

from .category import Category
from .common import DateLike, iter_days, parse_iso_date, to_iso_date, weekday_index
from .enums import Frequency, Priority, parse_priority

# Schedule defaults when no explicit days are configured
DEFAULT_WEEKDAY = 1  # Monday
DEFAULT_DAY_OF_MONTH = 1


@dataclass
class Habit:
    """A recurring activity with a schedule and a completion history."""
    id: str
    name: str
    frequency: Union[Frequency, str]
    category: Category
    priority: Priority = Priority.MEDIUM
    description: Optional[str] = None
    archived: bool = False
    completed_dates: Set[str] = field(default_factory=set)
    completion_notes: Dict[str, str] = field(default_factory=dict)
    days_of_week: Optional[List[int]] = None  # 0=Sunday .. 6=Saturday (weekly)
    day_of_month: Optional[int] = None  # 1..31 (monthly)

    def __post_init__(self):
        """Convert raw strings to enums where possible."""
        self.set_frequency(self.frequency)

        if not isinstance(self.priority, Priority):
            self.priority = parse_priority(self.priority)

        if self.days_of_week is not None:
            self.set_days_of_week(self.days_of_week)

    # ---------- Completion ----------

    def mark_as_completed(self, day: DateLike) -> None:
        self.completed_dates.add(to_iso_date(day))

    def unmark_as_completed(self, day: DateLike) -> None:
        self.completed_dates.discard(to_iso_date(day))

    def toggle_completed(self, day: DateLike) -> None:
        if self.is_completed_on(day):
            self.unmark_as_completed(day)
        else:
            self.mark_as_completed(day)

    def complete_with_note(self, day: DateLike, note: str) -> None:
        """Mark completion and record a note, replacing any previous note."""
        self.mark_as_completed(day)
        self.completion_notes[to_iso_date(day)] = note

    def get_completion_note(self, day: DateLike) -> Optional[str]:
        # Notes survive unmarking the date
        return self.completion_notes.get(to_iso_date(day))

    def is_completed_on(self, day: DateLike) -> bool:
        return to_iso_date(day) in self.completed_dates

    def get_completion_history(self) -> List[str]:
        """Completed dates in chronological order (a new list on every call)."""
        return sorted(self.completed_dates)

    def get_last_completed(self) -> Optional[str]:
        history = self.get_completion_history()
        return history[-1] if history else None

    # ---------- Streaks ----------

    def get_current_streak(self, clock: Optional[Clock] = None) -> int:
        """
        Count consecutive completed days ending today.

        Args:
            clock: Source of "today"; defaults to the UTC wall clock.

        Returns:
            Streak length, 0 when today itself is not completed.
        """
        clock = clock or SystemClock()
        count = 0
        cursor = clock.today()
        while cursor.isoformat() in self.completed_dates:
            count += 1
            cursor -= timedelta(days=1)
        return count

    def get_longest_streak(self) -> int:
        """Longest run of consecutive calendar days in the history."""
        days = [d for d in (parse_iso_date(raw) for raw in self.get_completion_history()) if d]
        if not days:
            return 0

        longest = current = 1
        for previous, day in zip(days, days[1:]):
            if (day - previous).days == 1:
                current += 1
            else:
                current = 1
            longest = max(longest, current)
        return longest

    # ---------- Scheduling ----------

    def set_frequency(self, frequency: Union[Frequency, str]) -> None:
        # Unknown frequency strings are kept as-is and are never due
        if isinstance(frequency, str):
            try:
                frequency = Frequency(frequency)
            except ValueError:
                pass
        self.frequency = frequency

    def archive(self) -> None:
        self.archived = True

    def unarchive(self) -> None:
        self.archived = False

    def set_days_of_week(self, days: Iterable[int]) -> None:
        self.days_of_week = sorted(set(days))

    def set_day_of_month(self, day: Optional[int]) -> None:
        # Stored raw; values outside 1..31 simply never match
        self.day_of_month = day

    def is_due_on(self, day: DateLike) -> bool:
        """Check whether the schedule expects a completion on the given day."""
        parsed = parse_iso_date(day)
        if parsed is None:
            return False

        if self.frequency == Frequency.DAILY:
            return True

        if self.frequency == Frequency.WEEKLY:
            if self.days_of_week:
                return weekday_index(parsed) in self.days_of_week
            return weekday_index(parsed) == DEFAULT_WEEKDAY

        if self.frequency == Frequency.MONTHLY:
            if self.day_of_month is None:
                return parsed.day == DEFAULT_DAY_OF_MONTH
            return parsed.day == self.day_of_month

        return False

    # ---------- Progress ----------

    def get_progress(self, start_date: DateLike, end_date: DateLike) -> float:
        """
        Fraction of expected occurrences completed between two dates (inclusive).

        Completions count toward the numerator even on days the habit was
        not due. A range without any due day yields 0.

        Args:
            start_date: First day of the range (ISO string or date)
            end_date: Last day of the range (ISO string or date)

        Returns:
            Ratio in [0, 1]
        """
        start = parse_iso_date(start_date)
        end = parse_iso_date(end_date)
        if start is None or end is None:
            return 0.0

        total_expected = sum(1 for day in iter_days(start, end) if self.is_due_on(day))
        if total_expected == 0:
            return 0.0

        completed = 0
        for raw in self.completed_dates:
            day = parse_iso_date(raw)
            if day is not None and start <= day <= end:
                completed += 1

        return min(completed / total_expected, 1.0)

    @property
    def frequency_value(self) -> str:
        if isinstance(self.frequency, Frequency):
            return self.frequency.value
        return str(self.frequency)

    def to_dict(self, include_category: bool = False) -> dict:
        """
        Convert to the snapshot dictionary form.

        Optional fields are omitted rather than written as null. Notes are
        exported only for dates that are still completed.

        Args:
            include_category: Embed the full category instead of its id only
        """
        history = self.get_completion_history()
        data = {
            'id': self.id,
            'name': self.name,
            'frequency': self.frequency_value,
            'categoryId': self.category.id,
            'priority': self.priority.value,
            'archived': self.archived,
            'completedDates': history,
        }
        if include_category:
            data['category'] = self.category.to_dict()

        notes = {d: self.completion_notes[d] for d in history if d in self.completion_notes}
        if notes:
            data['completionNotes'] = notes
        if self.description is not None:
            data['description'] = self.description
        if self.days_of_week:
            data['daysOfWeek'] = list(self.days_of_week)
        if self.day_of_month is not None:
            data['dayOfMonth'] = self.day_of_month
        return data


def habit_from_dict(data: dict, category: Category) -> Habit:
    """
    Create Habit from a snapshot dictionary.

    The category is resolved by the caller; a KeyError propagates when a
    required field is missing.
    """
    habit = Habit(
        id=str(data['id']),
        name=str(data['name']),
        frequency=data.get('frequency', Frequency.DAILY.value),
        category=category,
        priority=parse_priority(data.get('priority', Priority.MEDIUM.value)),
        description=data.get('description'),
        archived=bool(data.get('archived', False)),
    )

    # Absent and empty daysOfWeek both mean "no explicit days"
    if data.get('daysOfWeek'):
        habit.set_days_of_week(int(d) for d in data['daysOfWeek'])
    if data.get('dayOfMonth') is not None:
        habit.set_day_of_month(int(data['dayOfMonth']))

    for day in data.get('completedDates', []):
        habit.mark_as_completed(day)
    for day, note in (data.get('completionNotes') or {}).items():
        habit.complete_with_note(day, note)
    return habit
