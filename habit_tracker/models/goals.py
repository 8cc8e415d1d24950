# File: habit_tracker/models/goals.py

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .common import DateLike
from .enums import Priority, parse_priority
from .habits import Habit


@dataclass
class Goal:
    """A named objective aggregating habits, with an optional due date."""
    id: str
    name: str
    habits: List[Habit] = field(default_factory=list)
    priority: Priority = Priority.MEDIUM
    description: Optional[str] = None
    due_date: Optional[str] = None  # ISO YYYY-MM-DD

    def __post_init__(self):
        if not isinstance(self.priority, Priority):
            self.priority = parse_priority(self.priority)

    def add_habit(self, habit: Habit) -> None:
        self.habits.append(habit)

    def remove_habit(self, habit_id: str) -> None:
        self.habits = [h for h in self.habits if h.id != habit_id]

    def has_habit(self, habit_id: str) -> bool:
        return any(h.id == habit_id for h in self.habits)

    def set_due_date(self, due: Optional[str] = None) -> None:
        self.due_date = due

    def set_description(self, description: Optional[str] = None) -> None:
        self.description = description

    def get_habits(self) -> List[Habit]:
        return self.habits

    def get_progress(self, start_date: DateLike, end_date: Optional[DateLike] = None) -> float:
        """
        Mean progress of the owned habits.

        The explicit end date wins over the goal's own due date. Without
        either, or without habits, progress is 0. Every habit weighs the
        same regardless of frequency or priority.
        """
        effective_end = end_date if end_date is not None else self.due_date
        if not effective_end or not self.habits:
            return 0.0

        total = sum(h.get_progress(start_date, effective_end) for h in self.habits)
        return total / len(self.habits)

    def to_dict(self) -> dict:
        """Snapshot form; habits are referenced by id."""
        data = {
            'id': self.id,
            'name': self.name,
            'priority': self.priority.value,
            'habitIds': [h.id for h in self.habits],
        }
        if self.description is not None:
            data['description'] = self.description
        if self.due_date is not None:
            data['dueDate'] = self.due_date
        return data


def goal_from_dict(data: dict, habits_by_id: Dict[str, Habit]) -> Goal:
    """Create Goal from a snapshot dictionary, dropping unknown habit ids."""
    habits = [habits_by_id[hid] for hid in data.get('habitIds', []) if hid in habits_by_id]
    return Goal(
        id=str(data['id']),
        name=str(data['name']),
        habits=habits,
        priority=parse_priority(data.get('priority', Priority.MEDIUM.value)),
        description=data.get('description'),
        due_date=data.get('dueDate'),
    )
