# File: habit_tracker/services/repository.py

from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from habit_tracker.models.habits import Habit


class HabitRepository(ABC):
    """Keyed storage of habits. The domain never assumes a backing store."""

    @abstractmethod
    def save(self, habit: Habit) -> None:
        """Insert or replace a habit by id."""

    @abstractmethod
    def get_by_id(self, habit_id: str) -> Optional[Habit]:
        """Return the habit, or None when unknown."""

    @abstractmethod
    def get_all(self, include_archived: bool = False) -> List[Habit]:
        """All habits in insertion order, archived ones only on request."""

    @abstractmethod
    def delete(self, habit_id: str) -> None:
        """Remove a habit; unknown ids are ignored."""


class InMemoryHabitRepository(HabitRepository):
    """Dictionary-backed repository."""

    def __init__(self):
        self._habits: Dict[str, Habit] = {}

    def save(self, habit: Habit) -> None:
        self._habits[habit.id] = habit

    def get_by_id(self, habit_id: str) -> Optional[Habit]:
        return self._habits.get(habit_id)

    def get_all(self, include_archived: bool = False) -> List[Habit]:
        items = list(self._habits.values())
        if include_archived:
            return items
        return [h for h in items if not h.archived]

    def delete(self, habit_id: str) -> None:
        self._habits.pop(habit_id, None)

    def __len__(self) -> int:
        return len(self._habits)
