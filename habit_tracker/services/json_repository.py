# File: habit_tracker/services/json_repository.py
"""
Habit repository persisted to a single JSON file.

Every habit is written with its category embedded, so the file can be
reloaded without a separate category table.
"""

import json
import os
from pathlib import Path
from typing import Union

from habit_tracker.models.category import category_from_dict
from habit_tracker.models.habits import Habit, habit_from_dict
from habit_tracker.services.repository import InMemoryHabitRepository
from habit_tracker.utils.logger import setup_logger

logger = setup_logger(__name__)


class JsonHabitRepository(InMemoryHabitRepository):
    """In-memory repository that writes through to disk on every change."""

    def __init__(self, path: Union[str, Path]):
        super().__init__()
        self.path = Path(path)
        self._load()

    def _load(self) -> None:
        if not self.path.exists():
            return

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                raw = json.load(f)
            habits = []
            for item in raw.get('habits', []):
                category = category_from_dict(item['category'])
                habits.append(habit_from_dict(item, category))
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
            logger.error(f"Failed to load habits from {self.path}: {e}")
            return

        for habit in habits:
            self._habits[habit.id] = habit
        logger.debug(f"Loaded {len(habits)} habits from {self.path}")

    def _write(self) -> None:
        payload = {
            'habits': [h.to_dict(include_category=True) for h in self.get_all(include_archived=True)]
        }
        tmp = self.path.with_name(self.path.name + '.tmp')
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp, 'w', encoding='utf-8') as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
            os.replace(tmp, self.path)
        except OSError as e:
            logger.error(f"Failed to save habits to {self.path}: {e}")

    def save(self, habit: Habit) -> None:
        super().save(habit)
        self._write()

    def delete(self, habit_id: str) -> None:
        super().delete(habit_id)
        self._write()
