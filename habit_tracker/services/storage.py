# File: habit_tracker/services/storage.py
"""
Snapshot persistence for the complete tracker state.

A snapshot is a plain dictionary tree:

    {
        "categories": [{"id", "name", "description"?}],
        "habits": [{"id", "name", "description"?, "frequency", "categoryId",
                    "priority", "archived", "completedDates",
                    "completionNotes"?, "daysOfWeek"?, "dayOfMonth"?}],
        "goals": [{"id", "name", "description"?, "priority", "habitIds",
                   "dueDate"?}]
    }

Optional keys are omitted when unset. Providers only move snapshots in and
out of a medium; SnapshotStorage converts between snapshots and a manager.
"""

import copy
import json
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from habit_tracker.core.exceptions import ConfigurationError, SnapshotError
from habit_tracker.models.category import Category, category_from_dict
from habit_tracker.models.goals import Goal, goal_from_dict
from habit_tracker.models.habits import Habit, habit_from_dict
from habit_tracker.utils.logger import setup_logger

logger = setup_logger(__name__)

Snapshot = Dict[str, List[Dict[str, Any]]]


class StorageProvider(ABC):
    """Medium able to hold one snapshot (file, memory, ...)."""

    @abstractmethod
    def load_snapshot(self) -> Optional[Snapshot]:
        """Return the stored snapshot, or None when nothing is stored."""

    @abstractmethod
    def save_snapshot(self, snapshot: Snapshot) -> None:
        """Replace the stored snapshot."""


class InMemoryStorageProvider(StorageProvider):
    """Keeps a private deep copy of the snapshot."""

    def __init__(self, initial: Optional[Snapshot] = None):
        self._snapshot = copy.deepcopy(initial)

    def load_snapshot(self) -> Optional[Snapshot]:
        return copy.deepcopy(self._snapshot)

    def save_snapshot(self, snapshot: Snapshot) -> None:
        self._snapshot = copy.deepcopy(snapshot)


class JsonFileStorageProvider(StorageProvider):
    """Snapshot stored as pretty-printed JSON, replaced atomically on save."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        if self.path.is_dir():
            raise ConfigurationError(f"Snapshot path is a directory: {self.path}")

    def load_snapshot(self) -> Optional[Snapshot]:
        if not self.path.exists():
            return None
        with open(self.path, 'r', encoding='utf-8') as f:
            return json.load(f)

    def save_snapshot(self, snapshot: Snapshot) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_name(self.path.name + '.tmp')
        with open(tmp, 'w', encoding='utf-8') as f:
            json.dump(snapshot, f, indent=2, ensure_ascii=False)
        os.replace(tmp, self.path)


class SnapshotStorage:
    """Converts manager state to and from snapshots held by a provider."""

    def __init__(self, provider: StorageProvider):
        self.provider = provider

    @staticmethod
    def to_snapshot(manager) -> Snapshot:
        """Build a snapshot from the manager (archived habits included)."""
        return {
            'categories': [c.to_dict() for c in manager.get_all_categories()],
            'habits': [h.to_dict() for h in manager.get_all_habits(include_archived=True)],
            'goals': [g.to_dict() for g in manager.get_all_goals()],
        }

    @staticmethod
    def decode(snapshot: Snapshot):
        """
        Decode a snapshot into model objects without touching any manager.

        Habits pointing at an unknown category are dropped; goal references
        to unknown habits are dropped.

        Returns:
            Tuple of (categories, habits, goals)

        Raises:
            SnapshotError: If the snapshot structure is malformed
        """
        try:
            categories: Dict[str, Category] = {}
            for raw in snapshot.get('categories', []):
                category = category_from_dict(raw)
                categories[category.id] = category

            habits: Dict[str, Habit] = {}
            for raw in snapshot.get('habits', []):
                category = categories.get(raw.get('categoryId'))
                if category is None:
                    logger.debug(
                        f"Skipping habit {raw.get('id')}: unknown category {raw.get('categoryId')}"
                    )
                    continue
                habit = habit_from_dict(raw, category)
                habits[habit.id] = habit

            goals = [goal_from_dict(raw, habits) for raw in snapshot.get('goals', [])]
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise SnapshotError(f"Malformed snapshot: {e}") from e

        return list(categories.values()), list(habits.values()), goals

    def load_into(self, manager) -> bool:
        """
        Load the stored snapshot into the manager.

        Decoding happens before anything is applied, so a corrupt snapshot
        leaves the manager untouched.

        Returns:
            True if a snapshot was applied, False otherwise
        """
        try:
            snapshot = self.provider.load_snapshot()
            if snapshot is None:
                logger.debug("No snapshot to load")
                return False
            categories, habits, goals = self.decode(snapshot)
        except (OSError, ValueError, SnapshotError) as e:
            logger.error(f"Failed to load snapshot: {e}", exc_info=True)
            return False

        for category in categories:
            manager.add_category(category)
        for habit in habits:
            manager.add_habit(habit)
        for goal in goals:
            manager.add_goal(goal)

        logger.info(
            f"Snapshot loaded: {len(categories)} categories, "
            f"{len(habits)} habits, {len(goals)} goals"
        )
        return True

    def save_from(self, manager) -> bool:
        """
        Save the manager state through the provider.

        Returns:
            True on success, False if the provider failed
        """
        snapshot = self.to_snapshot(manager)
        try:
            self.provider.save_snapshot(snapshot)
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Failed to save snapshot: {e}", exc_info=True)
            return False

        logger.debug(f"Snapshot saved with {len(snapshot['habits'])} habits")
        return True
