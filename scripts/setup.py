"""
First-run setup for the habit tracker.
Creates the .env file and the data directory, then seeds a starter snapshot.
"""

import sys
from pathlib import Path

# Add project root to Python path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from habit_tracker.core.config_manager import Config
from habit_tracker.core.habit_manager import HabitManager
from habit_tracker.models.category import Category
from habit_tracker.models.enums import Frequency, Priority
from habit_tracker.models.goals import Goal
from habit_tracker.services.notification_service import NotificationService
from habit_tracker.services.repository import InMemoryHabitRepository
from habit_tracker.services.storage import JsonFileStorageProvider, SnapshotStorage
from habit_tracker.utils.logger import setup_logger

logger = setup_logger(__name__)

ENV_TEMPLATE = """# Habit tracker settings
HABIT_TRACKER_LOG_LEVEL=INFO
HABIT_TRACKER_LOG_TO_FILE=true
"""

STARTER_CATEGORIES = [
    Category("health", "Health"),
    Category("learning", "Learning"),
    Category("admin", "Admin"),
]

# (id, name, frequency, category id, priority)
STARTER_HABITS = [
    ("h1", "Morning walk", Frequency.DAILY, "health", Priority.HIGH),
    ("h2", "Read 20 pages", Frequency.DAILY, "learning", Priority.MEDIUM),
    ("h3", "Weekly review", Frequency.WEEKLY, "admin", Priority.MEDIUM),
    ("h4", "Monthly budget", Frequency.MONTHLY, "admin", Priority.LOW),
]


def create_env_file() -> bool:
    """
    Write a default .env unless one already exists.

    Returns:
        True if successful, False otherwise
    """
    if Config.ENV_FILE.exists():
        print("Existing .env detected.")
        return True
    try:
        Config.ENV_FILE.write_text(ENV_TEMPLATE, encoding='utf-8')
    except OSError as e:
        print(f"Could not write {Config.ENV_FILE}: {e}")
        return False
    print(f"Created {Config.ENV_FILE}")
    return True


def seed_snapshot() -> bool:
    """
    Save a starter set of categories, habits and one goal.

    Returns:
        True if successful, False otherwise
    """
    manager = HabitManager(InMemoryHabitRepository(), NotificationService())
    for category in STARTER_CATEGORIES:
        manager.add_category(category)

    habits = []
    for habit_id, name, frequency, category_id, priority in STARTER_HABITS:
        habits.append(manager.create_habit(
            id=habit_id,
            name=name,
            frequency=frequency,
            category=manager.get_category(category_id),
            priority=priority,
        ))

    manager.set_days_of_week("h3", [0])
    manager.add_goal(Goal("g1", "Healthy routine", habits[:2], Priority.HIGH))

    storage = SnapshotStorage(JsonFileStorageProvider(Config.SNAPSHOT_FILE))
    return storage.save_from(manager)


def main() -> int:
    print("Setting up the habit tracker...")

    if not create_env_file():
        return 1

    try:
        Config.ensure_dirs()
    except OSError as e:
        print(f"Could not create data directory: {e}")
        return 1

    if Config.SNAPSHOT_FILE.exists():
        print(f"Snapshot already present at {Config.SNAPSHOT_FILE}, leaving it untouched.")
    elif not seed_snapshot():
        print("Could not write the starter snapshot.")
        return 1
    else:
        logger.info(f"Starter snapshot written to {Config.SNAPSHOT_FILE}")

    print("\nSetup complete! Run 'python scripts/report.py' for your daily report.")
    return 0


if __name__ == '__main__':
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\nSetup cancelled.")
        sys.exit(1)
