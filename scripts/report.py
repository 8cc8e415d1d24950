"""
Daily habit report entry point.
Run this file every day to see what is pending and how the goals progress.
Make sure you have run 'python scripts/setup.py' at least once.
"""

import sys
import time
from pathlib import Path

# Add project root to Python path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from habit_tracker.core.clock import SystemClock
from habit_tracker.core.config_manager import Config
from habit_tracker.core.habit_manager import HabitManager
from habit_tracker.services.notification_service import NotificationService
from habit_tracker.services.repository import InMemoryHabitRepository
from habit_tracker.services.storage import JsonFileStorageProvider, SnapshotStorage
from habit_tracker.utils.logger import setup_logger

logger = setup_logger(__name__)


def main() -> int:
    """
    Main execution function.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    start_time = time.time()

    logger.info("=" * 60)
    logger.info("Habit Tracker Daily Report")
    logger.info("=" * 60)

    try:
        if not Config.validate():
            logger.error("Configuration validation failed")
            return 1

        clock = SystemClock()
        manager = HabitManager(InMemoryHabitRepository(), NotificationService(), clock)
        storage = SnapshotStorage(JsonFileStorageProvider(Config.SNAPSHOT_FILE))

        if not storage.load_into(manager):
            logger.error(f"No usable snapshot at {Config.SNAPSHOT_FILE}")
            logger.error("Please run 'python scripts/setup.py' first")
            return 1

        today = clock.today()
        month_start = today.replace(day=1)

        # ---------------------------------------------------------
        # Today's habits
        # ---------------------------------------------------------
        pending = manager.pending_on(today)
        logger.info(f"Pending today ({today.isoformat()}): {len(pending)}")
        for habit in pending:
            logger.info(f"  - {habit.name} [{habit.category.name}]")

        # ---------------------------------------------------------
        # Progress
        # ---------------------------------------------------------
        overall = manager.get_overall_progress(month_start, today)
        logger.info(f"Progress this month: {overall:.0%}")
        logger.info(f"Progress via goal due dates: {manager.get_overall_progress_from_goals(month_start):.0%}")
        logger.info(f"Best current streak: {manager.get_current_streak()} day(s)")

        nearest = manager.get_nearest_due_date_progress(month_start)
        if nearest:
            logger.info(
                f"Next goal: {nearest.goal_name} (due {nearest.due_date}) -> {nearest.progress:.0%}"
            )

        # ---------------------------------------------------------
        # Reminders
        # ---------------------------------------------------------
        sent = manager.send_due_reminders(today)
        logger.info(f"Reminders sent: {sent}")
        return 0

    except KeyboardInterrupt:
        logger.warning("Report interrupted by user")
        return 1

    except Exception as e:
        logger.error("Unexpected fatal error", exc_info=True)
        logger.error(f"Error: {e}")
        return 1

    finally:
        elapsed = time.time() - start_time
        logger.info(f"Total execution time: {elapsed:.2f} seconds")


if __name__ == "__main__":
    sys.exit(main())
