"""
Script to delete the persisted snapshot so the tracker starts from scratch.
"""

import sys
from pathlib import Path

# Add project root to Python path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from habit_tracker.core.config_manager import Config
from habit_tracker.utils.logger import setup_logger

logger = setup_logger(__name__)


def main() -> int:
    """
    Remove the snapshot file if it exists.

    Returns:
        Exit code (0 for success, 1 for failure).
    """
    snapshot = Config.SNAPSHOT_FILE
    if not snapshot.exists():
        logger.info(f"Nothing to reset, {snapshot} does not exist")
        return 0

    try:
        snapshot.unlink()
    except OSError as e:
        logger.error(f"Could not delete {snapshot}: {e}")
        return 1

    logger.info(f"Snapshot deleted: {snapshot}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
