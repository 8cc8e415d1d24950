# File: habit_tracker/core/config_manager.py
"""
Centralized configuration management for the habit tracker.
Loads settings from environment variables and an optional .env file.
"""

import logging
import os
from pathlib import Path
from typing import List

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ['yes', 'true', '1', 'on', 'y', 't']


class Config:
    """Application configuration singleton."""

    # Base directories
    BASE_DIR = Path(__file__).parent.parent.parent  # Go up 3 levels from habit_tracker/core/

    DATA_DIR = Path(os.getenv("HABIT_TRACKER_DATA_DIR", str(BASE_DIR / ".data")))
    LOGS_DIR = Path(os.getenv("HABIT_TRACKER_LOGS_DIR", str(BASE_DIR / "logs")))

    # Files
    SNAPSHOT_FILE = Path(os.getenv("HABIT_TRACKER_SNAPSHOT", str(DATA_DIR / "snapshot.json")))
    ENV_FILE = BASE_DIR / ".env"

    # Logging
    LOG_LEVEL = os.getenv("HABIT_TRACKER_LOG_LEVEL", "INFO").upper()
    LOG_TO_FILE = _env_flag("HABIT_TRACKER_LOG_TO_FILE", True)

    # Domain defaults
    DEFAULT_CATEGORY_ID = "default"
    DEFAULT_CATEGORY_NAME = "General"
    NEXT_DATE_LOOKAHEAD_DAYS = 366

    @classmethod
    def log_level(cls) -> int:
        """Numeric logging level, INFO when the configured name is unknown."""
        level = logging.getLevelName(cls.LOG_LEVEL)
        return level if isinstance(level, int) else logging.INFO

    @classmethod
    def ensure_dirs(cls) -> None:
        cls.SNAPSHOT_FILE.parent.mkdir(parents=True, exist_ok=True)

    @classmethod
    def validate(cls) -> bool:
        """Validate that the configuration is usable."""
        errors: List[str] = []

        if not isinstance(logging.getLevelName(cls.LOG_LEVEL), int):
            errors.append(f"Unknown log level: {cls.LOG_LEVEL}")

        if cls.SNAPSHOT_FILE.exists() and cls.SNAPSHOT_FILE.is_dir():
            errors.append(f"Snapshot path is a directory: {cls.SNAPSHOT_FILE}")

        parent = cls.SNAPSHOT_FILE.parent
        if parent.exists() and not os.access(parent, os.W_OK):
            errors.append(f"Data directory is not writable: {parent}")

        if errors:
            for error in errors:
                print(f"Configuration Error: {error}")
            return False

        return True
