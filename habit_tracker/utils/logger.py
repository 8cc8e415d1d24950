# File: habit_tracker/utils/logger.py
"""
Centralized logging configuration for the habit tracker.
"""

import logging
import sys
from datetime import datetime
from typing import Optional

from habit_tracker.core.config_manager import Config


def setup_logger(name: str = "habit_tracker", level: Optional[int] = None) -> logging.Logger:
    """
    Configure and return a logger instance.

    Args:
        name: Logger name
        level: Logging level (default: the configured HABIT_TRACKER_LOG_LEVEL)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Prevent duplicate handlers
    if logger.handlers:
        return logger

    if level is None:
        level = Config.log_level()
    logger.setLevel(logging.DEBUG if Config.LOG_TO_FILE else level)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(
        '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
        datefmt='%H:%M:%S'
    ))
    logger.addHandler(console_handler)

    if Config.LOG_TO_FILE:
        # File handler for persistent logs
        try:
            Config.LOGS_DIR.mkdir(parents=True, exist_ok=True)
            log_file = Config.LOGS_DIR / f"habit_tracker_{datetime.now().strftime('%Y%m%d')}.log"
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
        except OSError as e:
            logger.warning(f"File logging disabled: {e}")
        else:
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(logging.Formatter(
                '%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            ))
            logger.addHandler(file_handler)

    return logger


class LoggerMixin:
    """Mixin to add logging capability to any class."""

    @property
    def logger(self) -> logging.Logger:
        """Get logger for this class."""
        if not hasattr(self, '_logger'):
            self._logger = setup_logger(f"habit_tracker.{self.__class__.__name__}")
        return self._logger
