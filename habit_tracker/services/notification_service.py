# File: habit_tracker/services/notification_service.py

from habit_tracker.models.habits import Habit
from habit_tracker.utils.logger import LoggerMixin


class NotificationService(LoggerMixin):
    """Delivers habit reminders through the application log."""

    def format_reminder(self, habit: Habit) -> str:
        return (
            f"Reminder: don't forget \"{habit.name}\" "
            f"[{habit.category.name}] (priority: {habit.priority.label})"
        )

    def send_reminder(self, habit: Habit) -> None:
        """Fire-and-forget reminder for a single habit."""
        self.logger.info(self.format_reminder(habit))
