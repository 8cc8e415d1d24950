# File: tests/unit/test_habit_manager.py
"""
Unit tests for the HabitManager facade.
"""

import pytest

from habit_tracker.core.clock import FixedClock
from habit_tracker.core.habit_manager import HabitManager, NearestGoalProgress
from habit_tracker.models.category import Category
from habit_tracker.models.enums import Frequency, Priority
from habit_tracker.models.goals import Goal
from habit_tracker.services.repository import InMemoryHabitRepository


# ==================== Habit Management Tests ====================

class TestHabitManagement:
    """Tests for creating and mutating habits."""

    def test_create_habit_uses_default_category(self, manager):
        first = manager.create_habit("a", "A")
        second = manager.create_habit("b", "B")

        assert first.category.id == "default"
        assert first.category.name == "General"
        assert second.category is first.category
        assert len(manager.get_all_categories()) == 1

    def test_create_habit_defaults(self, manager, health_category):
        habit = manager.create_habit("a", "A", category=health_category)

        assert habit.frequency == Frequency.DAILY
        assert habit.priority == Priority.MEDIUM
        assert manager.get_habit("a") is habit

    def test_get_all_habits_hides_archived(self, populated_manager):
        populated_manager.archive_habit("h1")

        assert [h.id for h in populated_manager.get_all_habits()] == ["h2", "h3"]
        assert len(populated_manager.get_all_habits(include_archived=True)) == 3

        populated_manager.unarchive_habit("h1")
        assert len(populated_manager.get_all_habits()) == 3

    def test_get_habits_by_category(self, populated_manager):
        assert [h.id for h in populated_manager.get_habits_by_category("c2")] == ["h2", "h3"]

    def test_update_habit_partial(self, populated_manager):
        habit = populated_manager.update_habit("h1", name="Hydrate", priority=Priority.LOW)

        assert habit.name == "Hydrate"
        assert habit.priority == Priority.LOW
        assert habit.description is None

        unchanged = populated_manager.update_habit("h1")
        assert unchanged.name == "Hydrate"

    def test_rename_and_description(self, populated_manager):
        assert populated_manager.rename_habit("h1", "Water").name == "Water"
        assert populated_manager.set_description("h1", "2L").description == "2L"
        assert populated_manager.set_description("h1").description is None

    def test_set_category(self, populated_manager):
        assert populated_manager.set_category("h1", "c2").category.id == "c2"
        assert populated_manager.set_category("h1").category.id == "c2"
        assert populated_manager.set_category("h1", "nope") is None

    def test_schedule_setters(self, populated_manager):
        populated_manager.set_frequency("h1", "weekly")
        populated_manager.set_days_of_week("h1", [3, 1, 3])
        habit = populated_manager.get_habit("h1")

        assert habit.frequency == Frequency.WEEKLY
        assert habit.days_of_week == [1, 3]

        populated_manager.set_frequency("h1", Frequency.MONTHLY)
        populated_manager.set_day_of_month("h1", 15)
        assert habit.is_due_on("2025-09-15") is True

    def test_toggle_and_set_done(self, populated_manager):
        populated_manager.toggle_habit("h1", "2025-09-01")
        assert populated_manager.get_habit("h1").is_completed_on("2025-09-01")

        populated_manager.toggle_habit("h1", "2025-09-01")
        assert not populated_manager.get_habit("h1").is_completed_on("2025-09-01")

        populated_manager.set_done("h1", True, "2025-09-02")
        assert populated_manager.get_habit("h1").is_completed_on("2025-09-02")
        populated_manager.set_done("h1", False, "2025-09-02")
        assert not populated_manager.get_habit("h1").is_completed_on("2025-09-02")

    def test_complete_with_note(self, populated_manager):
        habit = populated_manager.complete_with_note("h1", "2025-09-02", "2L")

        assert habit.get_completion_note("2025-09-02") == "2L"

    @pytest.mark.parametrize("call", [
        lambda m: m.update_habit("nope", name="x"),
        lambda m: m.rename_habit("nope", "x"),
        lambda m: m.set_description("nope", "x"),
        lambda m: m.set_category("nope"),
        lambda m: m.set_frequency("nope", "daily"),
        lambda m: m.set_days_of_week("nope", [1]),
        lambda m: m.set_day_of_month("nope", 1),
        lambda m: m.archive_habit("nope"),
        lambda m: m.unarchive_habit("nope"),
        lambda m: m.toggle_habit("nope", "2025-09-01"),
        lambda m: m.set_done("nope", True, "2025-09-01"),
        lambda m: m.complete_with_note("nope", "2025-09-01", "x"),
        lambda m: m.next_available_date("nope", "2025-09-01"),
    ])
    def test_unknown_habit_returns_none(self, populated_manager, call):
        assert call(populated_manager) is None

    def test_remove_habit_sweeps_goals(self, populated_manager, september_goal, daily_habit):
        other = Goal("g2", "Other", [daily_habit])
        populated_manager.add_goal(other)

        assert populated_manager.remove_habit("h1") is True
        assert populated_manager.get_habit("h1") is None
        assert not september_goal.has_habit("h1")
        assert not other.has_habit("h1")
        assert populated_manager.remove_habit("h1") is False


# ==================== Selector Tests ====================

class TestSelectors:
    """Tests for day-based selectors and lookahead."""

    def test_due_on(self, populated_manager):
        assert [h.id for h in populated_manager.due_on("2025-09-01")] == ["h1", "h2", "h3"]
        assert [h.id for h in populated_manager.due_on("2025-09-02")] == ["h1"]

    def test_due_on_skips_archived(self, populated_manager):
        populated_manager.archive_habit("h1")

        assert populated_manager.due_on("2025-09-02") == []

    def test_completed_and_pending(self, populated_manager):
        populated_manager.set_done("h1", True, "2025-09-01")
        # Completion on a non-due day still shows up as completed
        populated_manager.set_done("h2", True, "2025-09-02")

        assert [h.id for h in populated_manager.completed_on("2025-09-01")] == ["h1"]
        assert [h.id for h in populated_manager.completed_on("2025-09-02")] == ["h2"]
        assert [h.id for h in populated_manager.pending_on("2025-09-01")] == ["h2", "h3"]

    def test_next_available_date_skips_completed(self, populated_manager):
        populated_manager.set_done("h1", True, "2025-09-10")

        assert populated_manager.next_available_date("h1", "2025-09-10") == "2025-09-11"

    def test_next_available_date_weekly(self, populated_manager):
        assert populated_manager.next_available_date("h2", "2025-09-02") == "2025-09-08"

    def test_next_available_date_monthly_31(self, populated_manager):
        populated_manager.set_day_of_month("h3", 31)

        assert populated_manager.next_available_date("h3", "2025-02-01") == "2025-03-31"

    def test_next_available_date_never_due(self, populated_manager):
        populated_manager.set_day_of_month("h3", 40)

        assert populated_manager.next_available_date("h3", "2025-01-01") is None


# ==================== Streak & Total Tests ====================

class TestStreaksAndTotals:
    """Tests for manager-level streak helpers and totals."""

    def test_streaks_per_habit_use_manager_clock(self, populated_manager):
        for day in ["2025-09-08", "2025-09-09", "2025-09-10"]:
            populated_manager.set_done("h1", True, day)

        assert populated_manager.get_current_streak("h1") == 3
        assert populated_manager.get_longest_streak("h1") == 3

    def test_streaks_across_habits_take_maximum(self, populated_manager):
        for day in ["2025-09-09", "2025-09-10"]:
            populated_manager.set_done("h1", True, day)
        for day in ["2025-08-01", "2025-08-02", "2025-08-03", "2025-08-04"]:
            populated_manager.set_done("h2", True, day)

        assert populated_manager.get_current_streak() == 2
        assert populated_manager.get_longest_streak() == 4

    def test_streaks_unknown_or_empty(self, manager):
        assert manager.get_current_streak("nope") == 0
        assert manager.get_longest_streak("nope") == 0
        assert manager.get_current_streak() == 0
        assert manager.get_longest_streak() == 0

    def test_total_success(self, populated_manager):
        for day in ["2025-08-31", "2025-09-01", "2025-09-02"]:
            populated_manager.set_done("h1", True, day)
        populated_manager.set_done("h2", True, "2025-09-01")

        assert populated_manager.total_success("2025-09-01", "2025-09-30") == 3
        assert populated_manager.total_success("bad", "2025-09-30") == 0


# ==================== Goal Management Tests ====================

class TestGoalManagement:
    """Tests for goal membership through the manager."""

    def test_goal_mutators(self, populated_manager, monthly_habit):
        assert populated_manager.add_habit_to_goal("g1", "h3") is True
        assert populated_manager.add_habit_to_goal("g1", "h3") is True
        goal = populated_manager.get_goal("g1")
        assert [h.id for h in goal.get_habits()] == ["h1", "h2", "h3"]

        assert populated_manager.remove_habit_from_goal("g1", "h3") is True
        assert populated_manager.set_goal_due_date("g1", "2025-10-31") is True
        assert populated_manager.set_goal_description("g1", "New") is True
        assert goal.due_date == "2025-10-31"
        assert goal.description == "New"

    def test_goal_mutators_on_missing(self, populated_manager):
        assert populated_manager.add_habit_to_goal("missing", "h1") is False
        assert populated_manager.add_habit_to_goal("g1", "missing") is False
        assert populated_manager.remove_habit_from_goal("missing", "h1") is False
        assert populated_manager.set_goal_due_date("missing", "2025-09-30") is False
        assert populated_manager.set_goal_description("missing", "x") is False
        assert populated_manager.remove_goal("missing") is False

    def test_remove_goal_keeps_habits(self, populated_manager):
        assert populated_manager.remove_goal("g1") is True
        assert populated_manager.get_all_goals() == []
        assert populated_manager.get_habit("h1") is not None


# ==================== Progress Tests ====================

class TestManagerProgress:
    """Tests for aggregated progress."""

    def test_overall_progress_empty(self, manager):
        assert manager.get_overall_progress("2025-09-01", "2025-09-30") == 0

    def test_overall_progress_is_mean_of_active_habits(self, populated_manager):
        populated_manager.set_done("h1", True, "2025-09-01")
        populated_manager.set_done("h1", True, "2025-09-02")
        populated_manager.set_done("h2", True, "2025-09-01")

        # h1: 2/4, h2: 1/1, h3: 0/1
        assert populated_manager.get_overall_progress("2025-09-01", "2025-09-04") == pytest.approx(0.5)

        populated_manager.archive_habit("h3")
        assert populated_manager.get_overall_progress("2025-09-01", "2025-09-04") == pytest.approx(0.75)

    def test_overall_progress_from_goals(self, populated_manager, daily_habit):
        populated_manager.add_goal(Goal("g2", "No due", [daily_habit]))
        populated_manager.set_done("h1", True, "2025-09-01")
        populated_manager.set_done("h2", True, "2025-09-01")

        expected = populated_manager.get_goal("g1").get_progress("2025-09-01")
        assert expected > 0
        assert populated_manager.get_overall_progress_from_goals("2025-09-01") == pytest.approx(expected)

    def test_overall_progress_from_goals_none_due(self, manager, daily_habit):
        manager.add_goal(Goal("g", "G", [daily_habit]))

        assert manager.get_overall_progress_from_goals("2025-09-01") == 0


# ==================== Nearest Due Date Tests ====================

class TestNearestDueDate:
    """Tests for get_nearest_due_date_progress."""

    def _manager_with_goals(self, *dues, clock=None):
        repo = InMemoryHabitRepository()
        manager = HabitManager(repo, None, clock or FixedClock("2025-09-10"))
        habit = manager.create_habit("h", "Daily", category=Category("c", "C"))
        habit.mark_as_completed("2025-09-01")
        for index, due in enumerate(dues):
            manager.add_goal(Goal(f"g{index}", f"Goal {index}", [habit], due_date=due))
        return manager

    def test_no_dated_goals(self, manager):
        assert manager.get_nearest_due_date_progress("2025-09-01") is None

        manager.add_goal(Goal("g", "G"))
        assert manager.get_nearest_due_date_progress("2025-09-01") is None

    def test_picks_nearest_future(self):
        manager = self._manager_with_goals("2025-10-01", "2025-09-20")

        result = manager.get_nearest_due_date_progress("2025-09-01", "2025-09-10")

        assert isinstance(result, NearestGoalProgress)
        assert result.goal_id == "g1"
        assert result.due_date == "2025-09-20"
        assert result.progress == pytest.approx(1 / 20)

    def test_reference_day_itself_counts_as_future(self):
        manager = self._manager_with_goals("2025-09-05", "2025-09-10")

        assert manager.get_nearest_due_date_progress("2025-09-01", "2025-09-10").goal_id == "g1"

    def test_falls_back_to_earliest_past(self):
        manager = self._manager_with_goals("2020-06-01", "2020-01-01")

        result = manager.get_nearest_due_date_progress("2019-12-01", "2025-09-10")

        assert result.goal_id == "g1"
        assert result.goal_name == "Goal 1"

    def test_ties_keep_insertion_order(self):
        manager = self._manager_with_goals("2025-09-20", "2025-09-20")

        assert manager.get_nearest_due_date_progress("2025-09-01", "2025-09-10").goal_id == "g0"

    def test_reference_defaults_to_clock(self):
        manager = self._manager_with_goals("2025-09-05", "2025-09-25", clock=FixedClock("2025-09-10"))

        assert manager.get_nearest_due_date_progress("2025-09-01").goal_id == "g1"


# ==================== Notification Tests ====================

class TestReminders:
    """Tests for reminder delivery through the manager."""

    def test_send_reminders_to_active_habits(self, populated_manager, mock_notifier):
        populated_manager.archive_habit("h3")

        assert populated_manager.send_reminders() == 2
        reminded = [call.args[0].id for call in mock_notifier.send_reminder.call_args_list]
        assert reminded == ["h1", "h2"]

    def test_send_due_reminders_defaults_to_today(self, populated_manager, mock_notifier):
        # 2025-09-10 is a Wednesday: only the daily habit is due
        assert populated_manager.send_due_reminders() == 1
        mock_notifier.send_reminder.assert_called_once()

    def test_send_due_reminders_skips_completed(self, populated_manager, mock_notifier):
        populated_manager.set_done("h1", True, "2025-09-01")

        assert populated_manager.send_due_reminders("2025-09-01") == 2

    def test_notifier_failures_are_swallowed(self, populated_manager, mock_notifier):
        mock_notifier.send_reminder.side_effect = RuntimeError("offline")

        assert populated_manager.send_reminders() == 0
        assert mock_notifier.send_reminder.call_count == 3
