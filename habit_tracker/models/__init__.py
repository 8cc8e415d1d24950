from .enums import Frequency, Priority, parse_priority
from .common import parse_iso_date, to_iso_date, iter_days, weekday_index
from .category import Category, category_from_dict
from .habits import Habit, habit_from_dict
from .goals import Goal, goal_from_dict

__all__ = [
    "Frequency",
    "Priority",
    "parse_priority",
    "parse_iso_date",
    "to_iso_date",
    "iter_days",
    "weekday_index",
    "Category",
    "category_from_dict",
    "Habit",
    "habit_from_dict",
    "Goal",
    "goal_from_dict"
]
