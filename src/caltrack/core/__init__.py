"""Functional core - task store, view cursors and day resolution, no I/O."""

from .errors import (
    DayOutOfRangeForMonth,
    InvalidCommand,
    InvalidDayNumber,
    NoTasksOnDate,
    NotInCurrentWeek,
    TaskIndexOutOfRange,
    TaskKindMismatch,
    ValidationError,
)
from .freetime import TimeSlot, find_free_slots
from .resolver import resolve_day
from .store import TaskStore
from .tasks import Priority, Task, TaskKind
from .views import MonthView, ViewMode, WeekView, start_of_week

__all__ = [
    # Tasks
    "Task",
    "TaskKind",
    "Priority",
    # Store
    "TaskStore",
    # Views
    "WeekView",
    "MonthView",
    "ViewMode",
    "start_of_week",
    "resolve_day",
    # Free time
    "TimeSlot",
    "find_free_slots",
    # Errors
    "ValidationError",
    "InvalidDayNumber",
    "DayOutOfRangeForMonth",
    "NotInCurrentWeek",
    "NoTasksOnDate",
    "TaskIndexOutOfRange",
    "TaskKindMismatch",
    "InvalidCommand",
]
