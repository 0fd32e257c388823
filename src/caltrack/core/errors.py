"""Validation errors raised by the core and the command layer.

All of these are recoverable: the command layer prints the message and the
shell keeps running.
"""


class ValidationError(Exception):
    """Base class for user-facing validation failures."""

    pass


class InvalidDayNumber(ValidationError):
    """Day number outside 1..31."""

    pass


class DayOutOfRangeForMonth(ValidationError):
    """Day number past the end of the displayed month."""

    pass


class NotInCurrentWeek(ValidationError):
    """Day number does not fall inside the displayed week."""

    pass


class NoTasksOnDate(ValidationError):
    """Operation needs an existing task but the date has none."""

    pass


class TaskIndexOutOfRange(ValidationError):
    """Task number is not in 1..len(tasks for the date)."""

    pass


class TaskKindMismatch(ValidationError):
    """Fields supplied for an update do not belong to the task's kind."""

    pass


class InvalidCommand(ValidationError):
    """Malformed command or argument."""

    pass
