"""Pure task domain logic - no I/O dependencies."""

import re
from dataclasses import dataclass
from datetime import date, datetime, time
from enum import Enum


class TaskKind(Enum):
    """Task variant, valued by its one-letter code."""

    PLAIN = "T"
    DEADLINE = "D"
    EVENT = "E"

    @classmethod
    def from_code(cls, code: str) -> "TaskKind":
        return cls(code.strip().upper())


class Priority(Enum):
    """Priority level, valued by its one-letter code."""

    LOW = "L"
    MEDIUM = "M"
    HIGH = "H"

    @classmethod
    def from_code(cls, code: str) -> "Priority":
        return cls(code.strip().upper())


@dataclass
class Task:
    """
    A schedulable item.

    One record type for every kind. Payload fields that do not apply to
    the task's kind stay None, so callers can read them without checking
    the kind first.
    """

    name: str
    kind: TaskKind = TaskKind.PLAIN
    completed: bool = False
    priority: Priority = Priority.LOW
    # DEADLINE
    due_date: date | None = None
    due_time: time | None = None
    # EVENT
    start_date: date | None = None
    end_date: date | None = None
    start_time: time | None = None
    end_time: time | None = None

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValueError("task name is required")

    @classmethod
    def plain(cls, name: str) -> "Task":
        return cls(name=name)

    @classmethod
    def deadline(cls, name: str, due_date: date, due_time: time) -> "Task":
        return cls(name=name, kind=TaskKind.DEADLINE, due_date=due_date, due_time=due_time)

    @classmethod
    def event(
        cls,
        name: str,
        start_date: date,
        end_date: date,
        start_time: time,
        end_time: time,
    ) -> "Task":
        return cls(
            name=name,
            kind=TaskKind.EVENT,
            start_date=start_date,
            end_date=end_date,
            start_time=start_time,
            end_time=end_time,
        )

    @property
    def is_event(self) -> bool:
        return self.kind is TaskKind.EVENT

    @property
    def type_icon(self) -> str:
        return self.kind.value

    @property
    def status_icon(self) -> str:
        return "X" if self.completed else "O"

    @property
    def priority_icon(self) -> str:
        return self.priority.value

    def display_prefix(self) -> str:
        """Icon block shown before the name, e.g. ``[E][O][L] ``."""
        return f"[{self.type_icon}][{self.status_icon}][{self.priority_icon}] "


PAYLOAD_FIELDS = {
    TaskKind.PLAIN: (),
    TaskKind.DEADLINE: ("due_date", "due_time"),
    TaskKind.EVENT: ("start_date", "end_date", "start_time", "end_time"),
}


# Text forms used on the command line and in the save file
DATE_FORMAT = "%d/%m/%Y"
TIME_FORMAT = "%H%M"
_DATE_PATTERN = re.compile(r"^\d{2}/\d{2}/\d{4}$")
_TIME_PATTERN = re.compile(r"^([01][0-9]|2[0-3])[0-5][0-9]$")


def parse_date_text(text: str) -> date:
    """Parse ``dd/mm/yyyy``. Raises ValueError."""
    text = text.strip()
    if not _DATE_PATTERN.match(text):
        raise ValueError(f"not a dd/mm/yyyy date: {text!r}")
    return datetime.strptime(text, DATE_FORMAT).date()


def parse_time_text(text: str) -> time:
    """Parse 24-hour ``HHMM``. Raises ValueError."""
    text = text.strip()
    if not _TIME_PATTERN.match(text):
        raise ValueError(f"not a HHMM time: {text!r}")
    return time(int(text[:2]), int(text[2:]))


def format_date(d: date) -> str:
    return d.strftime(DATE_FORMAT)


def format_time(t: time) -> str:
    return t.strftime(TIME_FORMAT)
