"""Command layer - parses shell input and drives the task store."""

import logging
from collections.abc import Callable
from datetime import date, datetime, time

from .core.errors import InvalidCommand, ValidationError
from .core.resolver import resolve_day
from .core.store import TaskStore
from .core.tasks import Priority, Task, TaskKind, format_date, parse_date_text, parse_time_text
from .core.views import MonthView, ViewMode, WeekView
from .render import HELP_TEXT, format_day_tasks, format_free_slots, render_month, render_week

logger = logging.getLogger(__name__)

Prompt = Callable[[str], str]

KIND_NAMES = {TaskKind.PLAIN: "Todo", TaskKind.DEADLINE: "Deadline", TaskKind.EVENT: "Event"}
PRIORITY_WORDS = {
    "high": Priority.HIGH,
    "h": Priority.HIGH,
    "medium": Priority.MEDIUM,
    "m": Priority.MEDIUM,
    "low": Priority.LOW,
    "l": Priority.LOW,
}

USAGE = {
    "add": "add, <day>, <taskType>, <taskDescription>",
    "update": "update, <day>, <taskIndex>, <newDescription>",
    "delete": "delete, <day>, <taskIndex>",
    "clear": "clear, <day>",
    "mark": "mark, <day>, <taskIndex>",
    "priority": "priority, <day>, <taskIndex>, <priorityLevel>",
    "list": "list, <day>",
    "free": "free, <day>",
}


# ============== Argument parsing ==============


def split_args(command: str, rest: str, count: int) -> list[str]:
    """Split the text after the command word into exactly ``count`` fields.

    The last field keeps any further commas, so descriptions may contain them.
    """
    args = [a.strip() for a in rest.split(",", count - 1)] if rest.strip() else []
    if len(args) != count or not all(args):
        raise InvalidCommand(
            f"Invalid input format. Please provide input in the format: {USAGE[command]}"
        )
    return args


def parse_day_number(text: str) -> int:
    try:
        return int(text.strip())
    except ValueError:
        raise InvalidCommand("Invalid day. Please enter the day of the month as a number.") from None


def parse_index(text: str) -> int:
    try:
        return int(text.strip())
    except ValueError:
        raise InvalidCommand("Invalid task index. Please enter a valid integer.") from None


def parse_kind(text: str) -> TaskKind:
    try:
        return TaskKind.from_code(text)
    except ValueError:
        raise InvalidCommand(
            "Invalid task type. Please provide valid task type: T for Todo, E for event, D for deadline."
        ) from None


def parse_priority(text: str) -> Priority:
    try:
        return PRIORITY_WORDS[text.strip().lower()]
    except KeyError:
        raise InvalidCommand("Invalid priority level. Please use 'high', 'medium', or 'low'.") from None


def parse_description(text: str) -> str:
    description = text.strip()
    if not description:
        raise InvalidCommand("The description cannot be empty.")
    if "|" in description:
        raise InvalidCommand("The description cannot contain '|'.")
    return description


def parse_date(text: str) -> date:
    try:
        return parse_date_text(text)
    except ValueError:
        raise InvalidCommand("Invalid date format. Please use the format dd/MM/yyyy.") from None


def parse_time(text: str) -> time:
    try:
        return parse_time_text(text)
    except ValueError:
        raise InvalidCommand("Invalid time format. Please use the format HHmm.") from None


def parse_date_time(text: str) -> tuple[date, time]:
    """Parse ``dd/mm/yyyy HHMM``."""
    parts = text.split()
    if len(parts) != 2:
        raise InvalidCommand("Invalid date and time format. Please use the format dd/MM/yyyy HHmm.")
    return parse_date(parts[0]), parse_time(parts[1])


def _check_event_order(start: tuple[date, time], end: tuple[date, time]) -> None:
    if datetime.combine(*end) < datetime.combine(*start):
        raise InvalidCommand("An event cannot end before it starts.")


# ============== Handler ==============


class CommandHandler:
    """
    Runs one shell command at a time against the store and view cursors.

    Holds which view is active. Follow-up questions (event and deadline
    dates, whether to change them on update) are asked through ``prompt``,
    so nothing below this layer waits on input.
    """

    def __init__(
        self,
        store: TaskStore,
        week_view: WeekView,
        month_view: MonthView,
        prompt: Prompt,
        mode: ViewMode = ViewMode.WEEK,
    ):
        self.store = store
        self.week_view = week_view
        self.month_view = month_view
        self.prompt = prompt
        self.mode = mode
        self.running = True
        self._commands: dict[str, Callable[[str], str]] = {
            "next": self._next,
            "prev": self._previous,
            "week": self._week,
            "month": self._month,
            "add": self._add,
            "update": self._update,
            "delete": self._delete,
            "clear": self._clear,
            "mark": self._mark,
            "priority": self._priority,
            "list": self._list,
            "free": self._free,
            "help": lambda rest: HELP_TEXT,
            "quit": self._quit,
        }

    def handle(self, line: str) -> str:
        """Run one input line and return the message to show."""
        command, _, rest = line.strip().partition(",")
        command = command.strip().lower()
        action = self._commands.get(command)
        if action is None:
            return "Invalid input. Please try again. Enter help to learn commands."
        try:
            return action(rest)
        except ValidationError as e:
            logger.info("Rejected %r: %s", line, e)
            return str(e)

    def render(self, cell_width: int = 15) -> str:
        """Render the active view."""
        if self.mode is ViewMode.MONTH:
            return render_month(self.store, self.month_view, cell_width)
        return render_week(self.store, self.week_view, cell_width)

    def resolve(self, day_text: str) -> date:
        return resolve_day(parse_day_number(day_text), self.mode, self.week_view, self.month_view)

    # ---- navigation ----

    @property
    def active_view(self) -> WeekView | MonthView:
        return self.month_view if self.mode is ViewMode.MONTH else self.week_view

    def _next(self, rest: str) -> str:
        self.active_view.next()
        return ""

    def _previous(self, rest: str) -> str:
        self.active_view.previous()
        return ""

    def _week(self, rest: str) -> str:
        self.mode = ViewMode.WEEK
        return ""

    def _month(self, rest: str) -> str:
        self.mode = ViewMode.MONTH
        return ""

    def _quit(self, rest: str) -> str:
        self.running = False
        return "Exiting Calendar..."

    # ---- tasks ----

    def _add(self, rest: str) -> str:
        day_text, kind_text, description = split_args("add", rest, 3)
        kind = parse_kind(kind_text)
        name = parse_description(description)
        day = self.resolve(day_text)

        match kind:
            case TaskKind.PLAIN:
                task = Task.plain(name)
            case TaskKind.DEADLINE:
                due = self._ask_date_time(
                    "Enter the deadline date and time of this task, separated by a space:"
                )
                task = Task.deadline(name, *due)
            case TaskKind.EVENT:
                start, end = self._ask_event_window()
                task = Task.event(name, start[0], end[0], start[1], end[1])

        self.store.add(day, task)
        return f"{KIND_NAMES[kind]} added."

    def _update(self, rest: str) -> str:
        day_text, index_text, description = split_args("update", rest, 3)
        index = parse_index(index_text)
        name = parse_description(description)
        day = self.resolve(day_text)

        # Fetch first so the follow-up questions match the task's kind
        current = self.store.task_at(day, index)
        fields = {}
        if current.kind is TaskKind.DEADLINE and self._confirm(
            "Do you want to update the deadline date and time? (yes/no)"
        ):
            due_date, due_time = self._ask_date_time(
                "Enter the new deadline date and time, separated by a space:"
            )
            fields = {"due_date": due_date, "due_time": due_time}
        elif current.kind is TaskKind.EVENT and self._confirm(
            "Do you want to update the start and end dates and times? (yes/no)"
        ):
            start, end = self._ask_event_window()
            fields = {
                "start_date": start[0],
                "start_time": start[1],
                "end_date": end[0],
                "end_time": end[1],
            }

        new_day = self.store.update(day, index, name, **fields)
        message = f"{KIND_NAMES[current.kind]} updated."
        if new_day != day:
            message += f" It is now listed on {format_date(new_day)}."
        return message

    def _delete(self, rest: str) -> str:
        day_text, index_text = split_args("delete", rest, 2)
        index = parse_index(index_text)
        day = self.resolve(day_text)
        if self.store.delete(day, index):
            return "Task deleted."
        return "The task you are trying to delete does not exist."

    def _clear(self, rest: str) -> str:
        (day_text,) = split_args("clear", rest, 1)
        day = self.resolve(day_text)
        removed = self.store.delete_all(day)
        if not removed:
            return f"There are no tasks on {format_date(day)}."
        return f"Deleted {removed} task{'s' if removed != 1 else ''} on {format_date(day)}."

    def _mark(self, rest: str) -> str:
        day_text, index_text = split_args("mark", rest, 2)
        index = parse_index(index_text)
        day = self.resolve(day_text)
        if self.store.mark(day, index):
            return "Task marked as done."
        return "Unmarked task."

    def _priority(self, rest: str) -> str:
        day_text, index_text, level_text = split_args("priority", rest, 3)
        index = parse_index(index_text)
        level = parse_priority(level_text)
        day = self.resolve(day_text)
        self.store.set_priority(day, index, level)
        return f"Priority set to {level.name}."

    def _list(self, rest: str) -> str:
        (day_text,) = split_args("list", rest, 1)
        day = self.resolve(day_text)
        return format_day_tasks(day, self.store.get(day))

    def _free(self, rest: str) -> str:
        (day_text,) = split_args("free", rest, 1)
        day = self.resolve(day_text)
        return format_free_slots(day, self.store.free_time_slots(day))

    # ---- follow-up questions ----

    def _confirm(self, question: str) -> bool:
        return self.prompt(question).strip().lower() in ("yes", "y")

    def _ask_date_time(self, question: str) -> tuple[date, time]:
        return parse_date_time(self.prompt(question))

    def _ask_event_window(self) -> tuple[tuple[date, time], tuple[date, time]]:
        start = self._ask_date_time(
            "Enter the start date of this task, along with the start time separated by a space:"
        )
        end = self._ask_date_time(
            "Enter the end date of this task, along with the end time separated by a space:"
        )
        _check_event_order(start, end)
        return start, end
