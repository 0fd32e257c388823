"""Text rendering of calendar views - read-only over the store."""

import textwrap
from datetime import date, timedelta

from .core.freetime import TimeSlot
from .core.store import TaskStore
from .core.tasks import Task, format_date
from .core.views import DAYS_IN_WEEK, MonthView, WeekView, start_of_week

WEEK_DAYS = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]
DEFAULT_CELL_WIDTH = 15
VERTICAL_DIVIDER = "|"

HELP_TEXT = """\
Commands (fields separated by commas):
  next                                    Show the next week or month
  prev                                    Show the previous week or month
  week                                    Switch to week view
  month                                   Switch to month view
  add, <day>, <T|D|E>, <description>      Add a todo, deadline or event
  update, <day>, <index>, <description>   Rename a task (and optionally its dates)
  delete, <day>, <index>                  Delete a task
  clear, <day>                            Delete every task on a day
  mark, <day>, <index>                    Mark or unmark a task as done
  priority, <day>, <index>, <level>       Set priority: high, medium or low
  list, <day>                             List the tasks on a day
  free, <day>                             Show free time on a day
  help                                    Show this help
  quit                                    Exit

<day> is the day of the month as shown in the current view.
Dates are dd/mm/yyyy and times are 24-hour HHMM."""


def _divider(width: int) -> str:
    return ("+" + "-" * width) * DAYS_IN_WEEK + "+"


def _row(cells: list[str], width: int) -> str:
    return "".join(f"{VERTICAL_DIVIDER}{cell[:width]:<{width}}" for cell in cells) + VERTICAL_DIVIDER


def format_task_line(task: Task, number: int) -> str:
    """Format a single task as shown in a week column, e.g. ``1.[T][O][L] name``."""
    return f"{number}.{task.display_prefix()}{task.name}"


def _wrap(text: str, width: int) -> list[str]:
    return textwrap.wrap(text, width=width, break_long_words=True) or [""]


def render_week(store: TaskStore, week_view: WeekView, cell_width: int = DEFAULT_CELL_WIDTH) -> str:
    """Week grid: one column per day, tasks wrapped inside their column."""
    days = week_view.days()
    lines = [
        f"Week View: {format_date(week_view.window_start)} - {format_date(week_view.window_end)}",
        _divider(cell_width),
        _row(WEEK_DAYS, cell_width),
        _row([format_date(d) for d in days], cell_width),
        _divider(cell_width),
    ]

    # wrapped[day][task] -> lines of that task
    wrapped = [
        [_wrap(format_task_line(task, n), cell_width) for n, task in enumerate(store.get(d), start=1)]
        for d in days
    ]
    max_tasks = max(len(day_tasks) for day_tasks in wrapped)
    for task_index in range(max_tasks):
        height = max(
            (len(day_tasks[task_index]) for day_tasks in wrapped if task_index < len(day_tasks)),
            default=0,
        )
        for line_index in range(height):
            cells = []
            for day_tasks in wrapped:
                if task_index < len(day_tasks) and line_index < len(day_tasks[task_index]):
                    cells.append(day_tasks[task_index][line_index])
                else:
                    cells.append("")
            lines.append(_row(cells, cell_width))
    if max_tasks:
        lines.append(_divider(cell_width))
    return "\n".join(lines)


def _task_icon(task: Task) -> str:
    return "{" + task.type_icon + ("*" if task.completed else " ") + "}"


def render_month(store: TaskStore, month_view: MonthView, cell_width: int = DEFAULT_CELL_WIDTH) -> str:
    """Month grid: a row of day numbers per week, then a row of icons per task slot."""
    first = month_view.window_start
    lines = [
        f"Month View: {first.strftime('%B').upper()} {first.year}",
        _divider(cell_width),
        _row(WEEK_DAYS, cell_width),
        _divider(cell_width),
    ]

    week_start = start_of_week(first)
    while week_start <= month_view.window_end:
        days = [week_start + timedelta(days=i) for i in range(DAYS_IN_WEEK)]
        in_month = [d if month_view.contains(d) else None for d in days]
        lines.append(_row([str(d.day) if d else "" for d in in_month], cell_width))
        lines.append(_divider(cell_width))

        day_tasks = [store.get(d) if d else [] for d in in_month]
        max_tasks = max(len(tasks) for tasks in day_tasks)
        for task_index in range(max_tasks):
            lines.append(
                _row(
                    [_task_icon(tasks[task_index]) if task_index < len(tasks) else "" for tasks in day_tasks],
                    cell_width,
                )
            )
        if max_tasks:
            lines.append(_divider(cell_width))
        week_start += timedelta(weeks=1)
    return "\n".join(lines)


def format_day_tasks(day: date, tasks: list[Task]) -> str:
    """Numbered task list for one date."""
    if not tasks:
        return f"No tasks on {format_date(day)}."
    lines = [f"Tasks on {format_date(day)}:"]
    for n, task in enumerate(tasks, start=1):
        lines.append(f"{n}. {task.display_prefix()}{task.name}{_task_details(task)}")
    return "\n".join(lines)


def _task_details(task: Task) -> str:
    if task.due_date is not None:
        return f" (by {format_date(task.due_date)} {task.due_time.strftime('%H:%M')})"
    if task.start_date is not None:
        return (
            f" ({format_date(task.start_date)} {task.start_time.strftime('%H:%M')}"
            f" to {format_date(task.end_date)} {task.end_time.strftime('%H:%M')})"
        )
    return ""


def format_free_slots(day: date, slots: list[TimeSlot]) -> str:
    lines = [f"Free time slots for {format_date(day)}:"]
    if not slots:
        lines.append("  (none)")
    lines.extend(f"  {slot.format()}" for slot in slots)
    return "\n".join(lines)
