"""Plain-text task storage adapter."""

import logging
import re
from datetime import date
from pathlib import Path

from caltrack.core.store import TaskStore
from caltrack.core.tasks import (
    Priority,
    Task,
    TaskKind,
    format_date,
    format_time,
    parse_date_text,
    parse_time_text,
)

logger = logging.getLogger(__name__)

SEPARATOR = "|"
_LINE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}\|.+")


class TextFileStorage:
    """
    Pipe-delimited task file.

    Implements TaskStorage protocol. One line per task:
    ``<yyyy-mm-dd>|<kind>|<X or O>|<L/M/H>|<name>[|payload...]``
    where an event's payload is start date, end date, start time, end time
    and a deadline's payload is due date, due time.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path).expanduser()
        self.path.parent.mkdir(parents=True, exist_ok=True)
        if not self.path.exists():
            self.path.touch()
            logger.info("Created new task file %s", self.path)

    def load(self) -> list[tuple[date, Task]]:
        """Read saved tasks, skipping lines that cannot be parsed."""
        entries = []
        for lineno, raw in enumerate(self.path.read_bytes().splitlines(), start=1):
            if not raw.strip():
                continue
            try:
                entries.append(parse_line(raw.decode("utf-8")))
            except ValueError as e:
                # UnicodeDecodeError is a ValueError, so a bad byte costs one line
                logger.warning("Skipping %s line %d: %s", self.path.name, lineno, e)
        logger.info("Read %d tasks from %s", len(entries), self.path)
        return entries

    def save(self, store: TaskStore) -> None:
        """Rewrite the file from the whole store."""
        lines = [format_line(day, task) for day, tasks in store.items() for task in tasks]
        self.path.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
        logger.debug("Saved %d tasks to %s", len(lines), self.path)


def format_line(day: date, task: Task) -> str:
    """Serialize one task stored under ``day``."""
    fields = [
        day.isoformat(),
        task.type_icon,
        task.status_icon,
        task.priority_icon,
        task.name,
    ]
    if task.kind is TaskKind.DEADLINE:
        fields += [format_date(task.due_date), format_time(task.due_time)]
    elif task.kind is TaskKind.EVENT:
        fields += [
            format_date(task.start_date),
            format_date(task.end_date),
            format_time(task.start_time),
            format_time(task.end_time),
        ]
    return SEPARATOR.join(fields)


def parse_line(line: str) -> tuple[date, Task]:
    """Parse one saved line. Raises ValueError when malformed."""
    line = line.rstrip("\r\n")
    if not _LINE_PATTERN.match(line):
        raise ValueError("line does not start with a yyyy-mm-dd date")

    parts = line.split(SEPARATOR)
    if len(parts) < 5:
        raise ValueError(f"expected at least 5 fields, got {len(parts)}")

    day = date.fromisoformat(parts[0])
    kind = TaskKind.from_code(parts[1])
    completed = parts[2] == "X"
    priority = Priority.from_code(parts[3])
    name = parts[4]
    payload = parts[5:]

    match kind:
        case TaskKind.PLAIN:
            task = Task.plain(name)
        case TaskKind.DEADLINE:
            if len(payload) != 2:
                raise ValueError("deadline needs a due date and a due time")
            task = Task.deadline(name, parse_date_text(payload[0]), parse_time_text(payload[1]))
        case TaskKind.EVENT:
            if len(payload) != 4:
                raise ValueError("event needs start and end dates and times")
            task = Task.event(
                name,
                start_date=parse_date_text(payload[0]),
                end_date=parse_date_text(payload[1]),
                start_time=parse_time_text(payload[2]),
                end_time=parse_time_text(payload[3]),
            )

    task.completed = completed
    task.priority = priority
    return day, task
