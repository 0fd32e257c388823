"""Date-indexed task store."""

import dataclasses
import logging
from collections.abc import Callable, Iterable
from datetime import date

from .errors import NoTasksOnDate, TaskIndexOutOfRange, TaskKindMismatch
from .freetime import TimeSlot, find_free_slots
from .tasks import PAYLOAD_FIELDS, Priority, Task, TaskKind

logger = logging.getLogger(__name__)

NO_TASKS_MESSAGE = "There are no tasks on this date. Please try again."


class TaskStore:
    """
    Tasks grouped by calendar date.

    Each date maps to the tasks added for it, in insertion order; the
    1-based position in that list is the task number users type. A date
    with no tasks is never kept as a key.

    ``persist`` is called with the store after every successful mutation.
    """

    def __init__(self, persist: Callable[["TaskStore"], None] | None = None):
        self._tasks: dict[date, list[Task]] = {}
        self._persist = persist

    # ---- queries ----

    def get(self, day: date) -> list[Task]:
        """Tasks for a date, or an empty list."""
        return list(self._tasks.get(day, []))

    def tasks_for_date(self, day: date) -> list[Task]:
        return self.get(day)

    def task_at(self, day: date, index: int) -> Task:
        """Task at a 1-based position on a date."""
        bucket = self._bucket(day)
        return bucket[self._position(bucket, index)]

    def events_for_date(self, day: date) -> list[Task]:
        return [t for t in self._tasks.get(day, []) if t.kind is TaskKind.EVENT]

    def free_time_slots(self, day: date) -> list[TimeSlot]:
        return find_free_slots(self.events_for_date(day), day)

    def dates(self) -> list[date]:
        return sorted(self._tasks)

    def items(self) -> list[tuple[date, list[Task]]]:
        return [(d, list(self._tasks[d])) for d in self.dates()]

    def __contains__(self, day: date) -> bool:
        return day in self._tasks

    def __len__(self) -> int:
        return sum(len(bucket) for bucket in self._tasks.values())

    # ---- mutations ----

    def load_all(self, entries: Iterable[tuple[date, Task]]) -> int:
        """Bulk-insert saved tasks at startup. Does not persist."""
        count = 0
        for day, task in entries:
            self._tasks.setdefault(day, []).append(task)
            count += 1
        logger.info("Loaded %d tasks over %d dates", count, len(self._tasks))
        return count

    def add(self, day: date, task: Task) -> Task:
        self._tasks.setdefault(day, []).append(task)
        logger.info("Added %s task %r on %s", task.kind.name, task.name, day)
        self._changed()
        return task

    def update(
        self,
        day: date,
        index: int,
        name: str,
        *,
        due_date=None,
        due_time=None,
        start_date=None,
        end_date=None,
        start_time=None,
        end_time=None,
    ) -> date:
        """
        Replace a task with a same-kind task carrying new fields.

        Only the payload fields of the task's own kind may be given; None
        keeps the current value. Completion and priority carry over.

        An event whose start date changes moves to the end of the new start
        date's list. Returns the date the task is stored under afterwards.
        """
        bucket = self._bucket(day)
        position = self._position(bucket, index)
        old = bucket[position]

        changes = {
            "due_date": due_date,
            "due_time": due_time,
            "start_date": start_date,
            "end_date": end_date,
            "start_time": start_time,
            "end_time": end_time,
        }
        changes = {k: v for k, v in changes.items() if v is not None}
        foreign = sorted(set(changes) - set(PAYLOAD_FIELDS[old.kind]))
        if foreign:
            raise TaskKindMismatch(
                f"A {old.kind.name.lower()} task has no {', '.join(foreign)} to update."
            )

        new = dataclasses.replace(old, name=name, **changes)
        logger.info("Updating task on %s from %r to %r", day, old.name, new.name)

        target = day
        if new.kind is TaskKind.EVENT and new.start_date != old.start_date:
            target = new.start_date
        if target == day:
            bucket[position] = new
        else:
            del bucket[position]
            if not bucket:
                del self._tasks[day]
            self._tasks.setdefault(target, []).append(new)
            logger.info("Moved event %r from %s to %s", new.name, day, target)

        self._changed()
        return target

    def delete(self, day: date, index: int) -> bool:
        """
        Delete the task at a 1-based position.

        Returns False when there is no such task; that is a normal outcome,
        not an error.
        """
        bucket = self._tasks.get(day)
        if not bucket or not 1 <= index <= len(bucket):
            logger.info("Nothing to delete on %s at index %s", day, index)
            return False

        removed = bucket.pop(index - 1)
        if not bucket:
            del self._tasks[day]
        logger.info("Deleted task %r on %s", removed.name, day)
        self._changed()
        return True

    def delete_all(self, day: date) -> int:
        """Delete every task on a date. Returns how many were removed."""
        removed = self._tasks.pop(day, [])
        if removed:
            logger.info("Deleted all %d tasks on %s", len(removed), day)
            self._changed()
        return len(removed)

    def mark(self, day: date, index: int) -> bool:
        """Toggle completion. Returns the new state."""
        task = self.task_at(day, index)
        task.completed = not task.completed
        logger.info("Marking task %s on %s as %s", index, day, "done" if task.completed else "not done")
        self._changed()
        return task.completed

    def set_priority(self, day: date, index: int, level: Priority) -> Task:
        task = self.task_at(day, index)
        task.priority = level
        logger.info("Setting priority of task %s on %s to %s", index, day, level.name)
        self._changed()
        return task

    # ---- helpers ----

    def _bucket(self, day: date) -> list[Task]:
        bucket = self._tasks.get(day)
        if not bucket:
            raise NoTasksOnDate(NO_TASKS_MESSAGE)
        return bucket

    @staticmethod
    def _position(bucket: list[Task], index: int) -> int:
        if not 1 <= index <= len(bucket):
            raise TaskIndexOutOfRange(
                f"Task number {index} does not exist. Please enter a number between 1 and {len(bucket)}."
            )
        return index - 1

    def _changed(self) -> None:
        if self._persist is not None:
            self._persist(self)
