"""Task storage interface."""

from datetime import date
from typing import Protocol

from caltrack.core.store import TaskStore
from caltrack.core.tasks import Task


class TaskStorage(Protocol):
    """Interface for saving and restoring the task store."""

    def load(self) -> list[tuple[date, Task]]:
        """Read every saved task with the date it is stored under."""
        ...

    def save(self, store: TaskStore) -> None:
        """Write the whole store, replacing what was saved before."""
        ...
