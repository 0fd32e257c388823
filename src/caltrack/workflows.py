"""Shared wiring between the CLI commands and the interactive shell.

Builds the storage adapter, the task store and the view cursors from the
configuration, once per process.
"""

import logging
from datetime import date

from .adapters.text_file import TextFileStorage
from .commands import CommandHandler, Prompt
from .config import Config
from .core.store import TaskStore
from .core.views import MonthView, ViewMode, WeekView
from .ports.task_storage import TaskStorage

logger = logging.getLogger(__name__)


def get_storage(config: Config) -> TextFileStorage:
    """Resolve the task file from config."""
    return TextFileStorage(config.save_file)


def open_store(config: Config, storage: TaskStorage | None = None) -> TaskStore:
    """Load saved tasks into a store that saves itself after every change."""
    storage = storage or get_storage(config)
    store = TaskStore(persist=storage.save)
    store.load_all(storage.load())
    return store


def build_handler(config: Config, prompt: Prompt, today: date | None = None) -> CommandHandler:
    """Store plus week and month cursors opened on today."""
    today = today or date.today()
    mode = ViewMode.MONTH if config.start_view == "month" else ViewMode.WEEK
    logger.info("Starting in %s view on %s", mode.value, today)
    return CommandHandler(
        store=open_store(config),
        week_view=WeekView.for_today(today),
        month_view=MonthView.for_today(today),
        prompt=prompt,
        mode=mode,
    )
