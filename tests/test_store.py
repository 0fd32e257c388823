"""Tests for the date-indexed task store."""

from datetime import date, time
from unittest.mock import MagicMock

import pytest

from caltrack.core.errors import NoTasksOnDate, TaskIndexOutOfRange, TaskKindMismatch
from caltrack.core.freetime import TimeSlot
from caltrack.core.store import TaskStore
from caltrack.core.tasks import Priority, Task, TaskKind


@pytest.fixture
def today():
    return date(2024, 4, 7)


@pytest.fixture
def persist():
    return MagicMock()


@pytest.fixture
def store(persist):
    return TaskStore(persist=persist)


@pytest.fixture
def make_event(today):
    def _make(name: str, start_hour: int, end_hour: int, day: date | None = None) -> Task:
        day = day or today
        return Task.event(name, day, day, time(start_hour, 0), time(end_hour, 0))
    return _make


class TestQueries:
    def test_get_unknown_date_is_empty(self, store, today):
        assert store.get(today) == []
        assert store.tasks_for_date(today) == []
        assert today not in store

    def test_get_returns_copy(self, store, today):
        store.add(today, Task.plain("a"))
        store.get(today).clear()
        assert len(store.get(today)) == 1

    def test_dates_and_len(self, store, today):
        later = date(2024, 4, 9)
        store.add(later, Task.plain("b"))
        store.add(today, Task.plain("a"))
        store.add(today, Task.plain("c"))

        assert store.dates() == [today, later]
        assert len(store) == 3
        assert [d for d, _ in store.items()] == [today, later]

    def test_task_at_is_one_based(self, store, today):
        store.add(today, Task.plain("first"))
        store.add(today, Task.plain("second"))

        assert store.task_at(today, 1).name == "first"
        assert store.task_at(today, 2).name == "second"

    def test_events_for_date_keeps_order(self, store, today, make_event):
        store.add(today, make_event("late", 15, 16))
        store.add(today, Task.plain("todo"))
        store.add(today, make_event("early", 9, 10))

        assert [e.name for e in store.events_for_date(today)] == ["late", "early"]

    def test_free_time_slots(self, store, today, make_event):
        store.add(today, make_event("Lunch", 12, 13))
        store.add(today, Task.deadline("Report", today, time(11, 0)))

        assert store.free_time_slots(today) == [
            TimeSlot(time(0, 0), time(12, 0)),
            TimeSlot(time(13, 0), time(23, 59)),
        ]

    def test_free_time_slots_empty_day(self, store, today):
        assert [s.format() for s in store.free_time_slots(today)] == ["00:00 - 23:59"]


class TestAddAndDelete:
    def test_add_appends_and_allows_duplicates(self, store, today):
        store.add(today, Task.plain("same"))
        store.add(today, Task.plain("same"))
        assert [t.name for t in store.get(today)] == ["same", "same"]

    def test_delete_sole_task_drops_date(self, store, today):
        store.add(today, Task.plain("only"))

        assert store.delete(today, 1) is True
        assert store.get(today) == []
        assert today not in store
        assert store.dates() == []

    def test_delete_keeps_order_of_rest(self, store, today):
        for name in ("a", "b", "c"):
            store.add(today, Task.plain(name))

        store.delete(today, 2)
        assert [t.name for t in store.get(today)] == ["a", "c"]

    @pytest.mark.parametrize("index", [0, 2, -1])
    def test_delete_missing_index_is_not_an_error(self, store, persist, today, index):
        store.add(today, Task.plain("only"))
        persist.reset_mock()

        assert store.delete(today, index) is False
        assert len(store.get(today)) == 1
        persist.assert_not_called()

    def test_delete_on_empty_date(self, store, today):
        assert store.delete(today, 1) is False

    def test_delete_all(self, store, persist, today):
        store.add(today, Task.plain("a"))
        store.add(today, Task.plain("b"))
        persist.reset_mock()

        assert store.delete_all(today) == 2
        assert today not in store
        persist.assert_called_once_with(store)

    def test_delete_all_empty_date(self, store, persist, today):
        assert store.delete_all(today) == 0
        persist.assert_not_called()


class TestMarkAndPriority:
    def test_mark_toggles(self, store, today):
        store.add(today, Task.plain("a"))

        assert store.mark(today, 1) is True
        assert store.get(today)[0].completed is True
        assert store.mark(today, 1) is False
        assert store.get(today)[0].completed is False

    def test_set_priority_sets_not_toggles(self, store, today):
        store.add(today, Task.plain("a"))

        store.set_priority(today, 1, Priority.HIGH)
        store.set_priority(today, 1, Priority.HIGH)
        assert store.get(today)[0].priority is Priority.HIGH

    @pytest.mark.parametrize("index", [0, 2, 5])
    def test_bad_index_leaves_store_unchanged(self, store, persist, today, index):
        store.add(today, Task.plain("a"))
        persist.reset_mock()

        with pytest.raises(TaskIndexOutOfRange):
            store.mark(today, index)
        with pytest.raises(TaskIndexOutOfRange):
            store.set_priority(today, index, Priority.HIGH)
        with pytest.raises(TaskIndexOutOfRange):
            store.update(today, index, "renamed")

        task = store.get(today)[0]
        assert (task.name, task.completed, task.priority) == ("a", False, Priority.LOW)
        persist.assert_not_called()

    def test_empty_date_raises(self, store, today):
        with pytest.raises(NoTasksOnDate):
            store.mark(today, 1)
        with pytest.raises(NoTasksOnDate):
            store.set_priority(today, 1, Priority.LOW)


class TestUpdate:
    def test_rename_plain_keeps_state(self, store, today):
        store.add(today, Task.plain("old"))
        store.mark(today, 1)
        store.set_priority(today, 1, Priority.MEDIUM)

        assert store.update(today, 1, "new") == today
        task = store.get(today)[0]
        assert task.name == "new"
        assert task.kind is TaskKind.PLAIN
        assert task.completed is True
        assert task.priority is Priority.MEDIUM

    def test_update_deadline_fields(self, store, today):
        store.add(today, Task.deadline("Report", today, time(17, 0)))

        store.update(today, 1, "Final report", due_date=date(2024, 4, 9), due_time=time(9, 0))
        task = store.get(today)[0]
        assert task.due_date == date(2024, 4, 9)
        assert task.due_time == time(9, 0)
        # deadlines stay under the date they were added on
        assert store.dates() == [today]

    def test_event_same_start_date_stays_in_place(self, store, today, make_event):
        store.add(today, make_event("a", 9, 10))
        store.add(today, make_event("b", 11, 12))

        store.update(today, 1, "a2", start_time=time(8, 0))
        assert [t.name for t in store.get(today)] == ["a2", "b"]
        assert store.get(today)[0].start_time == time(8, 0)

    def test_event_new_start_date_relocates(self, store, today, make_event):
        new_day = date(2024, 4, 10)
        store.add(today, make_event("move me", 9, 10))
        store.add(today, make_event("stay", 11, 12))
        store.add(new_day, Task.plain("already there"))

        result = store.update(today, 1, "moved", start_date=new_day, end_date=new_day)

        assert result == new_day
        assert [t.name for t in store.get(today)] == ["stay"]
        assert [t.name for t in store.get(new_day)] == ["already there", "moved"]

    def test_relocating_last_event_drops_old_date(self, store, today, make_event):
        new_day = date(2024, 4, 12)
        store.add(today, make_event("only", 9, 10))

        store.update(today, 1, "only", start_date=new_day, end_date=new_day)

        assert today not in store
        assert store.get(new_day)[0].start_date == new_day

    def test_fields_of_other_kind_rejected(self, store, persist, today):
        store.add(today, Task.plain("todo"))
        persist.reset_mock()

        with pytest.raises(TaskKindMismatch):
            store.update(today, 1, "todo", due_date=today)
        assert store.get(today)[0].due_date is None
        persist.assert_not_called()


class TestPersistHook:
    def test_called_after_each_mutation(self, store, persist, today):
        store.add(today, Task.plain("a"))
        store.mark(today, 1)
        store.set_priority(today, 1, Priority.HIGH)
        store.update(today, 1, "b")
        store.delete(today, 1)

        assert persist.call_count == 5
        persist.assert_called_with(store)

    def test_load_all_does_not_persist(self, store, persist, today):
        count = store.load_all([(today, Task.plain("a")), (today, Task.plain("b"))])

        assert count == 2
        assert len(store.get(today)) == 2
        persist.assert_not_called()

    def test_store_without_hook(self, today):
        store = TaskStore()
        store.add(today, Task.plain("a"))
        assert store.delete(today, 1) is True
