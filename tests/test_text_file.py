"""Tests for the plain-text task storage adapter."""

from datetime import date, time

import pytest

from caltrack.adapters.text_file import TextFileStorage, format_line, parse_line
from caltrack.core.store import TaskStore
from caltrack.core.tasks import Priority, Task, TaskKind


@pytest.fixture
def today():
    return date(2024, 4, 7)


@pytest.fixture
def storage(tmp_path):
    return TextFileStorage(tmp_path / "save" / "tasks.txt")


class TestTextFileStorage:
    def test_creates_missing_file(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "tasks.txt"
        TextFileStorage(path)
        assert path.exists()
        assert path.read_text() == ""

    def test_empty_file_loads_nothing(self, storage):
        assert storage.load() == []

    def test_save_writes_one_line_per_task(self, storage, today):
        store = TaskStore()
        store.add(today, Task.plain("buy milk"))
        store.add(today, Task.deadline("report", date(2024, 4, 8), time(17, 0)))

        storage.save(store)

        assert storage.path.read_text() == (
            "2024-04-07|T|O|L|buy milk\n"
            "2024-04-07|D|O|L|report|08/04/2024|1700\n"
        )

    def test_save_then_load_restores_store(self, storage, today):
        store = TaskStore(persist=storage.save)
        event = Task.event("standup", today, today, time(9, 0), time(9, 15))
        store.add(today, event)
        store.add(date(2024, 4, 1), Task.plain("earlier"))
        store.mark(today, 1)
        store.set_priority(today, 1, Priority.MEDIUM)

        restored = TaskStore()
        restored.load_all(storage.load())

        assert restored.dates() == [date(2024, 4, 1), today]
        task = restored.get(today)[0]
        assert task == event
        assert task.completed is True
        assert task.priority is Priority.MEDIUM

    def test_malformed_lines_are_skipped(self, storage, caplog):
        storage.path.write_text(
            "2024-04-07|T|O|L|good\n"
            "garbage line\n"
            "2024-04-07|Z|O|L|unknown kind\n"
            "2024-04-07|D|O|L|missing payload\n"
            "\n"
            "2024-04-08|E|X|H|party|08/04/2024|09/04/2024|2000|0100\n"
        )

        entries = storage.load()

        assert [task.name for _, task in entries] == ["good", "party"]
        assert "Skipping" in caplog.text

    def test_undecodable_line_is_skipped(self, storage, caplog):
        storage.path.write_bytes(b"2024-04-07|T|O|L|caf\xe9\n2024-04-07|T|O|L|ok\n")

        entries = storage.load()

        assert [task.name for _, task in entries] == ["ok"]
        assert "line 1" in caplog.text

    def test_non_ascii_names_survive_save(self, storage, today):
        store = TaskStore()
        store.add(today, Task.plain("café"))
        storage.save(store)

        assert storage.path.read_bytes() == "2024-04-07|T|O|L|café\n".encode("utf-8")
        assert storage.load()[0][1].name == "café"


class TestLineFormat:
    def test_event_line(self, today):
        task = Task.event("standup", today, today, time(9, 0), time(9, 15))
        task.priority = Priority.HIGH

        assert format_line(today, task) == "2024-04-07|E|O|H|standup|07/04/2024|07/04/2024|0900|0915"

    def test_parse_event_line(self):
        day, task = parse_line("2024-04-08|E|X|H|party|08/04/2024|09/04/2024|2000|0100")

        assert day == date(2024, 4, 8)
        assert task.kind is TaskKind.EVENT
        assert task.completed is True
        assert task.priority is Priority.HIGH
        assert task.end_date == date(2024, 4, 9)
        assert task.end_time == time(1, 0)

    @pytest.mark.parametrize(
        "line",
        [
            "07/04/2024|T|O|L|wrong key format",
            "2024-04-07|T|O|L",
            "2024-04-07|T|O|Q|bad priority",
            "2024-04-07|E|O|L|bad time|07/04/2024|07/04/2024|9am|1000",
            "2024-13-07|T|O|L|bad month",
        ],
    )
    def test_parse_rejects(self, line):
        with pytest.raises(ValueError):
            parse_line(line)
