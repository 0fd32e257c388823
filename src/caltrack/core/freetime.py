"""Pure free-time logic - no I/O dependencies."""

from dataclasses import dataclass
from datetime import date, datetime, time

from .tasks import Task

START_OF_DAY = time(0, 0)
# The day is closed at 23:59, so an event ending at midnight loses a minute.
END_OF_DAY = time(23, 59)


@dataclass
class TimeSlot:
    """A free time slot within one day."""

    start: time
    end: time

    def duration_minutes(self) -> int:
        anchor = date.min
        delta = datetime.combine(anchor, self.end) - datetime.combine(anchor, self.start)
        return int(delta.total_seconds() / 60)

    def format(self) -> str:
        return f"{self.start.strftime('%H:%M')} - {self.end.strftime('%H:%M')}"


def sort_events_by_start(events: list[Task]) -> list[Task]:
    """Sort events by start date, then start time."""
    return sorted(events, key=lambda e: (e.start_date, e.start_time))


def find_free_slots(events: list[Task], target_date: date) -> list[TimeSlot]:
    """
    Find free time slots between events on a date.

    Pure function - no I/O.

    Args:
        events: Event tasks (normally the events stored under target_date)
        target_date: Day to compute slots for; only events starting on it count

    Returns:
        Free TimeSlots in chronological order
    """
    free_slots = []
    current_time = START_OF_DAY

    for event in sort_events_by_start(events):
        if event.start_date != target_date:
            continue

        event_start = event.start_time
        # Runs past midnight: from this day's point of view it ends at 23:59
        event_end = event.end_time if event.end_date == target_date else END_OF_DAY

        # Gap before this event?
        if event_start > current_time:
            free_slots.append(TimeSlot(start=current_time, end=event_start))

        # Move current time past this event, never backwards
        current_time = max(current_time, event_end)

    # Gap after last event?
    if current_time < END_OF_DAY:
        free_slots.append(TimeSlot(start=current_time, end=END_OF_DAY))

    return free_slots
