"""Navigation state for the week and month views."""

import calendar
from datetime import date, timedelta
from enum import Enum

DAYS_IN_WEEK = 7


class ViewMode(Enum):
    WEEK = "week"
    MONTH = "month"


def start_of_week(d: date) -> date:
    """The Sunday on or before ``d``."""
    # isoweekday: Monday=1 .. Sunday=7, so Sunday maps to 0
    return d - timedelta(days=d.isoweekday() % DAYS_IN_WEEK)


def add_months(d: date, months: int) -> date:
    """First day of the month ``months`` away from ``d``'s month."""
    index = d.year * 12 + (d.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


class WeekView:
    """Cursor over a Sunday-to-Saturday window."""

    def __init__(self, window_start: date):
        self.window_start = start_of_week(window_start)

    @classmethod
    def for_today(cls, today: date | None = None) -> "WeekView":
        return cls(today or date.today())

    @property
    def window_end(self) -> date:
        return self.window_start + timedelta(days=DAYS_IN_WEEK - 1)

    def days(self) -> list[date]:
        return [self.window_start + timedelta(days=i) for i in range(DAYS_IN_WEEK)]

    def next(self) -> date:
        self.window_start += timedelta(weeks=1)
        return self.window_start

    def previous(self) -> date:
        self.window_start -= timedelta(weeks=1)
        return self.window_start

    def date_for_weekday(self, weekday: int) -> date:
        """Date in the current window for an ISO weekday (1=Monday .. 7=Sunday)."""
        if not 1 <= weekday <= DAYS_IN_WEEK:
            raise ValueError(f"weekday must be between 1 and 7, got {weekday}")
        offset = (weekday - self.window_start.isoweekday()) % DAYS_IN_WEEK
        return self.window_start + timedelta(days=offset)

    def __repr__(self) -> str:
        return f"WeekView({self.window_start.isoformat()})"


class MonthView:
    """Cursor over a whole calendar month."""

    def __init__(self, window_start: date):
        self.window_start = window_start.replace(day=1)

    @classmethod
    def for_today(cls, today: date | None = None) -> "MonthView":
        return cls(today or date.today())

    @property
    def days_in_month(self) -> int:
        return calendar.monthrange(self.window_start.year, self.window_start.month)[1]

    @property
    def window_end(self) -> date:
        return self.window_start.replace(day=self.days_in_month)

    def contains(self, d: date) -> bool:
        return self.window_start <= d <= self.window_end

    def next(self) -> date:
        self.window_start = add_months(self.window_start, 1)
        return self.window_start

    def previous(self) -> date:
        self.window_start = add_months(self.window_start, -1)
        return self.window_start

    def __repr__(self) -> str:
        return f"MonthView({self.window_start.isoformat()})"
