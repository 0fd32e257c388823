"""Turn a user-typed day number into an absolute date for the active view."""

from datetime import date, timedelta

from .errors import DayOutOfRangeForMonth, InvalidDayNumber, NotInCurrentWeek
from .views import MonthView, ViewMode, WeekView, add_months

MAX_DAY_NUMBER = 31

NOT_IN_WEEK_MESSAGE = "Invalid day for week view. Please enter a day that falls within the current week."


def resolve_day(
    day_number: int,
    mode: ViewMode,
    week_view: WeekView,
    month_view: MonthView,
) -> date:
    """
    Resolve ``day_number`` against the window of the active view.

    Day numbers are days of the month in both modes. In week mode the
    displayed week may straddle two months, so a number can belong to the
    tail of the week-start's month or to the head of the following one.

    Raises:
        InvalidDayNumber: day_number outside 1..31
        DayOutOfRangeForMonth: month mode, day past the end of the month
        NotInCurrentWeek: week mode, day not displayed in the week
    """
    if day_number < 1 or day_number > MAX_DAY_NUMBER:
        raise InvalidDayNumber("Invalid day number. Day must be between 1 and 31.")

    if mode is ViewMode.MONTH:
        return _resolve_in_month(day_number, month_view)
    return _resolve_in_week(day_number, week_view)


def _resolve_in_month(day_number: int, month_view: MonthView) -> date:
    days_in_month = month_view.days_in_month
    if day_number > days_in_month:
        raise DayOutOfRangeForMonth(
            f"Invalid day for month view. Please enter a day between 1 and {days_in_month}."
        )
    return month_view.window_start.replace(day=day_number)


def _resolve_in_week(day_number: int, week_view: WeekView) -> date:
    week_start = week_view.window_start

    candidate = week_start.replace(day=1) + timedelta(days=day_number - 1)
    if candidate < week_start or candidate.month != week_start.month:
        try:
            candidate = add_months(week_start, 1).replace(day=day_number)
        except ValueError:
            # next month has no such day, so it cannot be on screen either
            raise NotInCurrentWeek(NOT_IN_WEEK_MESSAGE) from None

    # the week shows exactly one date per weekday
    if week_view.date_for_weekday(candidate.isoweekday()) != candidate:
        raise NotInCurrentWeek(NOT_IN_WEEK_MESSAGE)
    return candidate
