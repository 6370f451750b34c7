"""Date utilities for daybook.

Pure functions for calendar window calculations. Every function takes the
reference time as an argument, so results never depend on the wall clock.
"""

from calendar import monthrange
from collections.abc import Callable, Iterable
from datetime import date, datetime, timedelta
from enum import Enum
from typing import TypeVar

T = TypeVar("T")


class Window(str, Enum):
    """Calendar window used to filter entities."""

    ALL = "semua"
    TODAY = "hari-ini"
    THIS_WEEK = "minggu-ini"
    THIS_MONTH = "bulan-ini"

    @classmethod
    def parse(cls, text: str) -> "Window":
        """Parse a window from its stored value or an English alias.

        Args:
            text: Value such as "bulan-ini", or alias such as "month".

        Returns:
            Matching Window.

        Raises:
            ValueError: If text names no window.
        """
        key = text.strip().lower()
        aliases = {
            "all": cls.ALL,
            "today": cls.TODAY,
            "week": cls.THIS_WEEK,
            "this-week": cls.THIS_WEEK,
            "month": cls.THIS_MONTH,
            "this-month": cls.THIS_MONTH,
        }
        if key in aliases:
            return aliases[key]
        return cls(key)


class WeekStart(str, Enum):
    """First day of the week. Pinned by configuration, never by locale."""

    SUNDAY = "sunday"
    MONDAY = "monday"


def normalize(value: date | datetime) -> date:
    """Strip the time of day, leaving the calendar day."""
    if isinstance(value, datetime):
        return value.date()
    return value


def days_into_week(day: date, week_start: WeekStart = WeekStart.SUNDAY) -> int:
    """Return the 0-based index of day within its week."""
    if week_start is WeekStart.MONDAY:
        return day.weekday()
    # date.weekday() is 0 for Monday; shift so Sunday is 0
    return (day.weekday() + 1) % 7


def week_range(today: date, week_start: WeekStart = WeekStart.SUNDAY) -> tuple[date, date]:
    """Calculate the closed 7-day interval containing today.

    Args:
        today: Reference day.
        week_start: Day the week begins on.

    Returns:
        Tuple of (first_day, last_day), both inclusive.
    """
    start = today - timedelta(days=days_into_week(today, week_start))
    return start, start + timedelta(days=6)


def month_range(today: date) -> tuple[date, date]:
    """Calculate first and last day of today's month.

    Args:
        today: Reference day.

    Returns:
        Tuple of (first_day, last_day), both inclusive.
    """
    last = monthrange(today.year, today.month)[1]
    return today.replace(day=1), today.replace(day=last)


def month_label(today: date) -> str:
    """Human-readable month, e.g. "January 2025"."""
    return today.strftime("%B %Y")


def window_range(
    window: Window,
    now: date | datetime,
    week_start: WeekStart = WeekStart.SUNDAY,
) -> tuple[date, date] | None:
    """Calculate the bounds of a window.

    Args:
        window: Window to compute.
        now: Reference time; only its calendar day is used.
        week_start: Day the week begins on.

    Returns:
        Tuple of (first_day, last_day), or None for the unbounded ALL window.
    """
    today = normalize(now)

    if window is Window.ALL:
        return None
    if window is Window.TODAY:
        return today, today
    if window is Window.THIS_WEEK:
        return week_range(today, week_start)
    return month_range(today)


def in_window(
    value: date | datetime,
    window: Window,
    now: date | datetime,
    week_start: WeekStart = WeekStart.SUNDAY,
) -> bool:
    """Check whether a date falls inside a window (bounds inclusive)."""
    bounds = window_range(window, now, week_start)
    if bounds is None:
        return True
    start, end = bounds
    return start <= normalize(value) <= end


def filter_by_window(
    entities: Iterable[T],
    date_of: Callable[[T], date | datetime],
    window: Window,
    now: date | datetime,
    week_start: WeekStart = WeekStart.SUNDAY,
) -> list[T]:
    """Select the entities whose reference date falls inside a window.

    The input is not modified and the relative order of entities is kept.

    Args:
        entities: Entities to filter.
        date_of: Extracts the reference date of an entity.
        window: Window to filter by.
        now: Reference time.
        week_start: Day the week begins on.

    Returns:
        New list with the matching entities.
    """
    bounds = window_range(window, now, week_start)
    if bounds is None:
        return list(entities)

    start, end = bounds
    return [entity for entity in entities if start <= normalize(date_of(entity)) <= end]
