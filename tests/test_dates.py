"""Tests for daybook.dates pure functions."""

from datetime import date, datetime

import pytest

from daybook.dates import (
    Window,
    WeekStart,
    filter_by_window,
    in_window,
    month_label,
    month_range,
    normalize,
    week_range,
    window_range,
)


class TestMonthRange:
    """Tests for month_range."""

    def test_january_range(self) -> None:
        """Should span the whole of January."""
        assert month_range(date(2025, 1, 15)) == (date(2025, 1, 1), date(2025, 1, 31))

    def test_december_range(self) -> None:
        """Should end on December 31st without crossing the year."""
        assert month_range(date(2025, 12, 1)) == (date(2025, 12, 1), date(2025, 12, 31))

    def test_february_non_leap_year(self) -> None:
        """Should handle February in non-leap year."""
        assert month_range(date(2025, 2, 10)) == (date(2025, 2, 1), date(2025, 2, 28))

    def test_february_leap_year(self) -> None:
        """Should handle February in leap year."""
        assert month_range(date(2024, 2, 29)) == (date(2024, 2, 1), date(2024, 2, 29))

    def test_thirty_day_month(self) -> None:
        """Should handle 30-day months."""
        assert month_range(date(2025, 4, 30)) == (date(2025, 4, 1), date(2025, 4, 30))

    def test_month_label(self) -> None:
        """Should produce a readable month name."""
        assert month_label(date(2025, 1, 15)) == "January 2025"


class TestWeekRange:
    """Tests for week_range."""

    def test_sunday_start_midweek(self) -> None:
        """Should start on the previous Sunday."""
        assert week_range(date(2024, 1, 10)) == (date(2024, 1, 7), date(2024, 1, 13))

    def test_sunday_start_on_sunday(self) -> None:
        """A Sunday is the first day of its own week."""
        assert week_range(date(2024, 1, 7)) == (date(2024, 1, 7), date(2024, 1, 13))

    def test_sunday_start_on_saturday(self) -> None:
        """A Saturday is the last day of its week."""
        assert week_range(date(2024, 1, 13)) == (date(2024, 1, 7), date(2024, 1, 13))

    def test_monday_start(self) -> None:
        """Should start on Monday when configured."""
        assert week_range(date(2024, 1, 10), WeekStart.MONDAY) == (date(2024, 1, 8), date(2024, 1, 14))

    def test_monday_start_on_sunday(self) -> None:
        """A Sunday is the last day of a Monday week."""
        assert week_range(date(2024, 1, 14), WeekStart.MONDAY) == (date(2024, 1, 8), date(2024, 1, 14))

    def test_week_crossing_month(self) -> None:
        """Should span two months when needed."""
        assert week_range(date(2024, 2, 1)) == (date(2024, 1, 28), date(2024, 2, 3))


class TestWindowParse:
    """Tests for Window.parse."""

    def test_parses_stored_values(self) -> None:
        """Should accept the stored filter values."""
        assert Window.parse("bulan-ini") is Window.THIS_MONTH
        assert Window.parse("semua") is Window.ALL

    def test_parses_english_aliases(self) -> None:
        """Should accept English names regardless of case."""
        assert Window.parse("Today") is Window.TODAY
        assert Window.parse("week") is Window.THIS_WEEK
        assert Window.parse(" month ") is Window.THIS_MONTH
        assert Window.parse("all") is Window.ALL

    def test_unknown_raises_valueerror(self) -> None:
        """Should raise ValueError for unknown windows."""
        with pytest.raises(ValueError):
            Window.parse("fortnight")


class TestWindowRange:
    """Tests for window_range and in_window."""

    def test_all_is_unbounded(self) -> None:
        """ALL has no bounds."""
        assert window_range(Window.ALL, date(2024, 1, 10)) is None

    def test_today_ignores_time_of_day(self) -> None:
        """TODAY is the calendar day of now."""
        assert window_range(Window.TODAY, datetime(2024, 1, 10, 23, 59)) == (date(2024, 1, 10), date(2024, 1, 10))

    def test_boundaries_are_inclusive(self) -> None:
        """Dates on the first and last day are inside the window."""
        now = date(2024, 1, 10)
        assert in_window(date(2024, 1, 1), Window.THIS_MONTH, now)
        assert in_window(date(2024, 1, 31), Window.THIS_MONTH, now)
        assert in_window(date(2024, 1, 7), Window.THIS_WEEK, now)
        assert in_window(date(2024, 1, 13), Window.THIS_WEEK, now)

    def test_outside_boundaries(self) -> None:
        """Dates one day past the bounds are outside."""
        now = date(2024, 1, 10)
        assert not in_window(date(2023, 12, 31), Window.THIS_MONTH, now)
        assert not in_window(date(2024, 2, 1), Window.THIS_MONTH, now)
        assert not in_window(date(2024, 1, 6), Window.THIS_WEEK, now)
        assert not in_window(date(2024, 1, 14), Window.THIS_WEEK, now)

    def test_datetime_values_are_normalized(self) -> None:
        """A late-evening timestamp still counts as its calendar day."""
        assert in_window(datetime(2024, 1, 10, 23, 59, 59), Window.TODAY, datetime(2024, 1, 10, 0, 0))

    def test_future_dates_pass_all(self) -> None:
        """There is no future bucket; ALL always passes."""
        assert in_window(date(2099, 1, 1), Window.ALL, date(2024, 1, 10))

    def test_today_subset_of_week_and_month(self) -> None:
        """Anything in TODAY is also in THIS_WEEK, THIS_MONTH and ALL."""
        now = date(2024, 2, 1)
        for window in (Window.THIS_WEEK, Window.THIS_MONTH, Window.ALL):
            assert in_window(now, window, now)

    def test_normalize(self) -> None:
        """Should drop the time and pass dates through."""
        assert normalize(datetime(2024, 1, 10, 8, 0)) == date(2024, 1, 10)
        assert normalize(date(2024, 1, 10)) == date(2024, 1, 10)


class TestFilterByWindow:
    """Tests for filter_by_window."""

    def test_preserves_order_and_input(self) -> None:
        """Should keep relative order and leave the input untouched."""
        days = [date(2024, 1, 31), date(2023, 12, 31), date(2024, 1, 1), date(2024, 1, 10)]
        original = list(days)

        result = filter_by_window(days, lambda d: d, Window.THIS_MONTH, date(2024, 1, 10))

        assert result == [date(2024, 1, 31), date(2024, 1, 1), date(2024, 1, 10)]
        assert days == original

    def test_all_returns_copy(self) -> None:
        """ALL returns every entity in a new list."""
        days = [date(2024, 1, 1), date(2030, 1, 1)]
        result = filter_by_window(days, lambda d: d, Window.ALL, date(2024, 1, 10))

        assert result == days
        assert result is not days

    def test_uses_extractor(self) -> None:
        """Should compare the date returned by the extractor."""
        rows = [("a", date(2024, 1, 10)), ("b", date(2024, 1, 9))]
        result = filter_by_window(rows, lambda row: row[1], Window.TODAY, datetime(2024, 1, 10, 9))

        assert result == [("a", date(2024, 1, 10))]

    def test_empty_input(self) -> None:
        """Should return an empty list for any window."""
        for window in Window:
            assert filter_by_window([], lambda d: d, window, date(2024, 1, 10)) == []
