"""
Unit tests for calendar helpers and reporting periods.
"""

from datetime import UTC, date, datetime, timedelta, timezone

import pytest

from portfolio_tracker.core.enums import AggregateBy
from portfolio_tracker.core.utils.dates import (
    calendar_date,
    days_between,
    format_iso_millis,
    parse_iso_millis,
    quarter_of,
    to_utc_datetime,
)
from portfolio_tracker.core.utils.periods import ReportPeriod, iterate_periods


class TestDateHelpers:
    """Tests for UTC normalisation and the document date format."""

    def test_should_treat_plain_dates_as_utc_midnight(self) -> None:
        assert to_utc_datetime(date(2024, 2, 29)) == datetime(2024, 2, 29, tzinfo=UTC)

    def test_should_treat_naive_datetimes_as_utc(self) -> None:
        """Test that naive values are not shifted by the local timezone."""
        result = to_utc_datetime(datetime(2024, 1, 1, 12, 30))

        assert result.tzinfo is UTC
        assert result.hour == 12

    def test_should_convert_aware_datetimes_to_utc_calendar_day(self) -> None:
        """Test that an offset datetime lands on its UTC day."""
        zurich_midnight = datetime(2024, 1, 1, 0, 30, tzinfo=timezone(timedelta(hours=1)))

        assert calendar_date(zurich_midnight) == date(2023, 12, 31)

    def test_should_count_calendar_days(self) -> None:
        assert days_between(date(2021, 1, 1), date(2022, 1, 1)) == 365
        assert days_between(date(2020, 1, 1), date(2021, 1, 1)) == 366
        assert days_between(date(2021, 1, 2), date(2021, 1, 1)) == -1

    def test_should_format_with_milliseconds(self) -> None:
        """Test the persisted date format."""
        moment = datetime(2023, 7, 4, 9, 5, 3, 250000, tzinfo=UTC)

        assert format_iso_millis(moment) == "2023-07-04T09:05:03.250Z"
        assert format_iso_millis(date(2023, 7, 4)) == "2023-07-04T00:00:00.000Z"

    def test_should_parse_formatted_dates(self) -> None:
        parsed = parse_iso_millis("2023-07-04T09:05:03.250Z")

        assert parsed == datetime(2023, 7, 4, 9, 5, 3, 250000, tzinfo=UTC)

    @pytest.mark.parametrize(
        ("month", "quarter"), [(1, 1), (3, 1), (4, 2), (6, 2), (7, 3), (9, 3), (10, 4), (12, 4)]
    )
    def test_should_map_months_to_quarters(self, month: int, quarter: int) -> None:
        assert quarter_of(month) == quarter


class TestReportPeriod:
    """Tests for ReportPeriod keys and arithmetic."""

    def test_should_build_year_and_quarter_keys(self) -> None:
        """Test key format for both granularities."""
        assert ReportPeriod.containing(date(2021, 5, 17), AggregateBy.YEAR).key == "2021"
        assert ReportPeriod.containing(date(2021, 5, 17), AggregateBy.QUARTER).key == "2021-Q2"
        assert ReportPeriod.containing(date(2021, 12, 31), AggregateBy.QUARTER).key == "2021-Q4"

    def test_should_parse_keys(self) -> None:
        period = ReportPeriod.from_key("2022-Q3", AggregateBy.QUARTER)

        assert period == ReportPeriod(2022, 3, AggregateBy.QUARTER)
        assert ReportPeriod.from_key("2022", AggregateBy.YEAR).year == 2022

    def test_should_reject_invalid_quarter_keys(self) -> None:
        with pytest.raises(ValueError, match="Invalid quarter key"):
            ReportPeriod.from_key("2022-Q5", AggregateBy.QUARTER)

    def test_should_roll_over_year_boundaries(self) -> None:
        """Test next() across the last quarter and the last year."""
        q4 = ReportPeriod(2021, 4, AggregateBy.QUARTER)

        assert q4.next() == ReportPeriod(2022, 1, AggregateBy.QUARTER)
        assert ReportPeriod(2021, 1, AggregateBy.YEAR).next().key == "2022"

    def test_should_order_numerically_not_lexically(self) -> None:
        """Test that comparisons use (year, subperiod)."""
        assert ReportPeriod(999, 1, AggregateBy.YEAR) < ReportPeriod(2021, 1, AggregateBy.YEAR)
        q4 = ReportPeriod(2021, 4, AggregateBy.QUARTER)
        assert q4 < ReportPeriod(2022, 1, AggregateBy.QUARTER)

    def test_should_know_period_end_dates(self) -> None:
        """Test last calendar day including leap years."""
        assert ReportPeriod(2024, 1, AggregateBy.QUARTER).end_date() == date(2024, 3, 31)
        assert ReportPeriod(2024, 2, AggregateBy.QUARTER).end_date() == date(2024, 6, 30)
        assert ReportPeriod(2023, 1, AggregateBy.YEAR).end_date() == date(2023, 12, 31)
        assert ReportPeriod(2024, 1, AggregateBy.QUARTER).start_date() == date(2024, 1, 1)

        end = ReportPeriod(2023, 1, AggregateBy.YEAR).end_datetime()
        assert calendar_date(end) == date(2023, 12, 31)

    def test_should_iterate_inclusive_ranges(self) -> None:
        first = ReportPeriod(2021, 3, AggregateBy.QUARTER)
        last = ReportPeriod(2022, 2, AggregateBy.QUARTER)

        keys = [p.key for p in iterate_periods(first, last)]

        assert keys == ["2021-Q3", "2021-Q4", "2022-Q1", "2022-Q2"]
        assert iterate_periods(last, first) == []
