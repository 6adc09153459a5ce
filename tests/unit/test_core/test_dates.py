#!/usr/bin/env python3
"""Tests for FinancialDate primitive type."""

from datetime import date, datetime

import pytest

from budgetbuddy.core.dates import FinancialDate, as_financial_date


class TestFinancialDateConstruction:
    """Test FinancialDate construction."""

    @pytest.mark.parametrize(
        "constructor,expected_date",
        [
            (lambda: FinancialDate(date=date(2024, 1, 15)), date(2024, 1, 15)),
            (lambda: FinancialDate.from_string("2024-01-15"), date(2024, 1, 15)),
            (lambda: FinancialDate.from_string("01/15/2024", format="%m/%d/%Y"), date(2024, 1, 15)),
            (lambda: FinancialDate.from_datetime(datetime(2024, 1, 15, 23, 59)), date(2024, 1, 15)),
            (lambda: FinancialDate.from_datetime(date(2024, 1, 15)), date(2024, 1, 15)),
        ],
        ids=["from_date", "from_string", "from_string_custom_format", "from_datetime", "from_plain_date"],
    )
    def test_financial_date_construction(self, constructor, expected_date):
        """Test FinancialDate construction from various sources."""
        assert constructor().date == expected_date

    def test_today(self):
        """Test creating today's date."""
        assert FinancialDate.today().date == date.today()

    def test_as_financial_date_passthrough(self):
        """Test coercion keeps FinancialDate values as they are."""
        fd = FinancialDate.from_string("2024-01-15")
        assert as_financial_date(fd) is fd
        assert as_financial_date(datetime(2024, 1, 15, 8, 0)) == fd


class TestFinancialDateFormatting:
    """Test FinancialDate formatting."""

    def test_to_iso_string(self):
        """Test ISO format output."""
        fd = FinancialDate(date=date(2024, 1, 15))
        assert fd.to_iso_string() == "2024-01-15"
        assert str(fd) == "2024-01-15"

    def test_to_display_string(self):
        """Test short display format used in daily spending lists."""
        assert FinancialDate(date=date(2024, 3, 5)).to_display_string() == "Mar 5"


class TestFinancialDateCalculations:
    """Test FinancialDate calculations."""

    def test_day_bounds(self):
        """Test first and last instant of a day."""
        fd = FinancialDate(date=date(2024, 3, 5))
        assert fd.start_of_day() == datetime(2024, 3, 5, 0, 0)
        assert fd.end_of_day().date() == date(2024, 3, 5)
        assert fd.end_of_day() > datetime(2024, 3, 5, 23, 59, 59)

    def test_add_days_and_days_until(self):
        """Test shifting dates and measuring distance."""
        fd = FinancialDate(date=date(2024, 2, 28))
        assert fd.add_days(2) == FinancialDate(date=date(2024, 3, 1))
        assert fd.add_days(-28) == FinancialDate(date=date(2024, 1, 31))
        assert fd.days_until(FinancialDate(date=date(2024, 3, 1))) == 2
        assert FinancialDate(date=date(2024, 3, 1)).days_until(fd) == -2

    @pytest.mark.parametrize(
        "day,first,last",
        [
            ("2024-02-14", "2024-02-01", "2024-02-29"),
            ("2023-02-14", "2023-02-01", "2023-02-28"),
            ("2024-12-31", "2024-12-01", "2024-12-31"),
        ],
        ids=["leap_february", "february", "december"],
    )
    def test_month_bounds(self, day, first, last):
        """Test calendar month bounds."""
        start, end = FinancialDate.from_string(day).month_bounds()
        assert start == FinancialDate.from_string(first)
        assert end == FinancialDate.from_string(last)


class TestFinancialDateComparison:
    """Test FinancialDate comparison."""

    def test_equality_and_hash(self):
        """Test date equality and use as dict key."""
        d1 = FinancialDate(date=date(2024, 1, 15))
        d2 = FinancialDate(date=date(2024, 1, 15))

        assert d1 == d2
        assert d1 != FinancialDate(date=date(2024, 1, 16))
        assert {d1: "x"}[d2] == "x"

    def test_ordering(self):
        """Test date ordering."""
        early = FinancialDate(date=date(2024, 1, 1))
        late = FinancialDate(date=date(2024, 12, 31))

        assert early < late
        assert late > early
        assert early <= FinancialDate(date=date(2024, 1, 1))
        assert max(early, late) == late
