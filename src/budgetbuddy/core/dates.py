#!/usr/bin/env python3
"""
FinancialDate Primitive Type

Immutable calendar-day wrapper used for budget windows and daily spending keys.
Expenses carry a full datetime; everything that groups or filters by day
goes through FinancialDate so that time of day never matters.
"""

import calendar
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta


@dataclass(frozen=True)
class FinancialDate:
    """Immutable calendar date with consistent formatting."""

    date: date

    @classmethod
    def from_string(cls, date_str: str, format: str = "%Y-%m-%d") -> "FinancialDate":
        """
        Parse from string in specified format.

        Args:
            date_str: Date string to parse
            format: Date format (default: ISO format "%Y-%m-%d")

        Returns:
            FinancialDate object
        """
        return cls(date=datetime.strptime(date_str, format).date())

    @classmethod
    def from_datetime(cls, moment: datetime | date) -> "FinancialDate":
        """
        Strip the time of day from a datetime.

        The recorded (local) calendar day is kept as-is; no timezone
        conversion happens here.
        """
        if isinstance(moment, datetime):
            return cls(date=moment.date())
        return cls(date=moment)

    @classmethod
    def today(cls) -> "FinancialDate":
        """Get today's date."""
        return cls(date=date.today())

    def start_of_day(self) -> datetime:
        """First instant of this day."""
        return datetime.combine(self.date, time.min)

    def end_of_day(self) -> datetime:
        """Last instant of this day."""
        return datetime.combine(self.date, time.max)

    def add_days(self, days: int) -> "FinancialDate":
        """Shift by a number of days (negative to go back)."""
        return FinancialDate(date=self.date + timedelta(days=days))

    def month_bounds(self) -> tuple["FinancialDate", "FinancialDate"]:
        """
        Get the first and last day of the calendar month containing this date.

        Returns:
            (first_day, last_day) tuple
        """
        last = calendar.monthrange(self.date.year, self.date.month)[1]
        return (
            FinancialDate(date=self.date.replace(day=1)),
            FinancialDate(date=self.date.replace(day=last)),
        )

    def days_until(self, other: "FinancialDate") -> int:
        """Number of days from this date to another (negative if other is earlier)."""
        return (other.date - self.date).days

    def to_iso_string(self) -> str:
        """Format as YYYY-MM-DD."""
        return self.date.isoformat()

    def to_display_string(self) -> str:
        """Short display format like 'Mar 5'."""
        return f"{self.date:%b} {self.date.day}"

    def __str__(self) -> str:
        """String representation."""
        return self.to_iso_string()

    def __eq__(self, other: object) -> bool:
        """Check equality."""
        if not isinstance(other, FinancialDate):
            return NotImplemented
        return self.date == other.date

    def __hash__(self) -> int:
        return hash(self.date)

    def __lt__(self, other: "FinancialDate") -> bool:
        """Less than comparison."""
        return self.date < other.date

    def __le__(self, other: "FinancialDate") -> bool:
        """Less than or equal comparison."""
        return self.date <= other.date

    def __gt__(self, other: "FinancialDate") -> bool:
        """Greater than comparison."""
        return self.date > other.date

    def __ge__(self, other: "FinancialDate") -> bool:
        """Greater than or equal comparison."""
        return self.date >= other.date

    def __repr__(self) -> str:
        """Repr format."""
        return f"FinancialDate(date={self.date!r})"


def as_financial_date(value: "FinancialDate | datetime | date") -> FinancialDate:
    """Coerce a date-like value to FinancialDate."""
    if isinstance(value, FinancialDate):
        return value
    return FinancialDate.from_datetime(value)
