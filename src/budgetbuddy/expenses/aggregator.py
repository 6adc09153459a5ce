#!/usr/bin/env python3
"""
Spending Aggregator

Groups and sums expenses over an inclusive window of calendar days. Pure
functions over immutable snapshots; callers pass whatever expense list they
have (from a query, a subscription delivery, or a test fixture).

Groupings only contain keys that actually occur. Zero-filling allocated
categories is the progress calculator's job.
"""

from collections import defaultdict
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from ..core.dates import FinancialDate
from ..core.errors import InvalidInputError
from ..core.money import Money
from .models import Expense


@dataclass
class SpendingSummary:
    """All aggregations for one date window."""

    start_date: FinancialDate
    end_date: FinancialDate
    total: Money
    by_category: dict[str, Money] = field(default_factory=dict)
    by_spender: dict[str, Money] = field(default_factory=dict)
    daily: dict[FinancialDate, Money] = field(default_factory=dict)
    expense_count: int = 0


def _check_range(start_date: FinancialDate, end_date: FinancialDate) -> None:
    if start_date > end_date:
        raise InvalidInputError(f"Date range is reversed: {start_date} > {end_date}")


def filter_by_date_range(
    expenses: Iterable[Expense], start_date: FinancialDate, end_date: FinancialDate
) -> list[Expense]:
    """
    Keep expenses whose day lies in [start_date, end_date], both ends included.

    Raises:
        InvalidInputError: If start_date is after end_date
    """
    _check_range(start_date, end_date)
    return [e for e in expenses if start_date <= e.day <= end_date]


def _group(expenses: Iterable[Expense], key: Callable[[Expense], object]) -> dict:
    totals: dict = defaultdict(Money.zero)
    for expense in expenses:
        totals[key(expense)] += expense.amount
    return dict(totals)


def total_spending(expenses: Iterable[Expense], start_date: FinancialDate, end_date: FinancialDate) -> Money:
    """Sum of all expense amounts in range."""
    return sum((e.amount for e in filter_by_date_range(expenses, start_date, end_date)), Money.zero())


def spending_by_category(
    expenses: Iterable[Expense], start_date: FinancialDate, end_date: FinancialDate
) -> dict[str, Money]:
    """Summed amounts per category id, for categories with spending in range."""
    return _group(filter_by_date_range(expenses, start_date, end_date), lambda e: e.category_id)


def spending_by_spender(
    expenses: Iterable[Expense], start_date: FinancialDate, end_date: FinancialDate
) -> dict[str, Money]:
    """Summed amounts per spender id, for spenders with spending in range."""
    return _group(filter_by_date_range(expenses, start_date, end_date), lambda e: e.spender_id)


def daily_spending(
    expenses: Iterable[Expense], start_date: FinancialDate, end_date: FinancialDate
) -> dict[FinancialDate, Money]:
    """Summed amounts per calendar day, for days with spending in range."""
    return _group(filter_by_date_range(expenses, start_date, end_date), lambda e: e.day)


def summarize_spending(
    expenses: Iterable[Expense], start_date: FinancialDate, end_date: FinancialDate
) -> SpendingSummary:
    """
    Compute every aggregation for a window in one pass over the filtered list.

    Raises:
        InvalidInputError: If start_date is after end_date
    """
    in_range = filter_by_date_range(expenses, start_date, end_date)
    return SpendingSummary(
        start_date=start_date,
        end_date=end_date,
        total=sum((e.amount for e in in_range), Money.zero()),
        by_category=_group(in_range, lambda e: e.category_id),
        by_spender=_group(in_range, lambda e: e.spender_id),
        daily=_group(in_range, lambda e: e.day),
        expense_count=len(in_range),
    )


def recent_daily_spending(
    expenses: Iterable[Expense], days: int = 7, today: FinancialDate | None = None
) -> list[tuple[FinancialDate, Money]]:
    """
    Zero-filled spending for the last `days` days, oldest first, today included.

    Raises:
        InvalidInputError: If days is not positive
    """
    if days <= 0:
        raise InvalidInputError(f"Number of days must be positive, got {days}")

    today = today or FinancialDate.today()
    start = today.add_days(-(days - 1))
    totals = daily_spending(expenses, start, today)
    return [(day, totals.get(day, Money.zero())) for day in (start.add_days(i) for i in range(days))]
