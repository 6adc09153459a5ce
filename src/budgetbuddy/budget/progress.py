#!/usr/bin/env python3
"""
Progress Calculator

Joins a budget's allocations with aggregated spending for the budget window
and reports percentage used, per category and overall, clamped to [0, 100].

The result is a plain mapping from category id to percent, plus the reserved
key "overall". Overall progress uses all spending in the window, including
categories without an allocation, so it can diverge from the per-category
figures.
"""

from collections.abc import Mapping
from enum import Enum

from ..core.dates import FinancialDate
from ..core.errors import DivisionHazardError
from ..core.money import Money
from .models import Budget

OVERALL_KEY = "overall"


class ProgressLevel(Enum):
    """Traffic-light classification of a progress percentage."""

    ON_TRACK = "on_track"
    WARNING = "warning"
    OVER = "over"


def _percent_used(spent: Money, ceiling: Money, key: str) -> float:
    if not spent.is_positive():
        return 0.0
    if not ceiling.is_positive():
        raise DivisionHazardError(
            f"Cannot compute progress for '{key}': {spent} spent against a ceiling of {ceiling}",
            key=key,
        )
    return min(spent.ratio_to(ceiling), 1.0) * 100


def calculate_progress(
    budget: Budget,
    spending_by_category: Mapping[str, Money],
    total_spending: Money | None = None,
) -> dict[str, float]:
    """
    Compute percentage used for each allocated category and overall.

    Args:
        budget: Budget with its allocations
        spending_by_category: Aggregated spending for the budget's exact window
        total_spending: All spending in the window; defaults to the sum of
            spending_by_category

    Returns:
        Mapping of category id -> percent, plus OVERALL_KEY -> percent.
        Allocated categories without spending are 0.0; categories with
        spending but no allocation are left out.

    Raises:
        DivisionHazardError: If spending exists against a zero or negative
            allocation, or against a zero or negative budget total
    """
    progress: dict[str, float] = {}

    for allocation in budget.category_allocations:
        if allocation.category_id in progress:
            continue
        spent = spending_by_category.get(allocation.category_id)
        if spent is None:
            progress[allocation.category_id] = 0.0
        else:
            progress[allocation.category_id] = _percent_used(spent, allocation.amount, allocation.category_id)

    if total_spending is None:
        total_spending = sum(spending_by_category.values(), Money.zero())
    progress[OVERALL_KEY] = _percent_used(total_spending, budget.total_amount, OVERALL_KEY)

    return progress


def progress_level(
    percent: float,
    warning_threshold: float = 70.0,
    over_threshold: float = 90.0,
) -> ProgressLevel:
    """
    Classify a progress percentage.

    Examples:
        >>> progress_level(50.0)
        <ProgressLevel.ON_TRACK: 'on_track'>
        >>> progress_level(95.0)
        <ProgressLevel.OVER: 'over'>
    """
    if percent < warning_threshold:
        return ProgressLevel.ON_TRACK
    if percent < over_threshold:
        return ProgressLevel.WARNING
    return ProgressLevel.OVER


def days_remaining(budget: Budget, today: FinancialDate | None = None) -> int:
    """
    Days left in the budget window, today included; never negative.

    For a budget that has not started yet, the whole window counts.
    """
    today = today or FinancialDate.today()
    start = max(today, budget.start_date)
    return max(0, start.days_until(budget.end_date) + 1)


def daily_allowance(budget: Budget, overall_percent: float, today: FinancialDate | None = None) -> Money:
    """
    What can still be spent per day for the rest of the window.

    Args:
        budget: The budget
        overall_percent: Overall progress from calculate_progress()
        today: Reference day (default: today)

    Returns:
        Remaining budget divided by remaining days, rounded down to the cent;
        zero when no days remain
    """
    days = days_remaining(budget, today)
    if days <= 0:
        return Money.zero()

    remaining = budget.total_amount.percent(100.0 - overall_percent)
    return Money.from_cents(remaining.to_cents() // days)
