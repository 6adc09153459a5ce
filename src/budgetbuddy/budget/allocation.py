#!/usr/bin/env python3
"""
Allocation Engine

Pure functions that turn a budget total into per-category allocations.
Uses integer cents throughout; no I/O.

Strategies:
- Equal: total divided across all active categories
- Rule-based: fixed-percentage buckets (50/30/20 needs/wants/savings)
- Custom: explicit amount per category
- Percentage: explicit percentage of the total per category

No strategy has to allocate the whole total. Anything left over is simply
unallocated spending with no per-category ceiling.
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum

from ..categories.models import Category, active_categories, normalize_category_name
from ..core.errors import InvalidInputError
from ..core.money import Money
from .models import CategoryAllocation

logger = logging.getLogger(__name__)


class AllocationStrategy(Enum):
    """Ways to distribute a budget total."""

    EQUAL = "equal"
    RULE_50_30_20 = "rule_50_30_20"
    CUSTOM = "custom"
    PERCENTAGE = "percentage"


@dataclass(frozen=True)
class RuleBucket:
    """
    A named share of the total, spread over a set of categories.

    Categories are matched by name, ignoring case and extra whitespace.
    """

    name: str
    percentage: float
    category_names: tuple[str, ...]

    def matches(self, category: Category) -> bool:
        """Check if a category belongs to this bucket."""
        wanted = {normalize_category_name(n) for n in self.category_names}
        return category.normalized_name in wanted


FIFTY_THIRTY_TWENTY: tuple[RuleBucket, ...] = (
    RuleBucket("Needs", 50.0, ("Housing", "Groceries", "Transportation", "Utilities", "Health")),
    RuleBucket("Wants", 30.0, ("Dining", "Entertainment", "Shopping")),
    RuleBucket("Savings", 20.0, ("Personal",)),
)


def equal_split(total_amount: Money, categories: Iterable[Category]) -> list[CategoryAllocation]:
    """
    Divide the total evenly across all non-archived categories.

    Shares are whole cents, so "equal" means within one cent rather than
    identical: a total that does not divide evenly gives its leftover cents
    to the first categories, one each. $100.00 over three categories is
    $33.34, $33.33, $33.33. Identical amounts would need fractional cents
    and would no longer sum exactly to the total.

    Args:
        total_amount: Budget total
        categories: Candidate categories; archived ones are skipped

    Returns:
        One allocation per active category, in input order; empty if none
    """
    active = active_categories(list(categories))
    if not active:
        return []

    shares = total_amount.split(len(active))
    return [
        CategoryAllocation(category_id=category.id, amount=share, is_percentage=False)
        for category, share in zip(active, shares)
    ]


def rule_based_split(
    total_amount: Money,
    categories: Iterable[Category],
    buckets: Iterable[RuleBucket] = FIFTY_THIRTY_TWENTY,
) -> list[CategoryAllocation]:
    """
    Allocate fixed-percentage buckets across matching categories.

    For each bucket the share (total x bucket percentage) is split evenly
    among its matching active categories. Each allocation records
    percentage = bucket percentage / matched count, so a bucket's percentages
    add back up to the bucket's share.

    Categories outside every bucket get nothing. A bucket with no matching
    category is dropped; its share is not redistributed.

    Args:
        total_amount: Budget total
        categories: Candidate categories
        buckets: Rule definition (default 50/30/20)

    Returns:
        Allocations grouped by bucket, in bucket order
    """
    active = active_categories(list(categories))
    allocations: list[CategoryAllocation] = []

    for bucket in buckets:
        matched = [c for c in active if bucket.matches(c)]
        if not matched:
            logger.debug("Rule bucket %s matched no categories; share dropped", bucket.name)
            continue

        bucket_amount = total_amount.percent(bucket.percentage)
        per_category_percentage = bucket.percentage / len(matched)
        for category, share in zip(matched, bucket_amount.split(len(matched))):
            allocations.append(
                CategoryAllocation(
                    category_id=category.id,
                    amount=share,
                    is_percentage=True,
                    percentage=per_category_percentage,
                )
            )

    return allocations


def custom_split(category_amounts: Mapping[str, Money | None]) -> list[CategoryAllocation]:
    """
    One allocation per category with a positive amount.

    Entries with a zero, negative or missing amount are skipped entirely.

    Args:
        category_amounts: Mapping of category id to amount

    Returns:
        Allocations in mapping order
    """
    return [
        CategoryAllocation(category_id=category_id, amount=amount, is_percentage=False)
        for category_id, amount in category_amounts.items()
        if amount is not None and amount.is_positive()
    ]


def percentage_split(
    total_amount: Money, category_percentages: Mapping[str, float | None]
) -> list[CategoryAllocation]:
    """
    One allocation per category from a percentage of the total.

    Entries with a zero, negative or missing percentage are skipped.

    Args:
        total_amount: Budget total
        category_percentages: Mapping of category id to percentage (25.0 = 25%)

    Returns:
        Allocations with is_percentage set and the source percentage kept
    """
    return [
        CategoryAllocation(
            category_id=category_id,
            amount=total_amount.percent(percentage),
            is_percentage=True,
            percentage=percentage,
        )
        for category_id, percentage in category_percentages.items()
        if percentage is not None and percentage > 0
    ]


def build_allocations(
    strategy: AllocationStrategy,
    total_amount: Money,
    categories: Iterable[Category] = (),
    category_amounts: Mapping[str, Money | None] | None = None,
    category_percentages: Mapping[str, float | None] | None = None,
    buckets: Iterable[RuleBucket] = FIFTY_THIRTY_TWENTY,
) -> list[CategoryAllocation]:
    """
    Dispatch to the allocation function for a strategy.

    Raises:
        InvalidInputError: If the strategy's required input is missing
    """
    if strategy == AllocationStrategy.EQUAL:
        return equal_split(total_amount, categories)
    if strategy == AllocationStrategy.RULE_50_30_20:
        return rule_based_split(total_amount, categories, buckets)
    if strategy == AllocationStrategy.CUSTOM:
        if category_amounts is None:
            raise InvalidInputError("Custom allocation requires category amounts")
        return custom_split(category_amounts)
    if category_percentages is None:
        raise InvalidInputError("Percentage allocation requires category percentages")
    return percentage_split(total_amount, category_percentages)
