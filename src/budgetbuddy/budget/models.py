#!/usr/bin/env python3
"""
Budget Domain Models

A Budget owns its ordered list of CategoryAllocation; allocations have no
lifecycle of their own. Whether a budget is past, current or future is
derived from its date range at query time and never stored.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from ..core.dates import FinancialDate
from ..core.money import Money


def _new_id() -> str:
    return str(uuid.uuid4())


class BudgetPeriod(Enum):
    """Length of a budget window."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"
    CUSTOM = "custom"

    @property
    def display_name(self) -> str:
        """Capitalized name for display."""
        return self.value.capitalize()


class BudgetStatus(Enum):
    """Position of a budget window relative to a given day."""

    PAST = "past"
    CURRENT = "current"
    FUTURE = "future"


@dataclass
class CategoryAllocation:
    """
    Spending ceiling for one category inside a budget.

    `amount` is always the value used for progress math. `percentage` only
    records where the amount came from when `is_percentage` is set.
    `rollover_enabled` is stored but not used by progress.
    """

    category_id: str
    amount: Money
    is_percentage: bool = False
    percentage: float | None = None
    rollover_enabled: bool = False
    id: str = field(default_factory=_new_id)

    def to_record(self) -> dict[str, Any]:
        """Convert to a store record."""
        record: dict[str, Any] = {
            "categoryId": self.category_id,
            "amount": self.amount.to_float(),
            "isPercentage": self.is_percentage,
            "rolloverEnabled": self.rollover_enabled,
        }
        if self.percentage is not None:
            record["percentage"] = self.percentage
        return record

    @classmethod
    def from_record(cls, doc_id: str, data: dict[str, Any]) -> "CategoryAllocation":
        """
        Create CategoryAllocation from a store record.

        Raises:
            KeyError: If a required field is missing
        """
        percentage = data.get("percentage")
        return cls(
            id=doc_id,
            category_id=data["categoryId"],
            amount=Money.from_float(data["amount"]),
            is_percentage=data.get("isPercentage", False),
            percentage=float(percentage) if percentage is not None else None,
            rollover_enabled=data.get("rolloverEnabled", False),
        )


@dataclass
class Budget:
    """
    A spending plan over an inclusive range of calendar days.

    Record fields: totalAmount, startDate, endDate, period, createdAt,
    updatedAt. Allocations are stored as child documents, not in the record.
    """

    total_amount: Money
    start_date: FinancialDate
    end_date: FinancialDate
    period: BudgetPeriod = BudgetPeriod.MONTHLY
    category_allocations: list[CategoryAllocation] = field(default_factory=list)
    id: str = field(default_factory=_new_id)
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)

    def contains(self, day: FinancialDate) -> bool:
        """Check if a day falls inside the budget window (inclusive)."""
        return self.start_date <= day <= self.end_date

    def status(self, today: FinancialDate | None = None) -> BudgetStatus:
        """Classify the budget relative to today."""
        today = today or FinancialDate.today()
        if today < self.start_date:
            return BudgetStatus.FUTURE
        if today > self.end_date:
            return BudgetStatus.PAST
        return BudgetStatus.CURRENT

    @property
    def length_days(self) -> int:
        """Number of days in the window, both ends included."""
        return self.start_date.days_until(self.end_date) + 1

    @property
    def allocated_amount(self) -> Money:
        """Sum of all allocation amounts."""
        return sum((a.amount for a in self.category_allocations), Money.zero())

    @property
    def unallocated_amount(self) -> Money:
        """Part of the total not covered by any allocation (may be negative)."""
        return self.total_amount - self.allocated_amount

    def allocation_for(self, category_id: str) -> CategoryAllocation | None:
        """First allocation for a category, if any."""
        for allocation in self.category_allocations:
            if allocation.category_id == category_id:
                return allocation
        return None

    def to_record(self) -> dict[str, Any]:
        """Convert to a store record (without allocations)."""
        return {
            "totalAmount": self.total_amount.to_float(),
            "startDate": self.start_date.start_of_day(),
            "endDate": self.end_date.end_of_day(),
            "period": self.period.value,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    @classmethod
    def from_record(
        cls,
        doc_id: str,
        data: dict[str, Any],
        allocations: list[CategoryAllocation] | None = None,
    ) -> "Budget":
        """
        Create Budget from a store record plus its allocation documents.

        Raises:
            KeyError: If a required field is missing
            ValueError: If the period is unknown
        """
        return cls(
            id=doc_id,
            total_amount=Money.from_float(data["totalAmount"]),
            start_date=FinancialDate.from_datetime(data["startDate"]),
            end_date=FinancialDate.from_datetime(data["endDate"]),
            period=BudgetPeriod(data["period"]),
            category_allocations=list(allocations or []),
            created_at=data["createdAt"],
            updated_at=data["updatedAt"],
        )


def validate_budget(budget: Budget) -> list[str]:
    """
    Check a budget before it is written.

    Returns:
        List of problems; empty if the budget is valid
    """
    errors = []
    if not budget.total_amount.is_positive():
        errors.append(f"Budget total must be positive, got {budget.total_amount}")
    if budget.start_date > budget.end_date:
        errors.append(f"Budget starts after it ends ({budget.start_date} > {budget.end_date})")

    seen_ids: set[str] = set()
    for allocation in budget.category_allocations:
        if allocation.id in seen_ids:
            errors.append(f"Duplicate allocation id: {allocation.id}")
        seen_ids.add(allocation.id)
        if not allocation.category_id:
            errors.append(f"Allocation {allocation.id} has no category")
    return errors
