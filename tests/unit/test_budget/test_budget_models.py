#!/usr/bin/env python3
"""Tests for budget domain models."""

from datetime import datetime

import pytest

from budgetbuddy.budget.models import Budget, BudgetPeriod, BudgetStatus, CategoryAllocation, validate_budget
from budgetbuddy.core.dates import FinancialDate
from budgetbuddy.core.money import Money


def _march_budget(**overrides) -> Budget:
    fields = {
        "total_amount": Money.from_dollars(2000),
        "start_date": FinancialDate.from_string("2024-03-01"),
        "end_date": FinancialDate.from_string("2024-03-31"),
    }
    fields.update(overrides)
    return Budget(**fields)


@pytest.mark.budget
class TestBudget:
    """Test derived budget properties."""

    def test_status_is_derived_from_dates(self):
        """Test past/current/future relative to a given day."""
        budget = _march_budget()
        assert budget.status(FinancialDate.from_string("2024-02-29")) == BudgetStatus.FUTURE
        assert budget.status(FinancialDate.from_string("2024-03-01")) == BudgetStatus.CURRENT
        assert budget.status(FinancialDate.from_string("2024-03-31")) == BudgetStatus.CURRENT
        assert budget.status(FinancialDate.from_string("2024-04-01")) == BudgetStatus.PAST

    def test_amounts(self):
        """Test allocated and unallocated totals."""
        budget = _march_budget(
            category_allocations=[
                CategoryAllocation(category_id="a", amount=Money.from_dollars(500)),
                CategoryAllocation(category_id="b", amount=Money.from_dollars(300)),
            ]
        )
        assert budget.allocated_amount == Money.from_dollars(800)
        assert budget.unallocated_amount == Money.from_dollars(1200)
        assert budget.allocation_for("b").amount == Money.from_dollars(300)
        assert budget.allocation_for("zzz") is None
        assert budget.length_days == 31

    def test_record_round_trip(self):
        """Test record conversion keeps every field; allocations travel separately."""
        allocation = CategoryAllocation(
            category_id="a", amount=Money.from_dollars(250), is_percentage=True, percentage=12.5
        )
        budget = _march_budget(period=BudgetPeriod.CUSTOM, category_allocations=[allocation])

        record = budget.to_record()
        assert "categoryAllocations" not in record
        assert record["totalAmount"] == 2000.0
        assert record["startDate"] == datetime(2024, 3, 1)
        assert record["endDate"].date() == datetime(2024, 3, 31).date()

        restored = Budget.from_record(
            budget.id, record, [CategoryAllocation.from_record(allocation.id, allocation.to_record())]
        )
        assert restored == budget

    def test_period_display_name(self):
        """Test period labels."""
        assert BudgetPeriod.MONTHLY.display_name == "Monthly"


@pytest.mark.budget
class TestCategoryAllocation:
    """Test allocation records."""

    def test_percentage_omitted_when_unset(self):
        """Test fixed-amount allocations do not write a percentage field."""
        record = CategoryAllocation(category_id="a", amount=Money.from_cents(4599)).to_record()
        assert record == {"categoryId": "a", "amount": 45.99, "isPercentage": False, "rolloverEnabled": False}

    def test_from_record_defaults(self):
        """Test optional fields default when absent."""
        allocation = CategoryAllocation.from_record("x", {"categoryId": "a", "amount": 10})
        assert allocation.amount == Money.from_dollars(10)
        assert allocation.percentage is None
        assert not allocation.rollover_enabled


@pytest.mark.budget
class TestValidateBudget:
    """Test pre-write validation."""

    def test_valid(self):
        """Test a well-formed budget has no problems."""
        assert validate_budget(_march_budget()) == []

    def test_problems(self):
        """Test each problem is reported."""
        duplicate = CategoryAllocation(category_id="a", amount=Money.from_dollars(1))
        budget = _march_budget(
            total_amount=Money.zero(),
            start_date=FinancialDate.from_string("2024-04-01"),
            category_allocations=[duplicate, duplicate, CategoryAllocation(category_id="", amount=Money.zero())],
        )
        errors = validate_budget(budget)

        assert len(errors) == 4
        assert any("positive" in e for e in errors)
        assert any("starts after" in e for e in errors)
        assert any("Duplicate allocation id" in e for e in errors)
        assert any("no category" in e for e in errors)
