#!/usr/bin/env python3
"""Tests for the Expense model."""

from datetime import date, datetime

import pytest

from budgetbuddy.core.dates import FinancialDate
from budgetbuddy.core.money import Money
from budgetbuddy.expenses.models import Expense, validate_expense


def _expense(**overrides) -> Expense:
    fields = {
        "amount": Money.from_dollars("45.99"),
        "description": "Weekly shop",
        "date": datetime(2024, 3, 5, 18, 30),
        "category_id": "cat-groceries",
        "spender_id": "alice",
    }
    fields.update(overrides)
    return Expense(**fields)


@pytest.mark.expenses
class TestExpense:
    """Test expense records."""

    def test_day_strips_time(self):
        """Test the calendar day of a late-evening expense."""
        assert _expense(date=datetime(2024, 3, 5, 23, 59)).day == FinancialDate.from_string("2024-03-05")

    def test_record_fields(self):
        """Test amounts serialize as float dollars and location is optional."""
        record = _expense().to_record()

        assert record["amount"] == 45.99
        assert record["categoryId"] == "cat-groceries"
        assert record["spenderId"] == "alice"
        assert "location" not in record
        assert _expense(location="Market").to_record()["location"] == "Market"

    def test_record_round_trip(self):
        """Test from_record(to_record()) restores the expense."""
        original = _expense(location="Market")
        assert Expense.from_record(original.id, original.to_record()) == original

    def test_from_record_requires_amount(self):
        """Test missing required fields fail loudly."""
        record = _expense().to_record()
        del record["amount"]
        with pytest.raises(KeyError):
            Expense.from_record("x", record)


@pytest.mark.expenses
class TestValidateExpense:
    """Test pre-write validation."""

    def test_valid(self):
        """Test a normal expense passes."""
        assert validate_expense(_expense()) == []

    @pytest.mark.parametrize(
        "overrides,fragment",
        [
            ({"amount": Money.zero()}, "positive"),
            ({"amount": Money.from_cents(-500)}, "positive"),
            ({"category_id": ""}, "category"),
            ({"spender_id": ""}, "spender"),
            ({"date": date(2024, 3, 5)}, "datetime"),
        ],
        ids=["zero", "negative", "no_category", "no_spender", "plain_date"],
    )
    def test_invalid(self, overrides, fragment):
        """Test each problem is reported."""
        errors = validate_expense(_expense(**overrides))
        assert len(errors) == 1
        assert fragment in errors[0]
