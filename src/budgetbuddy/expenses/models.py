#!/usr/bin/env python3
"""
Expense Domain Model

An expense references its category and spender by id; it owns neither.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from ..core.dates import FinancialDate
from ..core.money import Money


def _new_id() -> str:
    return str(uuid.uuid4())


@dataclass
class Expense:
    """
    A single recorded expense.

    `date` is the local wall-clock time of the purchase. Construction does not
    validate; use validate_expense() before persisting.
    """

    amount: Money
    description: str
    date: datetime
    category_id: str
    spender_id: str
    location: str | None = None
    id: str = field(default_factory=_new_id)
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)

    @property
    def day(self) -> FinancialDate:
        """Calendar day of the expense with time of day stripped."""
        return FinancialDate.from_datetime(self.date)

    def to_record(self) -> dict[str, Any]:
        """Convert to a store record; amounts serialize as float dollars."""
        record: dict[str, Any] = {
            "amount": self.amount.to_float(),
            "description": self.description,
            "date": self.date,
            "categoryId": self.category_id,
            "spenderId": self.spender_id,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }
        if self.location is not None:
            record["location"] = self.location
        return record

    @classmethod
    def from_record(cls, doc_id: str, data: dict[str, Any]) -> "Expense":
        """
        Create Expense from a store record.

        Raises:
            KeyError: If a required field is missing
        """
        return cls(
            id=doc_id,
            amount=Money.from_float(data["amount"]),
            description=data.get("description", ""),
            date=data["date"],
            category_id=data["categoryId"],
            spender_id=data["spenderId"],
            location=data.get("location"),
            created_at=data["createdAt"],
            updated_at=data["updatedAt"],
        )


def validate_expense(expense: Expense) -> list[str]:
    """
    Check an expense before it is written.

    Returns:
        List of problems; empty if the expense is valid
    """
    errors = []
    if not expense.amount.is_positive():
        errors.append(f"Expense amount must be positive, got {expense.amount}")
    if not expense.category_id:
        errors.append("Expense must reference a category")
    if not expense.spender_id:
        errors.append("Expense must reference a spender")
    if not isinstance(expense.date, datetime):
        errors.append("Expense date must be a datetime")
    return errors
