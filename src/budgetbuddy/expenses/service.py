#!/usr/bin/env python3
"""
Expense Service

CRUD and queries over the household's expenses collection, plus store-backed
spending analytics that delegate to the aggregator.
"""

import logging
from collections.abc import Callable
from dataclasses import replace
from datetime import datetime

from ..core.auth import AuthProvider, require_household
from ..core.dates import FinancialDate
from ..core.errors import InvalidInputError, NotFoundError
from ..core.money import Money
from ..core.store import Document, DocumentStore, FieldFilter, Subscription, household_collection
from . import aggregator
from .models import Expense, validate_expense

logger = logging.getLogger(__name__)

EXPENSES_COLLECTION = "expenses"


class ExpenseService:
    """Household-scoped expense operations."""

    def __init__(self, store: DocumentStore, auth: AuthProvider):
        """
        Initialize with explicit collaborators.

        Args:
            store: Document store
            auth: Identity provider (must yield a user in a household)
        """
        self.store = store
        self.auth = auth

    def _collection(self) -> str:
        identity = require_household(self.auth)
        return household_collection(identity.household_id, EXPENSES_COLLECTION)

    @staticmethod
    def _to_expenses(documents: list[Document]) -> list[Expense]:
        return [Expense.from_record(doc.id, doc.data) for doc in documents]

    @staticmethod
    def _validate(expense: Expense) -> None:
        errors = validate_expense(expense)
        if errors:
            raise InvalidInputError("; ".join(errors))

    # CRUD

    def create(self, expense: Expense) -> Expense:
        """
        Persist a new expense.

        Raises:
            InvalidInputError: If the expense is invalid (e.g. amount <= 0)
        """
        self._validate(expense)
        self.store.create(self._collection(), expense.id, expense.to_record())
        logger.info("Recorded expense %s: %s in %s", expense.id, expense.amount, expense.category_id)
        return expense

    def get(self, expense_id: str) -> Expense:
        """
        Fetch one expense.

        Raises:
            NotFoundError: If no such expense exists
        """
        doc = self.store.get(self._collection(), expense_id)
        if doc is None:
            raise NotFoundError("Expense", expense_id)
        return Expense.from_record(doc.id, doc.data)

    def update(self, expense: Expense) -> Expense:
        """
        Write an existing expense and bump updated_at.

        Raises:
            InvalidInputError: If the expense is invalid
            NotFoundError: If the expense does not exist
        """
        self._validate(expense)
        updated = replace(expense, updated_at=datetime.now())
        self.store.update(self._collection(), updated.id, updated.to_record())
        return updated

    def delete(self, expense_id: str) -> None:
        """Delete an expense (no-op if it does not exist)."""
        self.store.delete(self._collection(), expense_id)
        logger.info("Deleted expense %s", expense_id)

    # Queries

    def list_expenses(self, limit: int = 50) -> list[Expense]:
        """Most recent expenses first."""
        return self._to_expenses(self.store.query(self._collection(), order_by="date", descending=True, limit=limit))

    def list_by_date_range(self, start_date: FinancialDate, end_date: FinancialDate) -> list[Expense]:
        """
        Expenses dated within [start_date, end_date], newest first.

        Raises:
            InvalidInputError: If start_date is after end_date
        """
        if start_date > end_date:
            raise InvalidInputError(f"Date range is reversed: {start_date} > {end_date}")
        filters = [
            FieldFilter("date", ">=", start_date.start_of_day()),
            FieldFilter("date", "<=", end_date.end_of_day()),
        ]
        return self._to_expenses(
            self.store.query(self._collection(), filters=filters, order_by="date", descending=True)
        )

    def list_by_category(self, category_id: str) -> list[Expense]:
        """Expenses in one category, newest first."""
        return self._to_expenses(
            self.store.query(
                self._collection(),
                filters=[FieldFilter("categoryId", "==", category_id)],
                order_by="date",
                descending=True,
            )
        )

    def list_by_spender(self, spender_id: str) -> list[Expense]:
        """Expenses recorded by one spender, newest first."""
        return self._to_expenses(
            self.store.query(
                self._collection(),
                filters=[FieldFilter("spenderId", "==", spender_id)],
                order_by="date",
                descending=True,
            )
        )

    def subscribe(self, callback: Callable[[list[Expense]], None]) -> Subscription:
        """
        Receive all expenses (newest first) now and after every change.

        Raises:
            InvalidStateError: If no household identity is available
            SubscriptionError: If the store cannot set up the subscription
        """
        return self.store.subscribe(
            self._collection(),
            lambda documents: callback(self._to_expenses(documents)),
            order_by="date",
            descending=True,
        )

    # Analytics

    def total_spending(self, start_date: FinancialDate, end_date: FinancialDate) -> Money:
        """Sum of all expenses in range."""
        return aggregator.total_spending(self.list_by_date_range(start_date, end_date), start_date, end_date)

    def spending_by_category(self, start_date: FinancialDate, end_date: FinancialDate) -> dict[str, Money]:
        """Spending per category id in range."""
        return aggregator.spending_by_category(self.list_by_date_range(start_date, end_date), start_date, end_date)

    def spending_by_spender(self, start_date: FinancialDate, end_date: FinancialDate) -> dict[str, Money]:
        """Spending per spender id in range."""
        return aggregator.spending_by_spender(self.list_by_date_range(start_date, end_date), start_date, end_date)

    def daily_spending(self, start_date: FinancialDate, end_date: FinancialDate) -> dict[FinancialDate, Money]:
        """Spending per calendar day in range."""
        return aggregator.daily_spending(self.list_by_date_range(start_date, end_date), start_date, end_date)

    def summary(self, start_date: FinancialDate, end_date: FinancialDate) -> aggregator.SpendingSummary:
        """All aggregations for a window from a single query."""
        return aggregator.summarize_spending(self.list_by_date_range(start_date, end_date), start_date, end_date)
