#!/usr/bin/env python3
"""
Budget Lifecycle Manager

Creates, updates and deletes a budget together with its allocation
sub-collection, and answers "which budget is current".

None of the multi-step operations are atomic. Each store call is issued and
completed before the next one starts. When a call fails after at least one
earlier call has been committed, a PartialFailureError describing the
committed steps is raised and nothing is rolled back. There is no retry,
timeout or cancellation layer here; that belongs to the store or the caller.
"""

import logging
from collections.abc import Callable
from dataclasses import replace
from datetime import date, datetime
from typing import Any

from ..core.auth import AuthProvider, require_household
from ..core.dates import FinancialDate, as_financial_date
from ..core.errors import InvalidInputError, InvalidStateError, NotFoundError
from ..core.money import Money
from ..core.steps import StepRunner
from ..core.store import (
    Document,
    DocumentStore,
    FieldFilter,
    Subscription,
    child_collection,
    household_collection,
)
from ..expenses.service import ExpenseService
from .models import Budget, BudgetPeriod, CategoryAllocation, validate_budget
from .progress import calculate_progress

logger = logging.getLogger(__name__)

BUDGETS_COLLECTION = "budgets"
ALLOCATIONS_COLLECTION = "categoryAllocations"

# Stored alongside each allocation record to keep the budget's ordering
POSITION_FIELD = "position"


def _as_moment(now: datetime | date | FinancialDate | None) -> datetime:
    if now is None:
        return datetime.now()
    if isinstance(now, datetime):
        return now
    return as_financial_date(now).start_of_day()


class BudgetLifecycleManager:
    """
    Household-scoped budget persistence.

    Example:
        >>> manager = BudgetLifecycleManager(store, auth, ExpenseService(store, auth))
        >>> budget = manager.create_monthly_budget(Money.from_dollars(2000))
        >>> manager.find_current().id == budget.id
        True
    """

    def __init__(self, store: DocumentStore, auth: AuthProvider, expense_service: ExpenseService):
        """
        Initialize with explicit collaborators.

        Args:
            store: Document store
            auth: Identity provider (must yield a user in a household)
            expense_service: Source of spending for progress computation
        """
        self.store = store
        self.auth = auth
        self.expense_service = expense_service

    # Paths and conversion

    def _budgets(self) -> str:
        identity = require_household(self.auth)
        return household_collection(identity.household_id, BUDGETS_COLLECTION)

    def _allocations(self, budgets_collection: str, budget_id: str) -> str:
        return child_collection(budgets_collection, budget_id, ALLOCATIONS_COLLECTION)

    @staticmethod
    def _allocation_record(allocation: CategoryAllocation, position: int) -> dict[str, Any]:
        record = allocation.to_record()
        record[POSITION_FIELD] = position
        return record

    @staticmethod
    def _sorted_allocations(documents: list[Document]) -> list[CategoryAllocation]:
        ordered = sorted(documents, key=lambda doc: doc.data.get(POSITION_FIELD, float("inf")))
        return [CategoryAllocation.from_record(doc.id, doc.data) for doc in ordered]

    def _load(self, budgets_collection: str, doc: Document) -> Budget:
        allocations = self.store.query(self._allocations(budgets_collection, doc.id))
        return Budget.from_record(doc.id, doc.data, self._sorted_allocations(allocations))

    @staticmethod
    def _validate(budget: Budget) -> None:
        errors = validate_budget(budget)
        if errors:
            raise InvalidInputError("; ".join(errors))

    # Lifecycle

    def create(self, budget: Budget) -> Budget:
        """
        Persist a budget record, then each allocation as a child record.

        Raises:
            InvalidInputError: If the budget is malformed
            PartialFailureError: If an allocation write fails after the budget
                record was written
        """
        self._validate(budget)
        budgets = self._budgets()
        allocations = self._allocations(budgets, budget.id)
        runner = StepRunner(f"create budget {budget.id}")

        runner.run("write budget", lambda: self.store.create(budgets, budget.id, budget.to_record()))
        for position, allocation in enumerate(budget.category_allocations):
            runner.run(
                f"write allocation {allocation.id}",
                lambda a=allocation, p=position: self.store.create(
                    allocations, a.id, self._allocation_record(a, p)
                ),
            )

        logger.info(
            "Created budget %s (%s to %s, %s, %d allocations)",
            budget.id,
            budget.start_date,
            budget.end_date,
            budget.total_amount,
            len(budget.category_allocations),
        )
        return budget

    def get(self, budget_id: str) -> Budget:
        """
        Fetch a budget with its allocations.

        Raises:
            NotFoundError: If no such budget exists
        """
        budgets = self._budgets()
        doc = self.store.get(budgets, budget_id)
        if doc is None:
            raise NotFoundError("Budget", budget_id)
        return self._load(budgets, doc)

    def update(self, budget: Budget) -> Budget:
        """
        Write budget fields, then reconcile allocations by id.

        Allocations in the new list are upserted with merge semantics.
        Allocations stored under the budget whose id is not in the new list
        are deleted one by one. Unchanged ids are never deleted and recreated.

        Raises:
            InvalidInputError: If the budget is malformed
            NotFoundError: If the budget does not exist
            PartialFailureError: If a later step fails after the budget record
                was written
        """
        self._validate(budget)
        updated = replace(budget, updated_at=datetime.now())
        budgets = self._budgets()
        allocations = self._allocations(budgets, updated.id)
        runner = StepRunner(f"update budget {updated.id}")

        runner.run("write budget", lambda: self.store.update(budgets, updated.id, updated.to_record()))

        existing = runner.run(
            "read allocations", lambda: self.store.query(allocations), mutates=False
        )
        stale_ids = {doc.id for doc in existing} - {a.id for a in updated.category_allocations}

        for position, allocation in enumerate(updated.category_allocations):
            runner.run(
                f"upsert allocation {allocation.id}",
                lambda a=allocation, p=position: self.store.update(
                    allocations, a.id, self._allocation_record(a, p), merge=True
                ),
            )

        for doc in existing:
            if doc.id in stale_ids:
                runner.run(
                    f"delete allocation {doc.id}",
                    lambda doc_id=doc.id: self.store.delete(allocations, doc_id),
                )

        logger.info(
            "Updated budget %s (%d allocations kept or added, %d removed)",
            updated.id,
            len(updated.category_allocations),
            len(stale_ids),
        )
        return updated

    def delete(self, budget_id: str) -> None:
        """
        Delete every allocation of a budget, then the budget record.

        Children go first; a failure never leaves allocations under a
        missing budget.

        Raises:
            PartialFailureError: If a delete fails after earlier deletes
                were committed
        """
        budgets = self._budgets()
        allocations = self._allocations(budgets, budget_id)
        runner = StepRunner(f"delete budget {budget_id}")

        existing = runner.run("read allocations", lambda: self.store.query(allocations), mutates=False)
        for doc in existing:
            runner.run(
                f"delete allocation {doc.id}",
                lambda doc_id=doc.id: self.store.delete(allocations, doc_id),
            )
        runner.run("delete budget", lambda: self.store.delete(budgets, budget_id))

        logger.info("Deleted budget %s and %d allocations", budget_id, len(existing))

    # Queries

    def _current_filters(self, now: datetime | date | FinancialDate | None) -> list[FieldFilter]:
        moment = _as_moment(now)
        return [FieldFilter("startDate", "<=", moment), FieldFilter("endDate", ">=", moment)]

    def find_current(self, now: datetime | date | FinancialDate | None = None) -> Budget | None:
        """
        The budget whose window contains `now`, if any.

        If several budgets overlap `now`, whichever the store returns first
        wins; the choice is not guaranteed to be stable across backends.
        """
        budgets = self._budgets()
        documents = self.store.query(budgets, filters=self._current_filters(now), limit=1)
        if not documents:
            return None
        return self._load(budgets, documents[0])

    def list_budgets(self, limit: int = 10) -> list[Budget]:
        """Most recent budgets first (by start date)."""
        budgets = self._budgets()
        documents = self.store.query(budgets, order_by="startDate", descending=True, limit=limit)
        return [self._load(budgets, doc) for doc in documents]

    def create_monthly_budget(
        self,
        total_amount: Money,
        start: FinancialDate | None = None,
        allocations: list[CategoryAllocation] | None = None,
    ) -> Budget:
        """
        Create a budget spanning the calendar month that contains `start`.

        Args:
            total_amount: Budget total
            start: Any day in the target month (default: today)
            allocations: Category allocations (default: none)
        """
        first_day, last_day = (start or FinancialDate.today()).month_bounds()
        budget = Budget(
            total_amount=total_amount,
            start_date=first_day,
            end_date=last_day,
            period=BudgetPeriod.MONTHLY,
            category_allocations=list(allocations or []),
        )
        return self.create(budget)

    # Progress

    def get_progress(self, budget: Budget) -> dict[str, float]:
        """
        Percentage used per allocated category plus "overall".

        Raises:
            DivisionHazardError: If spending exists against a zero allocation
        """
        summary = self.expense_service.summary(budget.start_date, budget.end_date)
        return calculate_progress(budget, summary.by_category, summary.total)

    def get_current_progress(
        self, now: datetime | date | FinancialDate | None = None
    ) -> tuple[Budget, dict[str, float]]:
        """
        Progress of the current budget.

        Raises:
            InvalidStateError: If no budget covers `now`
        """
        budget = self.find_current(now)
        if budget is None:
            raise InvalidStateError("No current budget; create one first")
        return budget, self.get_progress(budget)

    def subscribe_current(
        self,
        callback: Callable[[Budget | None], None],
        now: datetime | date | FinancialDate | None = None,
    ) -> Subscription:
        """
        Receive the current budget (or None) now and whenever budgets change.

        Only changes to budget records trigger a delivery; allocation edits
        arrive with the next budget write.

        Raises:
            InvalidStateError: If no household identity is available
            SubscriptionError: If the store cannot set up the subscription
        """
        budgets = self._budgets()

        def deliver(documents: list[Document]) -> None:
            callback(self._load(budgets, documents[0]) if documents else None)

        return self.store.subscribe(budgets, deliver, filters=self._current_filters(now), limit=1)
