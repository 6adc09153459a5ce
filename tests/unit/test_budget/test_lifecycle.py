#!/usr/bin/env python3
"""Tests for the budget lifecycle manager."""

from dataclasses import replace
from datetime import date, datetime

import pytest

from budgetbuddy.budget.lifecycle import BudgetLifecycleManager
from budgetbuddy.budget.models import Budget, BudgetPeriod, CategoryAllocation
from budgetbuddy.core.auth import Identity, LocalAuthProvider
from budgetbuddy.core.dates import FinancialDate
from budgetbuddy.core.errors import (
    InvalidInputError,
    InvalidStateError,
    NotFoundError,
    PartialFailureError,
    StoreError,
)
from budgetbuddy.core.money import Money
from budgetbuddy.expenses.service import ExpenseService
from tests.fixtures.failing_store import FailingStore

BUDGETS = "households/test-household/budgets"


def _allocations_path(budget_id: str) -> str:
    return f"{BUDGETS}/{budget_id}/categoryAllocations"


def _budget(start="2024-03-01", end="2024-03-31", total=2000, allocations=None) -> Budget:
    return Budget(
        total_amount=Money.from_dollars(total),
        start_date=FinancialDate.from_string(start),
        end_date=FinancialDate.from_string(end),
        category_allocations=list(allocations or []),
    )


def _allocation(category_id: str, dollars: int, allocation_id: str | None = None) -> CategoryAllocation:
    allocation = CategoryAllocation(category_id=category_id, amount=Money.from_dollars(dollars))
    if allocation_id:
        allocation.id = allocation_id
    return allocation


@pytest.mark.budget
class TestCreateAndGet:
    """Test creating and reading budgets."""

    def test_create_writes_budget_and_children(self, lifecycle, store):
        """Test the budget and each allocation become documents."""
        budget = _budget(allocations=[_allocation("groceries", 500), _allocation("dining", 200)])
        lifecycle.create(budget)

        assert store.get(BUDGETS, budget.id) is not None
        assert store.count(_allocations_path(budget.id)) == 2

    def test_get_restores_allocations_in_order(self, lifecycle):
        """Test allocations come back in the order they were given."""
        allocations = [_allocation("c", 3, "z"), _allocation("a", 1, "m"), _allocation("b", 2, "a")]
        budget = lifecycle.create(_budget(allocations=allocations))

        restored = lifecycle.get(budget.id)
        assert [a.category_id for a in restored.category_allocations] == ["c", "a", "b"]
        assert restored.total_amount == Money.from_dollars(2000)
        assert restored.start_date == FinancialDate.from_string("2024-03-01")
        assert restored.end_date == FinancialDate.from_string("2024-03-31")

    def test_get_missing(self, lifecycle):
        """Test unknown ids raise NotFoundError."""
        with pytest.raises(NotFoundError):
            lifecycle.get("nope")

    def test_invalid_budget_is_rejected_before_any_write(self, lifecycle, store):
        """Test validation happens first."""
        with pytest.raises(InvalidInputError):
            lifecycle.create(_budget(start="2024-04-01", end="2024-03-01"))
        assert store.collection_names() == []

    def test_requires_household(self, store):
        """Test a user outside any household cannot touch budgets."""
        auth = LocalAuthProvider.signed_in_as(Identity(user_id="loner"))
        manager = BudgetLifecycleManager(store, auth, ExpenseService(store, auth))
        with pytest.raises(InvalidStateError):
            manager.create(_budget())

    def test_create_monthly_budget(self, lifecycle):
        """Test monthly budgets span the calendar month."""
        budget = lifecycle.create_monthly_budget(
            Money.from_dollars(1500), start=FinancialDate.from_string("2024-02-10")
        )

        assert budget.start_date == FinancialDate.from_string("2024-02-01")
        assert budget.end_date == FinancialDate.from_string("2024-02-29")
        assert budget.period == BudgetPeriod.MONTHLY
        assert lifecycle.get(budget.id).id == budget.id


@pytest.mark.budget
class TestPartialFailure:
    """Test failures part-way through multi-step operations."""

    def setup_method(self):
        self.store = FailingStore()
        self.auth = LocalAuthProvider.signed_in_as(Identity(user_id="alice", household_id="test-household"))
        self.manager = BudgetLifecycleManager(self.store, self.auth, ExpenseService(self.store, self.auth))

    def test_failure_on_first_write_is_plain_store_error(self):
        """Test nothing committed means no partial failure."""
        self.store.arm(1)
        with pytest.raises(StoreError) as excinfo:
            self.manager.create(_budget(allocations=[_allocation("a", 1)]))

        assert not isinstance(excinfo.value, PartialFailureError)
        assert self.store.collection_names() == []

    def test_allocation_write_failure_after_budget(self):
        """Test the budget stays written and the error says so."""
        budget = _budget(allocations=[_allocation("a", 1), _allocation("b", 2)])
        self.store.arm(2)

        with pytest.raises(PartialFailureError) as excinfo:
            self.manager.create(budget)

        error = excinfo.value
        assert error.completed_steps == ["write budget"]
        assert error.failed_step.startswith("write allocation")
        assert isinstance(error.cause, StoreError)
        assert isinstance(error.__cause__, StoreError)
        # No rollback
        assert self.store.get(BUDGETS, budget.id) is not None
        assert self.store.count(_allocations_path(budget.id)) == 0

    def test_update_failure_after_budget_write(self):
        """Test an allocation upsert failure after the budget write."""
        budget = self.manager.create(_budget(allocations=[_allocation("a", 1)]))
        self.store.arm(2)

        changed = replace(budget, total_amount=Money.from_dollars(2500))
        with pytest.raises(PartialFailureError) as excinfo:
            self.manager.update(changed)

        assert excinfo.value.completed_steps == ["write budget"]
        assert self.store.get(BUDGETS, budget.id).data["totalAmount"] == 2500.0

    def test_delete_failure_leaves_budget(self):
        """Test a child delete failure after another child was deleted."""
        budget = self.manager.create(_budget(allocations=[_allocation("a", 1), _allocation("b", 2)]))
        self.store.arm(2)

        with pytest.raises(PartialFailureError) as excinfo:
            self.manager.delete(budget.id)

        assert len(excinfo.value.completed_steps) == 1
        assert self.store.get(BUDGETS, budget.id) is not None
        assert self.store.count(_allocations_path(budget.id)) == 1


@pytest.mark.budget
class TestUpdate:
    """Test allocation reconciliation on update."""

    def test_reconciles_allocations_by_id(self, lifecycle, store):
        """Test {X, Y} -> {X', Z} keeps X, adds Z, removes Y."""
        x = _allocation("groceries", 500, "alloc-x")
        y = _allocation("dining", 200, "alloc-y")
        budget = lifecycle.create(_budget(allocations=[x, y]))

        x_deliveries = []
        store.subscribe_document(_allocations_path(budget.id), "alloc-x", x_deliveries.append)

        x_changed = _allocation("groceries", 650, "alloc-x")
        z = _allocation("transport", 100, "alloc-z")
        lifecycle.update(replace(budget, category_allocations=[x_changed, z]))

        restored = lifecycle.get(budget.id)
        assert [a.id for a in restored.category_allocations] == ["alloc-x", "alloc-z"]
        assert restored.allocation_for("groceries").amount == Money.from_dollars(650)
        assert store.get(_allocations_path(budget.id), "alloc-y") is None
        # X was upserted in place, never deleted
        assert all(doc is not None for doc in x_deliveries)

    def test_update_keeps_fields_it_does_not_manage(self, lifecycle, store):
        """Test extra fields on a stored allocation survive an amount change."""
        x = _allocation("groceries", 500, "alloc-x")
        y = _allocation("dining", 200, "alloc-y")
        budget = lifecycle.create(_budget(allocations=[x, y]))
        store.update(_allocations_path(budget.id), "alloc-x", {"note": "x"}, merge=True)

        x_changed = _allocation("groceries", 650, "alloc-x")
        lifecycle.update(replace(budget, category_allocations=[x_changed, y]))

        stored = store.get(_allocations_path(budget.id), "alloc-x")
        assert stored.data["note"] == "x"
        assert stored.data["amount"] == 650.0

    def test_update_bumps_updated_at(self, lifecycle):
        """Test the modification timestamp moves forward."""
        budget = _budget()
        budget.updated_at = datetime(2020, 1, 1)
        lifecycle.create(budget)

        updated = lifecycle.update(replace(budget, total_amount=Money.from_dollars(2100)))
        assert updated.updated_at > datetime(2020, 1, 1)
        assert lifecycle.get(budget.id).total_amount == Money.from_dollars(2100)

    def test_update_missing_budget(self, lifecycle, store):
        """Test updating a budget that was never created."""
        with pytest.raises(NotFoundError):
            lifecycle.update(_budget(allocations=[_allocation("a", 1)]))
        assert store.collection_names() == []


@pytest.mark.budget
class TestDelete:
    """Test cascading delete."""

    def test_delete_removes_children_then_budget(self, lifecycle, store):
        """Test nothing is left behind."""
        budget = lifecycle.create(_budget(allocations=[_allocation("a", 1), _allocation("b", 2)]))
        lifecycle.delete(budget.id)

        assert store.get(BUDGETS, budget.id) is None
        assert store.count(_allocations_path(budget.id)) == 0
        with pytest.raises(NotFoundError):
            lifecycle.get(budget.id)

    def test_delete_missing_is_noop(self, lifecycle):
        """Test deleting an unknown budget does not fail."""
        lifecycle.delete("never-existed")


@pytest.mark.budget
class TestCurrentBudget:
    """Test current budget lookup and listing."""

    def test_find_current(self, lifecycle):
        """Test the window is inclusive at both ends, down to the last instant."""
        feb = lifecycle.create(_budget("2024-02-01", "2024-02-29"))
        march = lifecycle.create(_budget("2024-03-01", "2024-03-31"))

        assert lifecycle.find_current(datetime(2024, 2, 15, 12, 0)).id == feb.id
        assert lifecycle.find_current(datetime(2024, 3, 1, 0, 0)).id == march.id
        assert lifecycle.find_current(datetime(2024, 3, 31, 23, 59, 59)).id == march.id
        assert lifecycle.find_current(FinancialDate.from_string("2024-03-31")).id == march.id
        assert lifecycle.find_current(date(2024, 2, 29)).id == feb.id
        assert lifecycle.find_current(datetime(2024, 4, 1, 0, 0)) is None

    def test_find_current_without_budgets(self, lifecycle):
        """Test no budgets means no current budget."""
        assert lifecycle.find_current() is None

    def test_list_budgets_newest_first(self, lifecycle):
        """Test listing is ordered by start date, newest first, and limited."""
        for month in ("01", "02", "03"):
            lifecycle.create(_budget(f"2024-{month}-01", f"2024-{month}-28"))

        listed = lifecycle.list_budgets()
        assert [str(b.start_date) for b in listed] == ["2024-03-01", "2024-02-01", "2024-01-01"]
        assert len(lifecycle.list_budgets(limit=2)) == 2

    def test_current_progress(self, lifecycle, expense_service, expense_factory):
        """Test progress for the current budget joins allocations and spending."""
        lifecycle.create(_budget(allocations=[_allocation("cat-groceries", 500)]))
        expense_service.create(expense_factory("200.00", "2024-03-10 18:00"))
        expense_service.create(expense_factory("100.00", "2024-04-01 09:00"))

        budget, progress = lifecycle.get_current_progress(datetime(2024, 3, 15))

        assert budget.start_date == FinancialDate.from_string("2024-03-01")
        assert progress["cat-groceries"] == pytest.approx(40.0)
        assert progress["overall"] == pytest.approx(10.0)

    def test_current_progress_without_budget(self, lifecycle):
        """Test there is no progress without a current budget."""
        with pytest.raises(InvalidStateError):
            lifecycle.get_current_progress(datetime(2024, 3, 15))

    def test_subscribe_current(self, lifecycle):
        """Test the current budget is delivered as it appears and disappears."""
        seen = []
        sub = lifecycle.subscribe_current(lambda budget: seen.append(budget), now=datetime(2024, 3, 15))

        budget = lifecycle.create(_budget(allocations=[_allocation("a", 1)]))
        lifecycle.delete(budget.id)
        sub.cancel()

        assert seen[0] is None
        assert any(b is not None and b.id == budget.id for b in seen)
        assert seen[-1] is None
