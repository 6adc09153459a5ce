"""
Pytest Configuration and Shared Fixtures

Provides common test fixtures and configuration for the entire test suite.
"""

from datetime import datetime

import pytest

from budgetbuddy.budget.lifecycle import BudgetLifecycleManager
from budgetbuddy.categories.models import Category
from budgetbuddy.categories.service import CategoryService
from budgetbuddy.core.auth import Identity, LocalAuthProvider
from budgetbuddy.core.dates import FinancialDate
from budgetbuddy.core.memory_store import InMemoryDocumentStore
from budgetbuddy.core.money import Money
from budgetbuddy.expenses.models import Expense
from budgetbuddy.expenses.service import ExpenseService

HOUSEHOLD_ID = "test-household"
USER_ID = "alice"


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch, tmp_path):
    """Set up test environment variables."""
    # Ensure tests don't use real data
    monkeypatch.setenv("BUDGETBUDDY_ENV", "test")
    monkeypatch.setenv("BUDGETBUDDY_DATA_DIR", str(tmp_path / "budgetbuddy_data"))
    monkeypatch.setenv("LOG_LEVEL", "INFO")
    monkeypatch.delenv("BUDGETBUDDY_STORE", raising=False)


@pytest.fixture
def store() -> InMemoryDocumentStore:
    """Empty in-memory document store."""
    return InMemoryDocumentStore()


@pytest.fixture
def identity() -> Identity:
    """Signed-in user belonging to the test household."""
    return Identity(user_id=USER_ID, household_id=HOUSEHOLD_ID, name="Alice")


@pytest.fixture
def auth(identity) -> LocalAuthProvider:
    """Auth provider already signed in as the test user."""
    return LocalAuthProvider.signed_in_as(identity)


@pytest.fixture
def category_service(store, auth) -> CategoryService:
    return CategoryService(store, auth)


@pytest.fixture
def expense_service(store, auth) -> ExpenseService:
    return ExpenseService(store, auth)


@pytest.fixture
def lifecycle(store, auth, expense_service) -> BudgetLifecycleManager:
    return BudgetLifecycleManager(store, auth, expense_service)


@pytest.fixture
def march() -> tuple[FinancialDate, FinancialDate]:
    """Bounds of March 2024."""
    return FinancialDate.from_string("2024-03-01"), FinancialDate.from_string("2024-03-31")


@pytest.fixture
def sample_categories() -> list[Category]:
    """Groceries, Dining and Housing with fixed ids."""
    return [
        Category(name="Groceries", id="cat-groceries"),
        Category(name="Dining", id="cat-dining"),
        Category(name="Housing", id="cat-housing"),
    ]


def make_expense(
    dollars: str,
    when: str,
    category_id: str = "cat-groceries",
    spender_id: str = USER_ID,
    description: str = "",
) -> Expense:
    """Build an expense from a dollar string and a 'YYYY-MM-DD HH:MM' timestamp."""
    return Expense(
        amount=Money.from_dollars(dollars),
        description=description,
        date=datetime.strptime(when, "%Y-%m-%d %H:%M"),
        category_id=category_id,
        spender_id=spender_id,
    )


@pytest.fixture
def expense_factory():
    """Factory for test expenses."""
    return make_expense


# Test markers for categorizing tests
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests for complete workflows")
    config.addinivalue_line("markers", "currency: Tests for currency handling and precision")
    config.addinivalue_line("markers", "store: Tests for document store behavior")
    config.addinivalue_line("markers", "budget: Tests for budgets, allocations and progress")
    config.addinivalue_line("markers", "expenses: Tests for expense recording and aggregation")
    config.addinivalue_line("markers", "households: Tests for household creation and membership")
    config.addinivalue_line("markers", "cli: Tests for the command-line interface")
