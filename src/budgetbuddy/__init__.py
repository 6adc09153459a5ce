"""
Budget Buddy - Household Budget Tracking

Shared household budgets with per-category allocations, expense tracking and
progress reporting on top of a pluggable document store.

Domain Packages:
- core: Money and dates, errors, configuration, store and auth collaborators
- categories: Category model and household category service
- expenses: Expense model, service, aggregation and trends
- budget: Budget model, allocation strategies, progress and lifecycle
- cli: Command-line interface

Example Usage:
    from budgetbuddy import Money, FinancialDate
    from budgetbuddy.budget import equal_split, calculate_progress
    from budgetbuddy.core.memory_store import InMemoryDocumentStore

Version: 0.1.0
"""

__version__ = "0.1.0"
__author__ = "Budget Buddy Developers"

from .core.config import Environment, get_config
from .core.dates import FinancialDate
from .core.errors import BudgetBuddyError, ErrorKind
from .core.money import Money

__all__ = [
    "BudgetBuddyError",
    # Configuration
    "Environment",
    "ErrorKind",
    # Primitives
    "FinancialDate",
    "Money",
    "get_config",
]
