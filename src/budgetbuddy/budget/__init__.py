"""
Budget Package

Budgets and their category allocations.

Components:
- models: Budget, CategoryAllocation, BudgetPeriod
- allocation: Equal, 50/30/20, custom and percentage strategies
- progress: Percentage used per category and overall
- lifecycle: Multi-step create/update/delete against the document store
"""

from .allocation import (
    FIFTY_THIRTY_TWENTY,
    AllocationStrategy,
    RuleBucket,
    build_allocations,
    custom_split,
    equal_split,
    percentage_split,
    rule_based_split,
)
from .lifecycle import BudgetLifecycleManager
from .models import Budget, BudgetPeriod, BudgetStatus, CategoryAllocation, validate_budget
from .progress import (
    OVERALL_KEY,
    ProgressLevel,
    calculate_progress,
    daily_allowance,
    days_remaining,
    progress_level,
)

__all__ = [
    "AllocationStrategy",
    "Budget",
    "BudgetLifecycleManager",
    "BudgetPeriod",
    "BudgetStatus",
    "CategoryAllocation",
    "FIFTY_THIRTY_TWENTY",
    "OVERALL_KEY",
    "ProgressLevel",
    "RuleBucket",
    "build_allocations",
    "calculate_progress",
    "custom_split",
    "daily_allowance",
    "days_remaining",
    "equal_split",
    "percentage_split",
    "progress_level",
    "rule_based_split",
    "validate_budget",
]
