"""
Expenses Package

Expense records, the store-backed expense service, pure spending
aggregation, and pandas-based daily trends.
"""

from .aggregator import (
    SpendingSummary,
    daily_spending,
    filter_by_date_range,
    recent_daily_spending,
    spending_by_category,
    spending_by_spender,
    summarize_spending,
    total_spending,
)
from .models import Expense, validate_expense
from .service import ExpenseService
from .trends import daily_spending_frame, spending_trend_summary

__all__ = [
    "Expense",
    "ExpenseService",
    "SpendingSummary",
    "daily_spending",
    "daily_spending_frame",
    "filter_by_date_range",
    "recent_daily_spending",
    "spending_by_category",
    "spending_by_spender",
    "spending_trend_summary",
    "summarize_spending",
    "total_spending",
    "validate_expense",
]
