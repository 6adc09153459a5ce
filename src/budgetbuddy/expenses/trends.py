#!/usr/bin/env python3
"""
Spending Trends

Daily spending as a pandas time series: zero-filled per-day totals with a
moving average and running total, for charts and the CLI trend report.
"""

from collections.abc import Iterable
from typing import Any

import pandas as pd

from ..core.dates import FinancialDate
from ..core.errors import InvalidInputError
from .aggregator import daily_spending
from .models import Expense


def daily_spending_frame(
    expenses: Iterable[Expense],
    start_date: FinancialDate,
    end_date: FinancialDate,
    window: int = 7,
) -> pd.DataFrame:
    """
    Build a per-day spending frame for [start_date, end_date].

    Columns (dollars): Amount, MA (rolling mean over `window` days),
    Cumulative. Indexed by Date with one row per calendar day; days without
    spending are 0.

    Raises:
        InvalidInputError: If the range is reversed or window is not positive
    """
    if window <= 0:
        raise InvalidInputError(f"Moving average window must be positive, got {window}")

    totals = daily_spending(expenses, start_date, end_date)
    date_range = pd.date_range(start=start_date.to_iso_string(), end=end_date.to_iso_string(), freq="D")

    amounts = []
    for ts in date_range:
        spent = totals.get(FinancialDate.from_datetime(ts.date()))
        amounts.append(spent.to_float() if spent is not None else 0.0)

    df = pd.DataFrame({"Date": date_range, "Amount": amounts})
    df.set_index("Date", inplace=True)

    df["MA"] = df["Amount"].rolling(window=window, min_periods=1).mean()
    df["Cumulative"] = df["Amount"].cumsum()
    return df


def spending_trend_summary(df: pd.DataFrame) -> dict[str, Any]:
    """
    Headline numbers for a frame from daily_spending_frame().

    Returns:
        Dictionary with days, total, average_daily, max_daily, max_day
        (ISO date or None), zero_days and latest_ma
    """
    if df.empty:
        return {
            "days": 0,
            "total": 0.0,
            "average_daily": 0.0,
            "max_daily": 0.0,
            "max_day": None,
            "zero_days": 0,
            "latest_ma": 0.0,
        }

    max_daily = float(df["Amount"].max())
    return {
        "days": len(df),
        "total": round(float(df["Amount"].sum()), 2),
        "average_daily": round(float(df["Amount"].mean()), 2),
        "max_daily": round(max_daily, 2),
        "max_day": df["Amount"].idxmax().strftime("%Y-%m-%d") if max_daily > 0 else None,
        "zero_days": int((df["Amount"] == 0).sum()),
        "latest_ma": round(float(df["MA"].iloc[-1]), 2),
    }
