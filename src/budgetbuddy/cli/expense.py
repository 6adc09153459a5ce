#!/usr/bin/env python3
"""
Expense CLI - Expense Recording and Spending Reports
"""

from dataclasses import replace
from typing import Any

import click

from ..core.currency import format_cents
from ..core.dates import FinancialDate
from ..core.money import Money
from ..expenses.models import Expense
from ..expenses.trends import daily_spending_frame, spending_trend_summary
from .context import DATE, MONEY, expense_moment, get_app, report_errors


def _default_range(start: FinancialDate | None, end: FinancialDate | None) -> tuple[FinancialDate, FinancialDate]:
    """Fill in a missing start or end with the current month's bounds."""
    first_day, last_day = FinancialDate.today().month_bounds()
    return start or first_day, end or last_day


@click.group()
def expense() -> None:
    """Record expenses and report on spending."""
    pass


@expense.command()
@click.argument("amount", type=MONEY)
@click.option("--category", "-c", "category_name", required=True, help="Category name or id")
@click.option("--description", "-d", default="", help="What the money was spent on")
@click.option("--date", "day", type=DATE, help="Date of the expense (YYYY-MM-DD), defaults to now")
@click.option("--location", help="Where the money was spent")
@click.pass_context
@report_errors
def add(
    ctx: click.Context,
    amount: Money,
    category_name: str,
    description: str,
    day: FinancialDate | None,
    location: str | None,
) -> None:
    """
    Record an expense for the current user.

    Examples:
      budgetbuddy expense add 45.99 --category Groceries -d "Weekly shop"
      budgetbuddy expense add 12 -c Dining --date 2024-03-05
    """
    app = get_app(ctx)
    category = app.resolve_category(category_name, include_archived=False)

    created = app.expenses.create(
        Expense(
            amount=amount,
            description=description,
            date=expense_moment(day),
            category_id=category.id,
            spender_id=app.identity.user_id,
            location=location,
        )
    )
    click.echo(f"Recorded {created.amount} in {category.name} on {created.day} ({created.id})")


@expense.command()
@click.argument("expense_id")
@click.option("--amount", type=MONEY, help="New amount")
@click.option("--category", "-c", "category_name", help="New category name or id")
@click.option("--description", "-d", help="New description")
@click.option("--date", "day", type=DATE, help="New date (YYYY-MM-DD)")
@click.option("--location", help="New location")
@click.pass_context
@report_errors
def edit(
    ctx: click.Context,
    expense_id: str,
    amount: Money | None,
    category_name: str | None,
    description: str | None,
    day: FinancialDate | None,
    location: str | None,
) -> None:
    """
    Change fields of a recorded expense.

    Examples:
      budgetbuddy expense edit EXPENSE_ID --amount 52.10
      budgetbuddy expense edit EXPENSE_ID -c Dining --date 2024-03-06
    """
    changes: dict[str, Any] = {}
    if amount is not None:
        changes["amount"] = amount
    if description is not None:
        changes["description"] = description
    if day is not None:
        changes["date"] = expense_moment(day)
    if location is not None:
        changes["location"] = location
    if not changes and category_name is None:
        raise click.UsageError("Nothing to change; pass at least one option")

    app = get_app(ctx)
    current = app.expenses.get(expense_id)
    if category_name is not None:
        changes["category_id"] = app.resolve_category(category_name, include_archived=False).id

    updated = app.expenses.update(replace(current, **changes))
    click.echo(f"Updated expense {updated.id}: {updated.amount} on {updated.day}")


@expense.command()
@click.argument("expense_id")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
@report_errors
def delete(ctx: click.Context, expense_id: str, yes: bool) -> None:
    """Delete a recorded expense."""
    app = get_app(ctx)
    target = app.expenses.get(expense_id)

    if not yes:
        label = target.description or "no description"
        click.confirm(f"Delete {target.amount} on {target.day} ({label})?", abort=True)

    app.expenses.delete(target.id)
    click.echo(f"Deleted expense {target.id}")


@expense.command("list")
@click.option("--start", type=DATE, help="Start date (YYYY-MM-DD)")
@click.option("--end", type=DATE, help="End date (YYYY-MM-DD)")
@click.option("--limit", default=50, show_default=True, help="Maximum expenses without a date range")
@click.pass_context
@report_errors
def list_command(
    ctx: click.Context, start: FinancialDate | None, end: FinancialDate | None, limit: int
) -> None:
    """List expenses, newest first."""
    app = get_app(ctx)

    if start or end:
        start, end = _default_range(start, end)
        expenses = app.expenses.list_by_date_range(start, end)
    else:
        expenses = app.expenses.list_expenses(limit=limit)

    if not expenses:
        click.echo("No expenses found.")
        return

    names = app.category_names()
    for item in expenses:
        category_name = names.get(item.category_id, "(unknown)")
        click.echo(f"  {item.day}  {str(item.amount):>10}  {category_name:<16} {item.description:<24} {item.id}")

    total = sum((e.amount for e in expenses), Money.zero())
    click.echo(f"\n{len(expenses)} expenses, {total}")


@expense.command()
@click.option("--start", type=DATE, help="Start date (YYYY-MM-DD), defaults to start of month")
@click.option("--end", type=DATE, help="End date (YYYY-MM-DD), defaults to end of month")
@click.pass_context
@report_errors
def summary(ctx: click.Context, start: FinancialDate | None, end: FinancialDate | None) -> None:
    """
    Spending totals by category and by spender.

    Examples:
      budgetbuddy expense summary
      budgetbuddy expense summary --start 2024-03-01 --end 2024-03-31
    """
    app = get_app(ctx)
    start, end = _default_range(start, end)
    result = app.expenses.summary(start, end)
    names = app.category_names()

    click.echo(f"Spending {start} to {end}")
    click.echo("=" * 40)
    click.echo(f"Total: {result.total} ({result.expense_count} expenses)")

    if result.by_category:
        click.echo("\nBy category:")
        for category_id, spent in sorted(result.by_category.items(), key=lambda kv: kv[1], reverse=True):
            click.echo(f"  {names.get(category_id, category_id):<20} {format_cents(spent.to_cents()):>12}")

    if result.by_spender:
        click.echo("\nBy spender:")
        for spender_id, spent in sorted(result.by_spender.items(), key=lambda kv: kv[1], reverse=True):
            click.echo(f"  {spender_id:<20} {format_cents(spent.to_cents()):>12}")


@expense.command()
@click.option(
    "--days",
    type=click.IntRange(min=1),
    help="Number of days to show, defaults to the configured recent window",
)
@click.option("--window", type=click.IntRange(min=1), help="Moving average window in days")
@click.pass_context
@report_errors
def trend(ctx: click.Context, days: int | None, window: int | None) -> None:
    """Daily spending for recent days with a moving average."""
    app = get_app(ctx)
    days = days or app.config.progress.recent_days
    window = window or app.config.progress.trend_window_days

    today = FinancialDate.today()
    start = today.add_days(-(days - 1))
    expenses = app.expenses.list_by_date_range(start, today)

    frame = daily_spending_frame(expenses, start, today, window=window)

    click.echo(f"Daily spending, last {days} days (MA window {window})")
    click.echo(f"  {'Date':<10} {'Amount':>10} {'MA':>10} {'Total':>10}")
    for ts, row in frame.iterrows():
        click.echo(f"  {ts:%Y-%m-%d} {row['Amount']:>10.2f} {row['MA']:>10.2f} {row['Cumulative']:>10.2f}")

    stats = spending_trend_summary(frame)
    click.echo(
        f"\nAverage ${stats['average_daily']:.2f}/day, "
        f"peak ${stats['max_daily']:.2f} on {stats['max_day'] or '-'}, "
        f"{stats['zero_days']} days without spending"
    )
