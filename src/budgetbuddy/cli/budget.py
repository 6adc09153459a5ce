#!/usr/bin/env python3
"""
Budget CLI - Budget Creation and Progress Reporting
"""

from dataclasses import replace

import click

from ..budget.allocation import AllocationStrategy, build_allocations
from ..budget.models import Budget, BudgetPeriod, CategoryAllocation
from ..budget.progress import (
    OVERALL_KEY,
    ProgressLevel,
    daily_allowance,
    days_remaining,
    progress_level,
)
from ..core.dates import FinancialDate
from ..core.money import Money
from ..expenses.aggregator import recent_daily_spending
from .context import DATE, MONEY, AppContext, get_app, parse_assignments, report_errors

STRATEGY_CHOICES = {
    "equal": AllocationStrategy.EQUAL,
    "50-30-20": AllocationStrategy.RULE_50_30_20,
    "custom": AllocationStrategy.CUSTOM,
    "percentage": AllocationStrategy.PERCENTAGE,
}

LEVEL_LABELS = {
    ProgressLevel.ON_TRACK: "ok",
    ProgressLevel.WARNING: "warning",
    ProgressLevel.OVER: "OVER",
}


def _allocations_for(
    app: AppContext, strategy: AllocationStrategy, total: Money, assignments: tuple[str, ...]
) -> list[CategoryAllocation]:
    """Build allocations for a strategy from the household's categories and --allocate values."""
    if strategy in (AllocationStrategy.EQUAL, AllocationStrategy.RULE_50_30_20):
        if assignments:
            raise click.BadParameter("--allocate is only used with custom or percentage", param_hint="--allocate")
        return build_allocations(strategy, total, categories=app.categories.list_categories())

    pairs = parse_assignments(assignments, "--allocate")
    if not pairs:
        raise click.BadParameter(f"{strategy.value} allocation needs at least one --allocate", param_hint="--allocate")

    if strategy == AllocationStrategy.CUSTOM:
        amounts: dict[str, Money | None] = {}
        for name, value in pairs:
            try:
                amounts[app.resolve_category(name, include_archived=False).id] = Money.from_dollars(value)
            except ValueError as e:
                raise click.BadParameter(f"Invalid amount for {name}: {value}", param_hint="--allocate") from e
        return build_allocations(strategy, total, category_amounts=amounts)

    percentages: dict[str, float | None] = {}
    for name, value in pairs:
        try:
            percentages[app.resolve_category(name, include_archived=False).id] = float(value.rstrip("%"))
        except ValueError as e:
            raise click.BadParameter(f"Invalid percentage for {name}: {value}", param_hint="--allocate") from e
    return build_allocations(strategy, total, category_percentages=percentages)


def _keep_allocation_ids(
    existing: list[CategoryAllocation], fresh: list[CategoryAllocation]
) -> list[CategoryAllocation]:
    """Reuse the stored allocation id for categories that keep an allocation."""
    ids_by_category: dict[str, str] = {}
    for allocation in existing:
        ids_by_category.setdefault(allocation.category_id, allocation.id)

    result = []
    for allocation in fresh:
        existing_id = ids_by_category.pop(allocation.category_id, None)
        result.append(replace(allocation, id=existing_id) if existing_id else allocation)
    return result


def _echo_budget_line(budget: Budget, today: FinancialDate) -> None:
    click.echo(
        f"  {budget.start_date} to {budget.end_date}  {str(budget.total_amount):>12}  "
        f"{budget.period.display_name:<8} {budget.status(today).value:<8} {budget.id}"
    )


@click.group()
def budget() -> None:
    """Create budgets and track progress."""
    pass


@budget.command()
@click.argument("total", type=MONEY)
@click.option("--month", "month_day", type=DATE, help="Any day in the budget month (YYYY-MM-DD), defaults to today")
@click.option("--start", type=DATE, help="Custom start date (YYYY-MM-DD), requires --end")
@click.option("--end", type=DATE, help="Custom end date (YYYY-MM-DD), requires --start")
@click.option(
    "--strategy",
    type=click.Choice(list(STRATEGY_CHOICES)),
    default="equal",
    show_default=True,
    help="How to split the total across categories",
)
@click.option("--allocate", "assignments", multiple=True, help="CATEGORY=VALUE for custom or percentage")
@click.pass_context
@report_errors
def create(
    ctx: click.Context,
    total: Money,
    month_day: FinancialDate | None,
    start: FinancialDate | None,
    end: FinancialDate | None,
    strategy: str,
    assignments: tuple[str, ...],
) -> None:
    """
    Create a budget with category allocations.

    Examples:
      budgetbuddy budget create 2000
      budgetbuddy budget create 3000 --strategy 50-30-20 --month 2024-04-01
      budgetbuddy budget create 1500 --strategy custom --allocate Groceries=400 --allocate Dining=150
      budgetbuddy budget create 700 --start 2024-03-01 --end 2024-03-07
    """
    if (start is None) != (end is None):
        raise click.UsageError("--start and --end must be given together")

    app = get_app(ctx)
    allocations = _allocations_for(app, STRATEGY_CHOICES[strategy], total, assignments)

    if start is not None and end is not None:
        if month_day is not None:
            raise click.UsageError("--month cannot be combined with --start/--end")
        created = app.budgets.create(
            Budget(
                total_amount=total,
                start_date=start,
                end_date=end,
                period=BudgetPeriod.CUSTOM,
                category_allocations=allocations,
            )
        )
    else:
        created = app.budgets.create_monthly_budget(total, start=month_day, allocations=allocations)

    click.echo(f"Created budget {created.id}")
    click.echo(f"  {created.start_date} to {created.end_date}, total {created.total_amount}")
    click.echo(f"  {len(created.category_allocations)} allocations, {created.allocated_amount} allocated")


@budget.command()
@click.argument("budget_id")
@click.option("--total", type=MONEY, help="New budget total")
@click.option(
    "--strategy",
    type=click.Choice(list(STRATEGY_CHOICES)),
    help="Rebuild allocations with this strategy",
)
@click.option("--allocate", "assignments", multiple=True, help="CATEGORY=VALUE for custom or percentage")
@click.pass_context
@report_errors
def update(
    ctx: click.Context,
    budget_id: str,
    total: Money | None,
    strategy: str | None,
    assignments: tuple[str, ...],
) -> None:
    """
    Change a budget's total or rebuild its allocations.

    Categories that keep an allocation keep its id; allocations for
    categories no longer listed are removed.

    Examples:
      budgetbuddy budget update BUDGET_ID --total 2200
      budgetbuddy budget update BUDGET_ID --strategy custom --allocate Groceries=450
    """
    if total is None and strategy is None:
        raise click.UsageError("Nothing to change; pass --total and/or --strategy")
    if assignments and strategy is None:
        raise click.UsageError("--allocate needs --strategy custom or percentage")

    app = get_app(ctx)
    current = app.budgets.get(budget_id)
    new_total = total if total is not None else current.total_amount

    allocations = current.category_allocations
    if strategy is not None:
        fresh = _allocations_for(app, STRATEGY_CHOICES[strategy], new_total, assignments)
        allocations = _keep_allocation_ids(current.category_allocations, fresh)

    updated = app.budgets.update(replace(current, total_amount=new_total, category_allocations=allocations))
    click.echo(f"Updated budget {updated.id}")
    click.echo(f"  {updated.start_date} to {updated.end_date}, total {updated.total_amount}")
    click.echo(f"  {len(updated.category_allocations)} allocations, {updated.allocated_amount} allocated")


@budget.command()
@click.option("--date", "day", type=DATE, help="Show the budget covering this date, defaults to today")
@click.option("--id", "budget_id", help="Show a specific budget")
@click.pass_context
@report_errors
def show(ctx: click.Context, day: FinancialDate | None, budget_id: str | None) -> None:
    """
    Show a budget with spending progress per category.

    Examples:
      budgetbuddy budget show
      budgetbuddy budget show --date 2024-03-15
    """
    app = get_app(ctx)
    today = day or FinancialDate.today()
    thresholds = app.config.progress

    if budget_id:
        current = app.budgets.get(budget_id)
        progress = app.budgets.get_progress(current)
    else:
        current, progress = app.budgets.get_current_progress(today)

    names = app.category_names()

    click.echo(f"Budget {current.start_date} to {current.end_date} ({current.period.display_name})")
    click.echo("=" * 60)
    click.echo(f"Total: {current.total_amount}")

    overall = progress[OVERALL_KEY]
    level = progress_level(overall, thresholds.warning_threshold, thresholds.over_threshold)
    click.echo(f"Overall: {overall:.1f}% used [{LEVEL_LABELS[level]}]")

    if current.category_allocations:
        click.echo("\nCategories:")
        seen: set[str] = set()
        for allocation in current.category_allocations:
            if allocation.category_id in seen:
                continue
            seen.add(allocation.category_id)
            percent = progress[allocation.category_id]
            label = LEVEL_LABELS[progress_level(percent, thresholds.warning_threshold, thresholds.over_threshold)]
            name = names.get(allocation.category_id, allocation.category_id)
            click.echo(f"  {name:<20} {str(allocation.amount):>12}  {percent:5.1f}%  [{label}]")

    remaining_days = days_remaining(current, today)
    click.echo(f"\nDays remaining: {remaining_days}")
    if remaining_days > 0:
        click.echo(f"Daily allowance: {daily_allowance(current, overall, today)}")

    if current.contains(today):
        window_start = max(today.add_days(-(thresholds.recent_days - 1)), current.start_date)
        expenses = app.expenses.list_by_date_range(window_start, today)
        click.echo(f"\nLast {thresholds.recent_days} days:")
        for spent_day, spent in recent_daily_spending(expenses, days=thresholds.recent_days, today=today):
            click.echo(f"  {spent_day.to_display_string():<8} {str(spent):>10}")


@budget.command("list")
@click.option("--limit", default=10, show_default=True, help="Maximum budgets to show")
@click.pass_context
@report_errors
def list_command(ctx: click.Context, limit: int) -> None:
    """List budgets, most recent first."""
    app = get_app(ctx)
    budgets = app.budgets.list_budgets(limit=limit)

    if not budgets:
        click.echo("No budgets yet. Run 'budgetbuddy budget create TOTAL' to create one.")
        return

    today = FinancialDate.today()
    click.echo(f"Budgets ({len(budgets)}):")
    for item in budgets:
        _echo_budget_line(item, today)


@budget.command()
@click.argument("budget_id")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
@report_errors
def delete(ctx: click.Context, budget_id: str, yes: bool) -> None:
    """Delete a budget and all its allocations."""
    app = get_app(ctx)
    target = app.budgets.get(budget_id)

    if not yes:
        click.confirm(
            f"Delete budget {target.start_date} to {target.end_date} ({target.total_amount})?",
            abort=True,
        )

    app.budgets.delete(target.id)
    click.echo(f"Deleted budget {target.id}")

