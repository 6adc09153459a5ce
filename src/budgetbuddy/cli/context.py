#!/usr/bin/env python3
"""
CLI Application Context

Builds the store, identity and services once per invocation and hands them
to commands. Also holds the shared click parameter types and the error
reporting decorator.
"""

import functools
import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Any

import click

from ..budget.lifecycle import BudgetLifecycleManager
from ..categories.models import Category
from ..categories.service import CategoryService
from ..core.auth import Identity, LocalAuthProvider, require_household
from ..core.config import Config, StoreBackend
from ..core.dates import FinancialDate
from ..core.errors import BudgetBuddyError
from ..core.json_store import JsonFileDocumentStore
from ..core.memory_store import InMemoryDocumentStore
from ..core.money import Money
from ..core.store import DocumentStore
from ..expenses.service import ExpenseService
from ..households.service import HouseholdService

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Everything a command needs, wired together explicitly."""

    config: Config
    store: DocumentStore
    auth: LocalAuthProvider
    categories: CategoryService
    expenses: ExpenseService
    budgets: BudgetLifecycleManager
    households: HouseholdService

    @property
    def identity(self) -> Identity:
        """The configured CLI identity."""
        return require_household(self.auth)

    def resolve_category(self, name_or_id: str, include_archived: bool = True) -> Category:
        """
        Find a category by name, falling back to an id lookup.

        Raises:
            NotFoundError: If nothing matches
        """
        category = self.categories.find_by_name(name_or_id, include_archived=include_archived)
        if category is not None:
            return category
        return self.categories.get(name_or_id)

    def category_names(self) -> dict[str, str]:
        """Category id -> name, archived included."""
        return {cid: category.name for cid, category in self.categories.category_map().items()}


def build_store(config: Config) -> DocumentStore:
    """Create the document store selected by configuration."""
    if config.store.backend == StoreBackend.MEMORY:
        logger.debug("Using in-memory document store")
        return InMemoryDocumentStore()
    logger.debug("Using JSON document store at %s", config.store.store_file)
    return JsonFileDocumentStore(config.store.store_file)


def build_context(config: Config, store: DocumentStore | None = None) -> AppContext:
    """Wire store, identity and services for one CLI invocation."""
    store = store if store is not None else build_store(config)
    auth = LocalAuthProvider.signed_in_as(
        Identity(
            user_id=config.identity.user_id,
            household_id=config.identity.household_id,
            name=config.identity.display_name,
        )
    )
    expenses = ExpenseService(store, auth)
    return AppContext(
        config=config,
        store=store,
        auth=auth,
        categories=CategoryService(store, auth),
        expenses=expenses,
        budgets=BudgetLifecycleManager(store, auth, expenses),
        households=HouseholdService(store, auth),
    )


def get_app(ctx: click.Context) -> AppContext:
    """Get (building on first use) the AppContext stored on the root context."""
    root = ctx.find_root()
    root.ensure_object(dict)
    if "app" not in root.obj:
        root.obj["app"] = build_context(root.obj["config"])
    return root.obj["app"]


def report_errors(func: Callable[..., Any]) -> Callable[..., Any]:
    """Turn BudgetBuddyError into 'Error [kind]: message' and exit code 1."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except BudgetBuddyError as e:
            logger.debug("Command failed: %r", e)
            click.echo(f"Error [{e.kind.value}]: {e.message}", err=True)
            raise click.exceptions.Exit(1) from e

    return wrapper


class MoneyParamType(click.ParamType):
    """Dollar amounts like 2000, 45.99 or $1,250.00."""

    name = "amount"

    def convert(self, value: Any, param: click.Parameter | None, ctx: click.Context | None) -> Money:
        if isinstance(value, Money):
            return value
        try:
            return Money.from_dollars(str(value))
        except ValueError:
            self.fail(f"{value!r} is not a valid dollar amount", param, ctx)


class DateParamType(click.ParamType):
    """Calendar dates in YYYY-MM-DD format."""

    name = "date"

    def convert(self, value: Any, param: click.Parameter | None, ctx: click.Context | None) -> FinancialDate:
        if isinstance(value, FinancialDate):
            return value
        try:
            return FinancialDate.from_string(str(value))
        except ValueError:
            self.fail(f"{value!r} is not a valid date. Use YYYY-MM-DD", param, ctx)


MONEY = MoneyParamType()
DATE = DateParamType()


def parse_assignments(values: tuple[str, ...], option: str) -> list[tuple[str, str]]:
    """
    Split repeated NAME=VALUE options.

    Raises:
        click.BadParameter: If an entry has no '='
    """
    pairs = []
    for value in values:
        name, sep, amount = value.partition("=")
        if not sep or not name.strip() or not amount.strip():
            raise click.BadParameter(f"Expected NAME=VALUE, got {value!r}", param_hint=option)
        pairs.append((name.strip(), amount.strip()))
    return pairs


def expense_moment(day: FinancialDate | None) -> datetime:
    """Timestamp for a new expense: now, or the start of the given day."""
    if day is None:
        return datetime.now()
    return day.start_of_day()

