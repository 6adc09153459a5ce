#!/usr/bin/env python3
"""
Main CLI Entry Point for Budget Buddy

Provides the unified command-line interface for household budgeting.
"""

import logging
import os

import click

from ..core.config import StoreBackend, reload_config
from ..core.json_store import JsonFileDocumentStore
from ..core.json_utils import format_json
from .context import report_errors


@click.group()
@click.option(
    "--config-env",
    type=click.Choice(["development", "test", "production"]),
    help="Override environment configuration",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config_env: str | None, verbose: bool, debug: bool) -> None:
    """
    Budget Buddy - Household Budget Tracker

    Shared budgets with per-category allocations, expense tracking and
    progress reporting for the whole household.
    """
    # Ensure context object exists
    ctx.ensure_object(dict)

    # Set environment if specified
    if config_env:
        os.environ["BUDGETBUDDY_ENV"] = config_env

    # Configure debug logging if requested
    if debug:
        os.environ["LOG_LEVEL"] = "DEBUG"

    # Environment may have changed since the last invocation in this process
    ctx.obj["config"] = reload_config()

    if debug:
        logging.getLogger().setLevel(logging.DEBUG)
        logging.getLogger("budgetbuddy").setLevel(logging.DEBUG)

    # Store global options
    ctx.obj["verbose"] = verbose
    ctx.obj["debug"] = debug

    if verbose:
        click.echo(f"Environment: {ctx.obj['config'].environment.value}")
        click.echo(f"Data directory: {ctx.obj['config'].data_dir}")

    if debug:
        click.echo("Debug logging enabled")


@main.command()
@click.pass_context
def version(ctx: click.Context) -> None:
    """Show version information."""
    from budgetbuddy import __author__, __version__

    click.echo(f"Budget Buddy v{__version__}")
    click.echo(f"Author: {__author__}")


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Print configuration as JSON")
@click.pass_context
@report_errors
def config(ctx: click.Context, as_json: bool) -> None:
    """Show current configuration."""
    config_obj = ctx.obj["config"]

    if as_json:
        click.echo(format_json(config_obj.to_dict(), sort_keys=True))
        return

    click.echo("Current Configuration:")
    click.echo(f"  Environment: {config_obj.environment.value}")
    click.echo(f"  Data Directory: {config_obj.data_dir}")
    click.echo(f"  Store Backend: {config_obj.store.backend.value}")
    click.echo(f"  Store File: {config_obj.store.store_file}")
    if config_obj.store.backend == StoreBackend.JSON:
        click.echo(f"  Store Contents: {JsonFileDocumentStore(config_obj.store.store_file).summary_text()}")
    click.echo(f"  User: {config_obj.identity.user_id} ({config_obj.identity.display_name})")
    click.echo(f"  Household: {config_obj.identity.household_id}")
    click.echo(
        f"  Progress Thresholds: warning {config_obj.progress.warning_threshold:g}%, "
        f"over {config_obj.progress.over_threshold:g}%"
    )
    click.echo(f"  Debug Mode: {config_obj.debug}")
    click.echo(f"  Log Level: {config_obj.log_level}")


# Import domain command groups
from .budget import budget  # noqa: E402
from .category import category  # noqa: E402
from .expense import expense  # noqa: E402
from .household import household  # noqa: E402

main.add_command(category)
main.add_command(expense)
main.add_command(budget)
main.add_command(household)


if __name__ == "__main__":
    main()
