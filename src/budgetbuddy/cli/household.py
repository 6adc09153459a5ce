#!/usr/bin/env python3
"""
Household CLI - Household Setup and Membership

The CLI identity (user and household id) comes from configuration, so these
commands work on the configured household.
"""

import click

from .context import get_app, report_errors


@click.group()
def household() -> None:
    """Set up and inspect the household."""
    pass


@household.command()
@click.argument("name")
@click.pass_context
@report_errors
def init(ctx: click.Context, name: str) -> None:
    """
    Create the configured household with you as owner.

    Also creates the default categories.

    Examples:
      budgetbuddy household init "Smith Family"
    """
    app = get_app(ctx)
    created = app.households.create_household(name, household_id=app.config.identity.household_id)

    click.echo(f"Created household {created.name}")
    click.echo(f"  Invite code: {created.invite_code}")
    click.echo(f"  Categories: {len(app.categories.list_categories())}")


@household.command()
@click.pass_context
@report_errors
def show(ctx: click.Context) -> None:
    """Show the household and its members."""
    app = get_app(ctx)
    current = app.households.current_household()
    members = app.households.list_members(current.id)

    click.echo(f"Household: {current.name}")
    click.echo(f"  Invite code: {current.invite_code}")
    click.echo(f"  Created by: {current.created_by} on {current.created_at:%Y-%m-%d}")
    click.echo(f"\nMembers ({len(members)}):")
    for member in members:
        you = " (you)" if member.user_id == app.identity.user_id else ""
        click.echo(f"  {member.user_id:<20} {member.role.value:<8} joined {member.joined_at:%Y-%m-%d}{you}")
