"""
Command Line Interface Package

Unified CLI for household budget operations.

Command Structure:
- budgetbuddy: Main entry point with utility commands (version, config)
- budgetbuddy category: List, add, archive and restore categories
- budgetbuddy expense: Record expenses, list them, summarize and chart trends
- budgetbuddy budget: Create budgets, show progress, list and delete

Every command builds its store and services from configuration, so the same
commands work against the JSON file store or the in-memory store.
"""
