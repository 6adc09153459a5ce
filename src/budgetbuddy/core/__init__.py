"""
Core Utilities Package

Shared primitives and collaborators used across all Budget Buddy domains.

This package provides:
- Money and FinancialDate value types with integer-cent arithmetic
- The error taxonomy (BudgetBuddyError and its kinds)
- Configuration management for environment-specific settings
- The DocumentStore and AuthProvider protocols with local implementations
"""

from .auth import AuthProvider, Identity, LocalAuthProvider, require_household
from .config import (
    Config,
    Environment,
    StoreBackend,
    get_config,
    reload_config,
)
from .currency import (
    cents_to_dollars_str,
    format_cents,
    parse_dollars_to_cents,
    split_evenly,
    validate_sum_equals_total,
)
from .dates import FinancialDate, as_financial_date
from .errors import (
    BudgetBuddyError,
    DivisionHazardError,
    ErrorKind,
    InvalidInputError,
    InvalidStateError,
    NotFoundError,
    PartialFailureError,
    StoreError,
    SubscriptionError,
)
from .json_store import JsonFileDocumentStore
from .memory_store import InMemoryDocumentStore
from .money import Money
from .store import Document, DocumentStore, FieldFilter, Subscription

__all__ = [
    # Auth
    "AuthProvider",
    # Errors
    "BudgetBuddyError",
    # Configuration
    "Config",
    "DivisionHazardError",
    # Store
    "Document",
    "DocumentStore",
    "Environment",
    "ErrorKind",
    "FieldFilter",
    # Primitives
    "FinancialDate",
    "Identity",
    "InMemoryDocumentStore",
    "InvalidInputError",
    "InvalidStateError",
    "JsonFileDocumentStore",
    "LocalAuthProvider",
    "Money",
    "NotFoundError",
    "PartialFailureError",
    "StoreBackend",
    "StoreError",
    "Subscription",
    "SubscriptionError",
    "as_financial_date",
    # Currency utilities
    "cents_to_dollars_str",
    "format_cents",
    "get_config",
    "parse_dollars_to_cents",
    "reload_config",
    "require_household",
    "split_evenly",
    "validate_sum_equals_total",
]
