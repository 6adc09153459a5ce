#!/usr/bin/env python3
"""
Error Taxonomy

Every failure raised by Budget Buddy is a BudgetBuddyError carrying a
human-readable message and a machine-distinguishable ErrorKind, so a
presentation layer can decide between "show error" and "allow retry".
"""

from enum import Enum
from typing import Any


class ErrorKind(Enum):
    """Machine-readable error categories."""

    NOT_FOUND = "not_found"
    INVALID_STATE = "invalid_state"
    INVALID_INPUT = "invalid_input"
    PARTIAL_FAILURE = "partial_failure"
    DIVISION_HAZARD = "division_hazard"
    STORE_FAILURE = "store_failure"


class BudgetBuddyError(Exception):
    """Base class for all Budget Buddy errors."""

    kind: ErrorKind = ErrorKind.INVALID_STATE
    retryable: bool = False

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for presentation layers."""
        return {
            "kind": self.kind.value,
            "message": self.message,
            "retryable": self.retryable,
        }


class NotFoundError(BudgetBuddyError):
    """A referenced category, budget or expense does not exist."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, entity: str, entity_id: str):
        super().__init__(f"{entity} not found: {entity_id}")
        self.entity = entity
        self.entity_id = entity_id


class InvalidStateError(BudgetBuddyError):
    """A precondition of the operation is not met (e.g. no current budget)."""

    kind = ErrorKind.INVALID_STATE


class InvalidInputError(BudgetBuddyError):
    """Malformed input to a pure computation or a write (e.g. negative date range)."""

    kind = ErrorKind.INVALID_INPUT


class DivisionHazardError(BudgetBuddyError):
    """Progress was requested against a zero (or negative) amount."""

    kind = ErrorKind.DIVISION_HAZARD

    def __init__(self, message: str, key: str):
        super().__init__(message)
        self.key = key


class StoreError(BudgetBuddyError):
    """The document store collaborator failed an operation."""

    kind = ErrorKind.STORE_FAILURE
    retryable = True


class SubscriptionError(StoreError):
    """A change subscription could not be set up."""


class PartialFailureError(BudgetBuddyError):
    """
    A multi-step lifecycle operation failed after committing some steps.

    Nothing is rolled back. The store is left in an intermediate state and the
    caller may retry or reconcile manually.
    """

    kind = ErrorKind.PARTIAL_FAILURE
    retryable = True

    def __init__(self, operation: str, completed_steps: list[str], failed_step: str, cause: Exception):
        super().__init__(
            f"{operation} failed at step '{failed_step}' after {len(completed_steps)} "
            f"completed step(s): {cause}"
        )
        self.operation = operation
        self.completed_steps = list(completed_steps)
        self.failed_step = failed_step
        self.cause = cause

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary including step details."""
        result = super().to_dict()
        result["operation"] = self.operation
        result["completed_steps"] = self.completed_steps
        result["failed_step"] = self.failed_step
        return result
