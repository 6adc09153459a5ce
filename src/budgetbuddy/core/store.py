#!/usr/bin/env python3
"""
DocumentStore Protocol - the persistence collaborator.

Budget Buddy never talks to a concrete database. Services are handed an object
satisfying DocumentStore: per-collection create/get/update/delete, filtered
queries, and live subscriptions that re-deliver the current result set on every
change.

Collections are addressed by slash-separated paths scoped to a household,
e.g. ``households/h1/budgets/b1/categoryAllocations``.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Protocol

Fields = dict[str, Any]

FILTER_OPERATORS = ("==", "!=", "<", "<=", ">", ">=")


@dataclass(frozen=True)
class Document:
    """A stored document: its id plus field data."""

    id: str
    data: Fields = field(default_factory=dict)


@dataclass(frozen=True)
class FieldFilter:
    """A single `field op value` query condition."""

    field: str
    op: str
    value: Any

    def __post_init__(self) -> None:
        if self.op not in FILTER_OPERATORS:
            raise ValueError(f"Unsupported filter operator: {self.op}")

    def matches(self, data: Fields) -> bool:
        """Check whether a document's data satisfies this filter."""
        if self.field not in data:
            return False
        actual = data[self.field]
        if self.op == "==":
            return actual == self.value
        if self.op == "!=":
            return actual != self.value
        try:
            if self.op == "<":
                return actual < self.value
            if self.op == "<=":
                return actual <= self.value
            if self.op == ">":
                return actual > self.value
            return actual >= self.value
        except TypeError:
            # Mismatched types never match, as in typed document stores
            return False


QueryCallback = Callable[[list[Document]], None]
DocumentCallback = Callable[[Document | None], None]


class Subscription:
    """
    Handle for a live subscription.

    The caller owns it; cancel() stops delivery and is safe to call twice.
    Usable as a context manager.
    """

    def __init__(self, cancel: Callable[[], None], description: str = ""):
        self._cancel = cancel
        self._active = True
        self.description = description

    @property
    def active(self) -> bool:
        """True until cancel() is called."""
        return self._active

    def cancel(self) -> None:
        """Stop receiving updates."""
        if self._active:
            self._active = False
            self._cancel()

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.cancel()

    def __repr__(self) -> str:
        state = "active" if self._active else "cancelled"
        return f"Subscription({self.description!r}, {state})"


class DocumentStore(Protocol):
    """
    Protocol for the remote document database.

    Errors:
        StoreError: Any backend failure
        NotFoundError: update(merge=False) on a missing document
        SubscriptionError: A subscription cannot be established
    """

    def create(self, collection: str, doc_id: str, fields: Fields) -> None:
        """Write a document, replacing any existing one with the same id."""
        ...

    def get(self, collection: str, doc_id: str) -> Document | None:
        """Fetch one document, or None if it does not exist."""
        ...

    def update(self, collection: str, doc_id: str, fields: Fields, merge: bool = False) -> None:
        """
        Apply fields to a document.

        merge=False requires the document to exist. merge=True creates it if
        missing. In both cases fields not mentioned are preserved.
        """
        ...

    def delete(self, collection: str, doc_id: str) -> None:
        """Delete a document. Deleting a missing document is a no-op."""
        ...

    def query(
        self,
        collection: str,
        filters: list[FieldFilter] | None = None,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[Document]:
        """Return documents matching all filters."""
        ...

    def subscribe(
        self,
        collection: str,
        callback: QueryCallback,
        filters: list[FieldFilter] | None = None,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> Subscription:
        """Deliver the query result now and after every change to the collection."""
        ...

    def subscribe_document(self, collection: str, doc_id: str, callback: DocumentCallback) -> Subscription:
        """Deliver one document now and after every change to it."""
        ...


def household_collection(household_id: str, name: str) -> str:
    """Path of a top-level collection inside a household."""
    return f"households/{household_id}/{name}"


def child_collection(parent_collection: str, parent_id: str, name: str) -> str:
    """Path of a sub-collection owned by a document."""
    return f"{parent_collection}/{parent_id}/{name}"
