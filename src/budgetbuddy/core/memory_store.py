#!/usr/bin/env python3
"""
In-Memory DocumentStore

Process-local implementation of the DocumentStore protocol. Used by tests and
as the base for the JSON file store. Data is deep-copied on every read and
write so callers never share mutable state with the store.
"""

import copy
import itertools
import logging
from dataclasses import dataclass

from .errors import NotFoundError, StoreError, SubscriptionError
from .store import (
    Document,
    DocumentCallback,
    FieldFilter,
    Fields,
    QueryCallback,
    Subscription,
)

logger = logging.getLogger(__name__)


@dataclass
class _QueryListener:
    collection: str
    callback: QueryCallback
    filters: list[FieldFilter]
    order_by: str | None
    descending: bool
    limit: int | None


@dataclass
class _DocumentListener:
    collection: str
    doc_id: str
    callback: DocumentCallback


class InMemoryDocumentStore:
    """
    DocumentStore backed by nested dictionaries.

    Listeners are notified synchronously after each write, in registration
    order. A failing listener is logged and does not fail the write.
    """

    def __init__(self) -> None:
        self._collections: dict[str, dict[str, Fields]] = {}
        self._listeners: dict[int, _QueryListener | _DocumentListener] = {}
        self._listener_ids = itertools.count(1)

    # CRUD

    def create(self, collection: str, doc_id: str, fields: Fields) -> None:
        """Write a document, replacing any existing one with the same id."""
        self._check_path(collection, doc_id)
        self._collections.setdefault(collection, {})[doc_id] = copy.deepcopy(fields)
        self._after_write(collection, doc_id)

    def get(self, collection: str, doc_id: str) -> Document | None:
        """Fetch one document, or None if it does not exist."""
        data = self._collections.get(collection, {}).get(doc_id)
        if data is None:
            return None
        return Document(id=doc_id, data=copy.deepcopy(data))

    def update(self, collection: str, doc_id: str, fields: Fields, merge: bool = False) -> None:
        """
        Apply fields to a document.

        Raises:
            NotFoundError: If merge is False and the document does not exist
        """
        self._check_path(collection, doc_id)
        documents = self._collections.setdefault(collection, {})
        if doc_id not in documents:
            if not merge:
                raise NotFoundError("Document", f"{collection}/{doc_id}")
            documents[doc_id] = {}
        documents[doc_id].update(copy.deepcopy(fields))
        self._after_write(collection, doc_id)

    def delete(self, collection: str, doc_id: str) -> None:
        """Delete a document. Deleting a missing document is a no-op."""
        documents = self._collections.get(collection, {})
        if documents.pop(doc_id, None) is not None:
            self._after_write(collection, doc_id)

    def query(
        self,
        collection: str,
        filters: list[FieldFilter] | None = None,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[Document]:
        """Return documents matching all filters."""
        filters = filters or []
        matches = [
            (doc_id, data)
            for doc_id, data in self._collections.get(collection, {}).items()
            if all(f.matches(data) for f in filters)
        ]

        if order_by is not None:
            # Documents without the ordering field are left out, as in Firestore
            matches = [(doc_id, data) for doc_id, data in matches if order_by in data]
            matches.sort(key=lambda item: item[1][order_by], reverse=descending)

        if limit is not None:
            matches = matches[:limit]

        return [Document(id=doc_id, data=copy.deepcopy(data)) for doc_id, data in matches]

    # Subscriptions

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
        if not collection:
            raise SubscriptionError("Cannot subscribe to an unnamed collection")

        listener = _QueryListener(collection, callback, list(filters or []), order_by, descending, limit)
        listener_id = self._register(listener)
        self._deliver(listener)
        return Subscription(lambda: self._unregister(listener_id), description=collection)

    def subscribe_document(self, collection: str, doc_id: str, callback: DocumentCallback) -> Subscription:
        """Deliver one document now and after every change to it."""
        if not collection or not doc_id:
            raise SubscriptionError("Cannot subscribe without a collection and document id")

        listener = _DocumentListener(collection, doc_id, callback)
        listener_id = self._register(listener)
        self._deliver(listener)
        return Subscription(lambda: self._unregister(listener_id), description=f"{collection}/{doc_id}")

    def listener_count(self) -> int:
        """Number of live subscriptions (for diagnostics)."""
        return len(self._listeners)

    # Introspection

    def collection_names(self) -> list[str]:
        """Names of collections holding at least one document."""
        return sorted(name for name, docs in self._collections.items() if docs)

    def count(self, collection: str) -> int:
        """Number of documents in a collection."""
        return len(self._collections.get(collection, {}))

    # Internals

    def _check_path(self, collection: str, doc_id: str) -> None:
        if not collection or not doc_id:
            raise StoreError(f"Invalid document path: {collection!r}/{doc_id!r}")
        if "/" in doc_id:
            raise StoreError(f"Document id may not contain '/': {doc_id!r}")

    def _register(self, listener: _QueryListener | _DocumentListener) -> int:
        listener_id = next(self._listener_ids)
        self._listeners[listener_id] = listener
        return listener_id

    def _unregister(self, listener_id: int) -> None:
        self._listeners.pop(listener_id, None)

    def _after_write(self, collection: str, doc_id: str) -> None:
        for listener in list(self._listeners.values()):
            if listener.collection != collection:
                continue
            if isinstance(listener, _DocumentListener) and listener.doc_id != doc_id:
                continue
            self._deliver(listener)

    def _deliver(self, listener: _QueryListener | _DocumentListener) -> None:
        try:
            if isinstance(listener, _DocumentListener):
                listener.callback(self.get(listener.collection, listener.doc_id))
            else:
                listener.callback(
                    self.query(
                        listener.collection,
                        filters=listener.filters,
                        order_by=listener.order_by,
                        descending=listener.descending,
                        limit=listener.limit,
                    )
                )
        except Exception:
            logger.exception("Subscriber callback failed for %s", listener.collection)
