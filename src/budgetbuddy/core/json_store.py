#!/usr/bin/env python3
"""
JSON File DocumentStore

Persists the in-memory document tree to a single pretty-printed JSON file so
that the CLI keeps its data between invocations. Semantics are identical to
InMemoryDocumentStore; every write rewrites the file.
"""

import copy
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from json import JSONDecodeError
from pathlib import Path

from .errors import StoreError
from .json_utils import read_json, write_json
from .memory_store import InMemoryDocumentStore
from .store import Fields

logger = logging.getLogger(__name__)


class JsonFileDocumentStore(InMemoryDocumentStore):
    """
    DocumentStore persisted to ``<data_dir>/store/documents.json``.

    A write that cannot be saved leaves both the file and the in-memory
    tree as they were before the write, and notifies no listeners.
    """

    def __init__(self, store_file: Path):
        """
        Initialize and load any existing data.

        Args:
            store_file: Path of the JSON file holding all collections

        Raises:
            StoreError: If the file exists but cannot be parsed
        """
        super().__init__()
        self.store_file = store_file
        if self.store_file.exists():
            self._load()

    def _load(self) -> None:
        try:
            data = read_json(self.store_file)
        except (OSError, JSONDecodeError, ValueError) as e:
            raise StoreError(f"Could not read store file {self.store_file}: {e}") from e

        if not isinstance(data, dict):
            raise StoreError(f"Store file {self.store_file} does not contain a collection map")

        self._collections = {name: dict(documents) for name, documents in data.items()}
        logger.debug("Loaded %d collections from %s", len(self._collections), self.store_file)

    def _save(self) -> None:
        try:
            write_json(self.store_file, self._collections, sort_keys=True)
        except OSError as e:
            raise StoreError(f"Could not write store file {self.store_file}: {e}") from e

    @contextmanager
    def _restore_on_failure(self) -> Iterator[None]:
        snapshot = copy.deepcopy(self._collections)
        try:
            yield
        except StoreError:
            self._collections = snapshot
            raise

    # CRUD

    def create(self, collection: str, doc_id: str, fields: Fields) -> None:
        """Write a document and save the file."""
        with self._restore_on_failure():
            super().create(collection, doc_id, fields)

    def update(self, collection: str, doc_id: str, fields: Fields, merge: bool = False) -> None:
        """Apply fields to a document and save the file."""
        with self._restore_on_failure():
            super().update(collection, doc_id, fields, merge=merge)

    def delete(self, collection: str, doc_id: str) -> None:
        """Delete a document and save the file."""
        with self._restore_on_failure():
            super().delete(collection, doc_id)

    def _after_write(self, collection: str, doc_id: str) -> None:
        self._save()
        super()._after_write(collection, doc_id)

    # Introspection

    def item_count(self) -> int:
        """Total number of documents across all collections."""
        return sum(len(documents) for documents in self._collections.values())

    def summary_text(self) -> str:
        """Get human-readable summary."""
        if not self.store_file.exists():
            return f"No data yet ({self.store_file})"
        return f"{self.item_count()} documents in {len(self.collection_names())} collections ({self.store_file})"
