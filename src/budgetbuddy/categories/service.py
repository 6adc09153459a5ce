#!/usr/bin/env python3
"""
Category Service

CRUD over the household's categories collection. There is no delete:
archiving keeps historical expenses and allocations resolvable.
"""

import logging
from collections.abc import Callable
from dataclasses import replace
from datetime import datetime

from ..core.auth import AuthProvider, require_household
from ..core.errors import InvalidInputError, NotFoundError
from ..core.store import Document, DocumentStore, FieldFilter, Subscription, household_collection
from .models import Category, default_categories, validate_category

logger = logging.getLogger(__name__)

CATEGORIES_COLLECTION = "categories"


class CategoryService:
    """Household-scoped category operations."""

    def __init__(self, store: DocumentStore, auth: AuthProvider):
        """
        Initialize with explicit collaborators.

        Args:
            store: Document store
            auth: Identity provider (must yield a user in a household)
        """
        self.store = store
        self.auth = auth

    def _collection(self) -> str:
        identity = require_household(self.auth)
        return household_collection(identity.household_id, CATEGORIES_COLLECTION)

    @staticmethod
    def _to_categories(documents: list[Document]) -> list[Category]:
        return [Category.from_record(doc.id, doc.data) for doc in documents]

    def create(self, category: Category) -> Category:
        """
        Persist a new category.

        Raises:
            InvalidInputError: If the category has no name
        """
        if not validate_category(category):
            raise InvalidInputError("Category name must not be empty")
        self.store.create(self._collection(), category.id, category.to_record())
        logger.info("Created category %s (%s)", category.name, category.id)
        return category

    def get(self, category_id: str) -> Category:
        """
        Fetch a category, archived or not.

        Raises:
            NotFoundError: If no such category exists
        """
        doc = self.store.get(self._collection(), category_id)
        if doc is None:
            raise NotFoundError("Category", category_id)
        return Category.from_record(doc.id, doc.data)

    def update(self, category: Category) -> Category:
        """
        Write changed fields of an existing category and bump updated_at.

        Raises:
            NotFoundError: If the category does not exist
            InvalidInputError: If the category has no name
        """
        if not validate_category(category):
            raise InvalidInputError("Category name must not be empty")
        updated = replace(category, updated_at=datetime.now())
        self.store.update(self._collection(), updated.id, updated.to_record())
        return updated

    def archive(self, category: Category) -> Category:
        """Hide a category from active listings."""
        logger.info("Archiving category %s", category.id)
        return self.update(replace(category, is_archived=True))

    def unarchive(self, category: Category) -> Category:
        """Return an archived category to active listings."""
        logger.info("Unarchiving category %s", category.id)
        return self.update(replace(category, is_archived=False))

    def list_categories(self, include_archived: bool = False) -> list[Category]:
        """Categories of the household, active only unless asked otherwise."""
        filters = [] if include_archived else [FieldFilter("isArchived", "==", False)]
        return self._to_categories(self.store.query(self._collection(), filters=filters))

    def list_archived(self) -> list[Category]:
        """Archived categories only."""
        return self._to_categories(
            self.store.query(self._collection(), filters=[FieldFilter("isArchived", "==", True)])
        )

    def category_map(self) -> dict[str, Category]:
        """All categories, archived included, keyed by id."""
        return {category.id: category for category in self.list_categories(include_archived=True)}

    def find_by_name(self, name: str, include_archived: bool = False) -> Category | None:
        """First category whose name matches, ignoring case and spacing."""
        wanted = " ".join(name.split()).lower()
        for category in self.list_categories(include_archived=include_archived):
            if category.normalized_name == wanted:
                return category
        return None

    def setup_defaults(self) -> list[Category]:
        """
        Create the default category set for a household that has none.

        Returns:
            The created categories, or an empty list if categories already exist
        """
        if self.store.query(self._collection(), limit=1):
            logger.debug("Household already has categories; skipping defaults")
            return []

        created = [self.create(category) for category in default_categories()]
        logger.info("Created %d default categories", len(created))
        return created

    def subscribe(
        self, callback: Callable[[list[Category]], None], include_archived: bool = False
    ) -> Subscription:
        """
        Receive the category list now and after every change.

        Raises:
            InvalidStateError: If no household identity is available
            SubscriptionError: If the store cannot set up the subscription
        """
        filters = [] if include_archived else [FieldFilter("isArchived", "==", False)]
        return self.store.subscribe(
            self._collection(),
            lambda documents: callback(self._to_categories(documents)),
            filters=filters,
        )
