#!/usr/bin/env python3
"""
Category Domain Model

Categories are shared by reference: expenses and allocations store only the
category id. Categories are never hard-deleted; archiving hides them from
active listings while keeping old references resolvable.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


def _new_id() -> str:
    return str(uuid.uuid4())


@dataclass
class Category:
    """
    Spending category.

    Record fields: name, colorHex, icon, isArchived, createdAt, updatedAt.
    """

    name: str
    color_hex: str = "#007AFF"
    icon: str = "tag"
    is_archived: bool = False
    id: str = field(default_factory=_new_id)
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)

    @property
    def is_active(self) -> bool:
        """True unless archived."""
        return not self.is_archived

    @property
    def normalized_name(self) -> str:
        """Lower-cased, whitespace-collapsed name used for rule matching."""
        return normalize_category_name(self.name)

    def to_record(self) -> dict[str, Any]:
        """Convert to a store record (the id is the document id)."""
        return {
            "name": self.name,
            "colorHex": self.color_hex,
            "icon": self.icon,
            "isArchived": self.is_archived,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    @classmethod
    def from_record(cls, doc_id: str, data: dict[str, Any]) -> "Category":
        """
        Create Category from a store record.

        Raises:
            KeyError: If a required field is missing
        """
        return cls(
            id=doc_id,
            name=data["name"],
            color_hex=data.get("colorHex", "#007AFF"),
            icon=data.get("icon", "tag"),
            is_archived=data.get("isArchived", False),
            created_at=data["createdAt"],
            updated_at=data["updatedAt"],
        )


def normalize_category_name(name: str) -> str:
    """Normalize a category name for comparisons ("  Eating  Out " -> "eating out")."""
    return " ".join(name.split()).lower()


# (name, color, icon) for a new household
DEFAULT_CATEGORY_PRESETS: list[tuple[str, str, str]] = [
    ("Groceries", "#4CD964", "cart"),
    ("Dining", "#FF9500", "fork.knife"),
    ("Transportation", "#007AFF", "car"),
    ("Housing", "#5856D6", "house"),
    ("Utilities", "#FF2D55", "bolt"),
    ("Entertainment", "#AF52DE", "tv"),
    ("Shopping", "#FF3B30", "bag"),
    ("Health", "#34C759", "heart"),
    ("Personal", "#5AC8FA", "person"),
    ("Other", "#8E8E93", "ellipsis"),
]


def default_categories() -> list[Category]:
    """Fresh Category objects (new ids) for the default set."""
    return [Category(name=name, color_hex=color, icon=icon) for name, color, icon in DEFAULT_CATEGORY_PRESETS]


def active_categories(categories: list[Category]) -> list[Category]:
    """Filter out archived categories, keeping order."""
    return [c for c in categories if c.is_active]


def validate_category(category: Category) -> bool:
    """Validate a category has the required fields."""
    return bool(category.id and category.name.strip())
