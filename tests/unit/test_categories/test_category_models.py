#!/usr/bin/env python3
"""Tests for the Category model."""

from budgetbuddy.categories.models import (
    DEFAULT_CATEGORY_PRESETS,
    Category,
    active_categories,
    default_categories,
    normalize_category_name,
    validate_category,
)


class TestCategory:
    """Test category records and helpers."""

    def test_record_round_trip(self):
        """Test from_record(to_record()) restores the category."""
        original = Category(name="Dining", color_hex="#FF9500", icon="fork.knife", is_archived=True)
        record = original.to_record()

        assert record["isArchived"] is True
        assert record["colorHex"] == "#FF9500"
        assert Category.from_record(original.id, record) == original

    def test_normalize_name(self):
        """Test case and whitespace are ignored."""
        assert normalize_category_name("  Eating   Out ") == "eating out"
        assert Category(name=" GROCERIES").normalized_name == "groceries"

    def test_default_set(self):
        """Test the default categories are fresh objects each time."""
        first = default_categories()
        second = default_categories()

        assert [c.name for c in first] == [preset[0] for preset in DEFAULT_CATEGORY_PRESETS]
        assert len(first) == 10
        assert first[0].id != second[0].id
        assert all(c.is_active for c in first)

    def test_active_filter_and_validation(self):
        """Test archived categories are filtered and blank names are invalid."""
        cats = [Category(name="A"), Category(name="B", is_archived=True)]
        assert [c.name for c in active_categories(cats)] == ["A"]
        assert validate_category(Category(name="A"))
        assert not validate_category(Category(name="   "))
