"""
Categories Package

Household spending categories: model, default set and store-backed service.
"""

from .models import Category, DEFAULT_CATEGORY_PRESETS, default_categories, normalize_category_name
from .service import CategoryService

__all__ = [
    "Category",
    "CategoryService",
    "DEFAULT_CATEGORY_PRESETS",
    "default_categories",
    "normalize_category_name",
]
