"""
Categories module.

User-defined kanban columns plus the reserved "Uncategorized" default.

Public API:
- ICategoryService: Interface for category operations
- Category: Stored category record
- with_default / normalize_category: Default-category helpers
- Category exceptions: CategoryExistsError, CategoryNotFoundError, etc.
"""

from .interfaces import ICategoryService, ICategoryRepository
from .models import Category, CreateCategoryRequest
from .defaults import DEFAULT_CATEGORY, is_default_category, normalize_category, with_default
from .exceptions import (
    CategoryNameRequiredError,
    CategoryExistsError,
    CategoryNotFoundError,
    DefaultCategoryError,
)

__all__ = [
    # Interfaces
    "ICategoryService",
    "ICategoryRepository",
    # Models
    "Category",
    "CreateCategoryRequest",
    # Defaults
    "DEFAULT_CATEGORY",
    "is_default_category",
    "normalize_category",
    "with_default",
    # Exceptions
    "CategoryNameRequiredError",
    "CategoryExistsError",
    "CategoryNotFoundError",
    "DefaultCategoryError",
]
