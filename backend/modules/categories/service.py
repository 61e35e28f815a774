"""
Category service implementation.

Enforces the rules the store's unique index cannot express on its own:
the virtual default category, and the cascade to products on delete.
"""

import logging

from shared.exceptions import DuplicateRecordError

from .defaults import DEFAULT_CATEGORY, is_default_category, with_default
from .exceptions import (
    CategoryExistsError,
    CategoryNameRequiredError,
    CategoryNotFoundError,
    DefaultCategoryError,
)
from .interfaces import ICategoryRepository, ICategoryService
from .models import Category

logger = logging.getLogger(__name__)


class CategoryService(ICategoryService):
    """Category operations scoped to one user per call."""

    def __init__(self, repository: ICategoryRepository):
        self._repository = repository

    async def create_category(self, user_id: str, name: str) -> Category:
        """Create a category, rejecting blanks, duplicates and the default."""
        name = (name or "").strip()
        if not name:
            raise CategoryNameRequiredError()

        # The default exists for everyone without a record
        if is_default_category(name):
            raise CategoryExistsError(name)

        existing = self._repository.get_by_name(user_id, name)
        if existing:
            raise CategoryExistsError(name, existing)

        try:
            category = self._repository.create(user_id, name)
        except DuplicateRecordError:
            # Lost a race with a concurrent create of the same name
            raise CategoryExistsError(name, self._repository.get_by_name(user_id, name))

        logger.info("Created category %r for user %s", name, user_id)
        return category

    async def list_categories(self, user_id: str) -> list[str]:
        """List category names with the default merged in."""
        return with_default(self._repository.list_names(user_id))

    async def delete_category(self, user_id: str, name: str) -> int:
        """Delete a category and move its products to the default."""
        name = (name or "").strip()
        if is_default_category(name):
            raise DefaultCategoryError()

        moved = self._repository.delete_and_reassign(user_id, name, DEFAULT_CATEGORY)
        if moved is None:
            raise CategoryNotFoundError(name)

        logger.info(
            "Deleted category %r for user %s; %d product(s) moved to %s",
            name, user_id, moved, DEFAULT_CATEGORY,
        )
        return moved
