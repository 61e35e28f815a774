"""
Categories module interfaces.

The API layer depends on ICategoryService; the service depends on
ICategoryRepository, which has a Supabase and an in-memory implementation.
"""

from typing import Protocol, Optional, runtime_checkable

from .models import Category


@runtime_checkable
class ICategoryRepository(Protocol):
    """Persistence contract for categories. Every method is scoped by user."""

    def list_names(self, user_id: str) -> list[str]:
        """Stored category names for the user, sorted by name."""
        ...

    def get_by_name(self, user_id: str, name: str) -> Optional[Category]:
        """Exact-match lookup of one category."""
        ...

    def create(self, user_id: str, name: str) -> Category:
        """
        Insert a category.

        Raises:
            DuplicateRecordError: If (user_id, name) already exists
        """
        ...

    def delete_and_reassign(self, user_id: str, name: str, fallback: str) -> Optional[int]:
        """
        Delete a category and move its products to ``fallback`` as one unit.

        Returns:
            Number of products reassigned, or None if the category did not exist
            (in which case nothing is changed).
        """
        ...


@runtime_checkable
class ICategoryService(Protocol):
    """
    Interface for category operations.

    The reserved default category is materialized here, never stored.
    """

    async def create_category(self, user_id: str, name: str) -> Category:
        """
        Create a category for the user.

        Raises:
            CategoryNameRequiredError: If the name is blank
            CategoryExistsError: If the name is taken (or is the default);
                the existing record, when stored, is attached as ``data``
        """
        ...

    async def list_categories(self, user_id: str) -> list[str]:
        """Category names sorted by name with the default first, exactly once."""
        ...

    async def delete_category(self, user_id: str, name: str) -> int:
        """
        Delete a category, moving its products to the default.

        Returns:
            Number of products reassigned

        Raises:
            DefaultCategoryError: If ``name`` is the default category
            CategoryNotFoundError: If the user has no such category
        """
        ...
