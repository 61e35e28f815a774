"""
Categories module exceptions.
"""

from typing import Any

from shared.exceptions import ConflictError, NotFoundError, ValidationError


class CategoryNameRequiredError(ValidationError):
    """Raised when a category name is empty after trimming."""

    def __init__(self):
        super().__init__("Category name is required", code="CATEGORY_NAME_REQUIRED")


class CategoryExistsError(ConflictError):
    """Raised when the user already has a category with this name."""

    def __init__(self, name: str, existing: Any = None):
        super().__init__(
            "Category already exists",
            code="CATEGORY_EXISTS",
            details={"name": name},
            data=existing,
        )


class CategoryNotFoundError(NotFoundError):
    """Raised when the user has no category with this name."""

    def __init__(self, name: str):
        super().__init__(
            "Category not found",
            code="CATEGORY_NOT_FOUND",
            details={"name": name},
        )


class DefaultCategoryError(ValidationError):
    """Raised when trying to delete the reserved default category."""

    def __init__(self):
        super().__init__(
            "Cannot delete the default category",
            code="DEFAULT_CATEGORY_PROTECTED",
        )
