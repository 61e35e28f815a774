"""
Categories module data models.
"""

from datetime import datetime
from pydantic import Field, field_validator

from shared.models import WireModel

CATEGORY_NAME_MAX_LENGTH = 50


class Category(WireModel):
    """A user-defined kanban column."""

    id: str = Field(..., description="Category ID")
    user_id: str = Field(..., description="Owning user ID")
    name: str = Field(..., description="Trimmed category name")
    created_at: datetime = Field(..., description="When the category was created")
    updated_at: datetime = Field(..., description="Last modification time")


class CreateCategoryRequest(WireModel):
    """Request to create a category."""

    name: str = Field(..., description="Category name (trimmed, 1-50 characters)")

    @field_validator("name")
    @classmethod
    def strip_and_check(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Category name is required")
        if len(value) > CATEGORY_NAME_MAX_LENGTH:
            raise ValueError(
                f"Category name must be between 1 and {CATEGORY_NAME_MAX_LENGTH} characters"
            )
        return value
