"""
Products module data models.
"""

from datetime import datetime
from typing import Optional
from pydantic import Field, field_validator

from shared.models import WireModel

from modules.categories.defaults import DEFAULT_CATEGORY

RECENT_PRODUCTS_LIMIT = 5


def _required_text(value: str, label: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError(f"{label} is required")
    return value


def _non_negative_price(value: Optional[float]) -> Optional[float]:
    if value is not None and value < 0:
        raise ValueError("Price must be a positive number")
    return value


class Product(WireModel):
    """A scanned or manually entered inventory item."""

    id: str = Field(..., description="Product ID")
    user_id: str = Field(..., description="Owning user ID")
    barcode: str = Field(..., description="Barcode, unique per user")
    name: str = Field(..., description="Product name")
    price: float = Field(default=0, ge=0, description="Unit price")
    description: str = Field(default="", description="Free-text description")
    category: str = Field(default=DEFAULT_CATEGORY, description="Category name")
    created_at: datetime = Field(..., description="When the product was created")
    updated_at: datetime = Field(..., description="Last modification time")


class CreateProductRequest(WireModel):
    """Request to create a product."""

    barcode: str = Field(..., description="Barcode (trimmed, required)")
    name: str = Field(..., description="Product name (trimmed, required)")
    price: Optional[float] = Field(default=None, allow_inf_nan=False, description="Price, defaults to 0")
    description: Optional[str] = Field(default=None, description="Description")
    category: Optional[str] = Field(default=None, description="Category, defaults to Uncategorized")

    @field_validator("barcode")
    @classmethod
    def check_barcode(cls, value: str) -> str:
        return _required_text(value, "Barcode")

    @field_validator("name")
    @classmethod
    def check_name(cls, value: str) -> str:
        return _required_text(value, "Product name")

    @field_validator("price")
    @classmethod
    def check_price(cls, value: Optional[float]) -> Optional[float]:
        return _non_negative_price(value)


class UpdateProductRequest(WireModel):
    """
    Partial product update.

    Only fields present in the request body are written. An explicit null
    is treated the same as an omitted field.
    """

    name: Optional[str] = Field(default=None, description="New name")
    price: Optional[float] = Field(default=None, allow_inf_nan=False, description="New price")
    description: Optional[str] = Field(default=None, description="New description")
    category: Optional[str] = Field(default=None, description="New category")

    @field_validator("name")
    @classmethod
    def check_name(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        return _required_text(value, "Product name")

    @field_validator("price")
    @classmethod
    def check_price(cls, value: Optional[float]) -> Optional[float]:
        return _non_negative_price(value)

    def changes(self) -> dict:
        """Fields the client actually supplied, excluding nulls."""
        return {
            key: value
            for key, value in self.model_dump(exclude_unset=True).items()
            if value is not None
        }


class ProductFilter(WireModel):
    """Optional list filters."""

    category: Optional[str] = Field(default=None, description="Category name, or 'all'")
    search: Optional[str] = Field(default=None, description="Case-insensitive substring")


class RecentProduct(WireModel):
    """Compact product entry for the analytics dashboard."""

    id: str
    barcode: str
    name: str
    category: str
    created_at: datetime


class ProductStats(WireModel):
    """Dashboard statistics for one user's catalog."""

    total_products: int = Field(default=0, description="Number of products")
    category_counts: dict[str, int] = Field(
        default_factory=dict,
        description="Product count per category name",
    )
    recent_products: list[RecentProduct] = Field(
        default_factory=list,
        description=f"Newest {RECENT_PRODUCTS_LIMIT} products",
    )
