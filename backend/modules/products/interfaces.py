"""
Products module interfaces.

The API layer depends on IProductService; the service depends on
IProductRepository, which has a Supabase and an in-memory implementation.
"""

from typing import Any, Protocol, Optional, runtime_checkable

from .models import (
    CreateProductRequest,
    Product,
    ProductFilter,
    ProductStats,
    UpdateProductRequest,
)


@runtime_checkable
class IProductRepository(Protocol):
    """Persistence contract for products. Every method is scoped by user."""

    def create(self, user_id: str, data: dict[str, Any]) -> Product:
        """
        Insert a product.

        Raises:
            DuplicateRecordError: If (user_id, barcode) already exists
        """
        ...

    def find(
        self,
        user_id: str,
        category: Optional[str] = None,
        search: Optional[str] = None,
    ) -> list[Product]:
        """
        Products newest first.

        ``category`` is an exact match. ``search`` is a case-insensitive
        substring match against name, barcode, description or category.
        """
        ...

    def get_by_id(self, user_id: str, product_id: str) -> Optional[Product]:
        ...

    def get_by_barcode(self, user_id: str, barcode: str) -> Optional[Product]:
        ...

    def update(self, user_id: str, product_id: str, fields: dict[str, Any]) -> Optional[Product]:
        """Overwrite ``fields`` only. Returns None if the product does not exist."""
        ...

    def delete(self, user_id: str, product_id: str) -> bool:
        """Returns False if the product did not exist."""
        ...


@runtime_checkable
class IProductService(Protocol):
    """Interface for product operations."""

    async def create_product(self, user_id: str, request: CreateProductRequest) -> Product:
        """
        Create a product.

        Raises:
            ProductFieldRequiredError: If barcode or name is blank
            InvalidPriceError: If price is negative
            DuplicateBarcodeError: If the barcode is taken; the existing
                product is attached as ``data``
        """
        ...

    async def list_products(
        self,
        user_id: str,
        filters: Optional[ProductFilter] = None,
    ) -> list[Product]:
        """List products newest first, optionally filtered."""
        ...

    async def get_product(self, user_id: str, product_id: str) -> Product:
        """
        Raises:
            ProductNotFoundError: If missing or owned by another user
        """
        ...

    async def get_product_by_barcode(self, user_id: str, barcode: str) -> Product:
        """
        Raises:
            ProductNotFoundError: If missing or owned by another user
        """
        ...

    async def update_product(
        self,
        user_id: str,
        product_id: str,
        request: UpdateProductRequest,
    ) -> Product:
        """
        Apply a partial update. Omitted fields keep their values.

        Raises:
            ProductNotFoundError: If missing or owned by another user
        """
        ...

    async def delete_product(self, user_id: str, product_id: str) -> None:
        """
        Raises:
            ProductNotFoundError: If missing or owned by another user
        """
        ...

    async def get_stats(self, user_id: str) -> ProductStats:
        """Totals, per-category counts and the most recent products."""
        ...
