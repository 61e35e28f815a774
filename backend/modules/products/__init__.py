"""
Products module.

Barcode-keyed inventory items, each filed under one category.

Public API:
- IProductService: Interface for product operations
- Product, ProductStats: Data models
- Product exceptions: DuplicateBarcodeError, ProductNotFoundError, etc.
"""

from .interfaces import IProductService, IProductRepository
from .models import (
    Product,
    CreateProductRequest,
    UpdateProductRequest,
    ProductFilter,
    ProductStats,
    RecentProduct,
)
from .exceptions import (
    ProductFieldRequiredError,
    InvalidPriceError,
    DuplicateBarcodeError,
    ProductNotFoundError,
)

__all__ = [
    # Interfaces
    "IProductService",
    "IProductRepository",
    # Models
    "Product",
    "CreateProductRequest",
    "UpdateProductRequest",
    "ProductFilter",
    "ProductStats",
    "RecentProduct",
    # Exceptions
    "ProductFieldRequiredError",
    "InvalidPriceError",
    "DuplicateBarcodeError",
    "ProductNotFoundError",
]
