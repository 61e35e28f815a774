"""
Product service implementation.

Owns the catalog rules for products: trimming and defaults on write,
per-user barcode uniqueness, partial updates and dashboard statistics.
"""

import logging
from collections import Counter
from typing import Optional

from shared.exceptions import DuplicateRecordError
from modules.categories.defaults import DEFAULT_CATEGORY, normalize_category

from .exceptions import (
    DuplicateBarcodeError,
    InvalidPriceError,
    ProductFieldRequiredError,
    ProductNotFoundError,
)
from .interfaces import IProductRepository, IProductService
from .models import (
    RECENT_PRODUCTS_LIMIT,
    CreateProductRequest,
    Product,
    ProductFilter,
    ProductStats,
    RecentProduct,
    UpdateProductRequest,
)

logger = logging.getLogger(__name__)

ALL_CATEGORIES = "all"


def _check_price(price: Optional[float]) -> float:
    if price is None:
        return 0.0
    if price < 0:
        raise InvalidPriceError(price)
    return float(price)


class ProductService(IProductService):
    """Product operations scoped to one user per call."""

    def __init__(self, repository: IProductRepository):
        self._repository = repository

    async def create_product(self, user_id: str, request: CreateProductRequest) -> Product:
        """Create a product, returning the existing one on a barcode clash."""
        barcode = request.barcode.strip()
        name = request.name.strip()
        if not barcode:
            raise ProductFieldRequiredError("Barcode")
        if not name:
            raise ProductFieldRequiredError("Product name")

        existing = self._repository.get_by_barcode(user_id, barcode)
        if existing:
            raise DuplicateBarcodeError(barcode, existing)

        data = {
            "barcode": barcode,
            "name": name,
            "price": _check_price(request.price),
            "description": (request.description or "").strip(),
            "category": normalize_category(request.category),
        }

        try:
            product = self._repository.create(user_id, data)
        except DuplicateRecordError:
            raise DuplicateBarcodeError(barcode, self._repository.get_by_barcode(user_id, barcode))

        logger.info("Created product %s (barcode %s) for user %s", product.id, barcode, user_id)
        return product

    async def list_products(
        self,
        user_id: str,
        filters: Optional[ProductFilter] = None,
    ) -> list[Product]:
        """List products newest first, filtered by category and/or search."""
        filters = filters or ProductFilter()

        category = None
        if filters.category and filters.category.strip() and filters.category != ALL_CATEGORIES:
            category = normalize_category(filters.category)

        search = filters.search.strip() if filters.search else None

        return self._repository.find(user_id, category=category, search=search or None)

    async def get_product(self, user_id: str, product_id: str) -> Product:
        product = self._repository.get_by_id(user_id, product_id)
        if not product:
            raise ProductNotFoundError(product_id)
        return product

    async def get_product_by_barcode(self, user_id: str, barcode: str) -> Product:
        barcode = barcode.strip()
        product = self._repository.get_by_barcode(user_id, barcode)
        if not product:
            raise ProductNotFoundError(barcode)
        return product

    async def update_product(
        self,
        user_id: str,
        product_id: str,
        request: UpdateProductRequest,
    ) -> Product:
        """Overwrite only the supplied fields, trimming strings."""
        changes = request.changes()
        fields: dict = {}

        if "name" in changes:
            name = changes["name"].strip()
            if not name:
                raise ProductFieldRequiredError("Product name")
            fields["name"] = name
        if "price" in changes:
            fields["price"] = _check_price(changes["price"])
        if "description" in changes:
            fields["description"] = changes["description"].strip()
        if "category" in changes:
            fields["category"] = normalize_category(changes["category"])

        product = self._repository.update(user_id, product_id, fields)
        if not product:
            raise ProductNotFoundError(product_id)
        return product

    async def delete_product(self, user_id: str, product_id: str) -> None:
        if not self._repository.delete(user_id, product_id):
            raise ProductNotFoundError(product_id)
        logger.info("Deleted product %s for user %s", product_id, user_id)

    async def get_stats(self, user_id: str) -> ProductStats:
        """Aggregate the user's catalog for the dashboard."""
        products = self._repository.find(user_id)

        counts = Counter(p.category or DEFAULT_CATEGORY for p in products)
        recent = sorted(products, key=lambda p: p.created_at, reverse=True)[:RECENT_PRODUCTS_LIMIT]

        return ProductStats(
            total_products=len(products),
            category_counts=dict(counts),
            recent_products=[
                RecentProduct(
                    id=p.id,
                    barcode=p.barcode,
                    name=p.name,
                    category=p.category or DEFAULT_CATEGORY,
                    created_at=p.created_at,
                )
                for p in recent
            ],
        )
