"""Tests for the product service."""

import asyncio
import pytest
from unittest.mock import MagicMock

from shared.exceptions import DuplicateRecordError
from shared.memory import MemoryStore
from modules.products.exceptions import (
    DuplicateBarcodeError,
    InvalidPriceError,
    ProductFieldRequiredError,
    ProductNotFoundError,
)
from modules.products.models import (
    CreateProductRequest,
    ProductFilter,
    UpdateProductRequest,
)
from modules.products.repository import MemoryProductRepository
from modules.products.service import ProductService

USER = "user-1"
OTHER_USER = "user-2"


@pytest.fixture
def service() -> ProductService:
    return ProductService(MemoryProductRepository(MemoryStore()))


async def add(service, barcode="12345678", name="Milk", user=USER, **fields):
    return await service.create_product(
        user, CreateProductRequest(barcode=barcode, name=name, **fields)
    )


class TestCreateProduct:
    """Tests for create_product."""

    @pytest.mark.asyncio
    async def test_applies_defaults(self, service):
        """Should default price, description and category."""
        product = await add(service, barcode=" 12345678 ", name=" Milk ")
        assert product.barcode == "12345678"
        assert product.name == "Milk"
        assert product.price == 0
        assert product.description == ""
        assert product.category == "Uncategorized"

    @pytest.mark.asyncio
    async def test_normalizes_default_category(self, service):
        product = await add(service, category="  uncategorized ")
        assert product.category == "Uncategorized"

    @pytest.mark.asyncio
    async def test_keeps_given_fields(self, service):
        product = await add(service, price=2.5, description=" fresh ", category=" Dairy ")
        assert product.price == 2.5
        assert product.description == "fresh"
        assert product.category == "Dairy"

    @pytest.mark.asyncio
    async def test_duplicate_barcode_returns_existing(self, service):
        """Should attach the existing product to the error."""
        first = await add(service)
        with pytest.raises(DuplicateBarcodeError) as exc_info:
            await add(service, name="Other")
        assert exc_info.value.message == "Product with this barcode already exists"
        assert exc_info.value.data.id == first.id

    @pytest.mark.asyncio
    async def test_same_barcode_for_other_user(self, service):
        await add(service)
        product = await add(service, user=OTHER_USER)
        assert product.user_id == OTHER_USER

    @pytest.mark.asyncio
    async def test_concurrent_creates_keep_one(self, service):
        """Exactly one of two simultaneous creates should win."""
        results = await asyncio.gather(
            add(service), add(service), return_exceptions=True
        )
        errors = [r for r in results if isinstance(r, Exception)]
        assert len(errors) == 1
        assert isinstance(errors[0], DuplicateBarcodeError)
        assert len(await service.list_products(USER)) == 1

    @pytest.mark.asyncio
    async def test_lost_race_reports_conflict(self):
        """Should turn a unique-index hit into DuplicateBarcodeError."""
        repository = MagicMock()
        existing = MagicMock()
        repository.get_by_barcode.side_effect = [None, existing]
        repository.create.side_effect = DuplicateRecordError("products")

        with pytest.raises(DuplicateBarcodeError) as exc_info:
            await ProductService(repository).create_product(
                USER, CreateProductRequest(barcode="123", name="Milk")
            )
        assert exc_info.value.data is existing

    @pytest.mark.asyncio
    async def test_negative_price_rejected(self, service):
        """Should reject a negative price even without request validation."""
        request = CreateProductRequest.model_construct(barcode="1", name="Milk", price=-1)
        with pytest.raises(InvalidPriceError):
            await service.create_product(USER, request)

    @pytest.mark.asyncio
    async def test_blank_fields_rejected(self, service):
        request = CreateProductRequest.model_construct(barcode=" ", name="Milk")
        with pytest.raises(ProductFieldRequiredError) as exc_info:
            await service.create_product(USER, request)
        assert exc_info.value.message == "Barcode is required"


class TestListProducts:
    """Tests for list_products filters."""

    @pytest.mark.asyncio
    async def test_newest_first(self, service):
        for i in range(3):
            await add(service, barcode=f"1000000{i}", name=f"P{i}")
        names = [p.name for p in await service.list_products(USER)]
        assert names == ["P2", "P1", "P0"]

    @pytest.mark.asyncio
    async def test_category_filter(self, service):
        await add(service, barcode="1", category="Dairy")
        await add(service, barcode="2", category="Bakery")
        result = await service.list_products(USER, ProductFilter(category="Dairy"))
        assert [p.barcode for p in result] == ["1"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("category", ["all", "", None])
    async def test_all_categories(self, service, category):
        await add(service, barcode="1", category="Dairy")
        await add(service, barcode="2", category="Bakery")
        result = await service.list_products(USER, ProductFilter(category=category))
        assert len(result) == 2

    @pytest.mark.asyncio
    async def test_search_is_case_insensitive_substring(self, service):
        """Should match name, barcode, description or category."""
        await add(service, barcode="11111111", name="Whole Milk")
        await add(service, barcode="22222222", name="Bread", description="sourdough")
        await add(service, barcode="33333333", name="Cheese", category="Dairy")

        assert [p.name for p in await service.list_products(USER, ProductFilter(search="milk"))] == ["Whole Milk"]
        assert [p.name for p in await service.list_products(USER, ProductFilter(search="DOUGH"))] == ["Bread"]
        assert [p.name for p in await service.list_products(USER, ProductFilter(search="2222"))] == ["Bread"]
        assert [p.name for p in await service.list_products(USER, ProductFilter(search="dai"))] == ["Cheese"]

    @pytest.mark.asyncio
    async def test_search_and_category_combine(self, service):
        await add(service, barcode="1", name="Milk", category="Dairy")
        await add(service, barcode="2", name="Milk chocolate", category="Snacks")
        result = await service.list_products(
            USER, ProductFilter(category="Dairy", search="milk")
        )
        assert [p.barcode for p in result] == ["1"]

    @pytest.mark.asyncio
    async def test_scoped_to_user(self, service):
        await add(service, user=OTHER_USER)
        assert await service.list_products(USER) == []


class TestGetProduct:
    @pytest.mark.asyncio
    async def test_by_id(self, service):
        product = await add(service)
        assert (await service.get_product(USER, product.id)).barcode == "12345678"

    @pytest.mark.asyncio
    async def test_other_users_product_is_not_found(self, service):
        """Should not reveal that another user's product exists."""
        product = await add(service, user=OTHER_USER)
        with pytest.raises(ProductNotFoundError):
            await service.get_product(USER, product.id)

    @pytest.mark.asyncio
    async def test_by_barcode(self, service):
        product = await add(service)
        assert (await service.get_product_by_barcode(USER, "12345678")).id == product.id

    @pytest.mark.asyncio
    async def test_unknown_barcode(self, service):
        with pytest.raises(ProductNotFoundError) as exc_info:
            await service.get_product_by_barcode(USER, "99999999")
        assert exc_info.value.message == "Product not found"


class TestUpdateProduct:
    """Tests for partial updates."""

    @pytest.mark.asyncio
    async def test_only_supplied_fields_change(self, service):
        product = await add(service, price=2.0, description="fresh", category="Dairy")

        updated = await service.update_product(
            USER, product.id, UpdateProductRequest(price=3.5)
        )

        assert updated.price == 3.5
        assert updated.name == "Milk"
        assert updated.description == "fresh"
        assert updated.category == "Dairy"

    @pytest.mark.asyncio
    async def test_explicit_null_is_ignored(self, service):
        product = await add(service, description="fresh")
        updated = await service.update_product(
            USER, product.id, UpdateProductRequest(description=None, name=" Oat Milk ")
        )
        assert updated.description == "fresh"
        assert updated.name == "Oat Milk"

    @pytest.mark.asyncio
    async def test_blank_category_becomes_default(self, service):
        product = await add(service, category="Dairy")
        updated = await service.update_product(
            USER, product.id, UpdateProductRequest(category="  ")
        )
        assert updated.category == "Uncategorized"

    @pytest.mark.asyncio
    async def test_barcode_cannot_change(self, service):
        """Should ignore a barcode in the update body."""
        product = await add(service)
        request = UpdateProductRequest.model_validate({"barcode": "999", "name": "Oat"})
        updated = await service.update_product(USER, product.id, request)
        assert updated.barcode == "12345678"

    @pytest.mark.asyncio
    async def test_empty_update_returns_product(self, service):
        product = await add(service)
        updated = await service.update_product(USER, product.id, UpdateProductRequest())
        assert updated.id == product.id

    @pytest.mark.asyncio
    async def test_missing_product(self, service):
        with pytest.raises(ProductNotFoundError):
            await service.update_product(USER, "missing", UpdateProductRequest(name="x"))

    @pytest.mark.asyncio
    async def test_other_users_product(self, service):
        product = await add(service, user=OTHER_USER)
        with pytest.raises(ProductNotFoundError):
            await service.update_product(USER, product.id, UpdateProductRequest(name="x"))


class TestDeleteProduct:
    @pytest.mark.asyncio
    async def test_delete(self, service):
        product = await add(service)
        await service.delete_product(USER, product.id)
        with pytest.raises(ProductNotFoundError):
            await service.get_product(USER, product.id)

    @pytest.mark.asyncio
    async def test_delete_twice(self, service):
        product = await add(service)
        await service.delete_product(USER, product.id)
        with pytest.raises(ProductNotFoundError):
            await service.delete_product(USER, product.id)

    @pytest.mark.asyncio
    async def test_barcode_reusable_after_delete(self, service):
        product = await add(service)
        await service.delete_product(USER, product.id)
        assert (await add(service)).id != product.id


class TestStats:
    """Tests for get_stats."""

    @pytest.mark.asyncio
    async def test_empty(self, service):
        stats = await service.get_stats(USER)
        assert stats.total_products == 0
        assert stats.category_counts == {}
        assert stats.recent_products == []

    @pytest.mark.asyncio
    async def test_counts_and_recent(self, service):
        """Should count per category and keep the five newest."""
        for i in range(7):
            await add(
                service,
                barcode=f"1000000{i}",
                name=f"P{i}",
                category="Dairy" if i % 2 else None,
            )

        stats = await service.get_stats(USER)

        assert stats.total_products == 7
        assert stats.category_counts == {"Uncategorized": 4, "Dairy": 3}
        assert sum(stats.category_counts.values()) == stats.total_products
        assert [p.name for p in stats.recent_products] == ["P6", "P5", "P4", "P3", "P2"]

    @pytest.mark.asyncio
    async def test_wire_shape(self, service):
        await add(service)
        data = (await service.get_stats(USER)).model_dump(by_alias=True)
        assert set(data) == {"totalProducts", "categoryCounts", "recentProducts"}
        assert set(data["recentProducts"][0]) == {"id", "barcode", "name", "category", "createdAt"}
