"""
Product API endpoints.

Literal paths (``/stats/analytics``, ``/barcode/{barcode}``) are declared
before ``/{product_id}`` so they are never captured as an id. Barcodes use
the ``path`` converter because an encoded ``/`` arrives decoded.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query

from api.dependencies import get_product_service
from api.middleware.auth import get_current_user
from api.models.envelope import ApiResponse
from shared.models import AuthenticatedUser

from .interfaces import IProductService
from .models import (
    CreateProductRequest,
    Product,
    ProductFilter,
    ProductStats,
    UpdateProductRequest,
)

router = APIRouter()


@router.post(
    "",
    response_model=ApiResponse[Product],
    response_model_exclude_none=True,
    status_code=201,
)
async def create_product(
    request: CreateProductRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IProductService = Depends(get_product_service),
) -> ApiResponse[Product]:
    """
    Create a product.

    On a duplicate barcode the 400 response carries the existing product.
    """
    product = await service.create_product(user.id, request)
    return ApiResponse[Product](message="Product created successfully", data=product)


@router.get("", response_model=ApiResponse[list[Product]], response_model_exclude_none=True)
async def list_products(
    category: Optional[str] = Query(default=None, description="Category name, or 'all'"),
    search: Optional[str] = Query(default=None, description="Substring of name, barcode, description or category"),
    user: AuthenticatedUser = Depends(get_current_user),
    service: IProductService = Depends(get_product_service),
) -> ApiResponse[list[Product]]:
    """List the current user's products, newest first."""
    products = await service.list_products(
        user.id, ProductFilter(category=category, search=search)
    )
    return ApiResponse[list[Product]](
        message="Products retrieved successfully",
        data=products,
        count=len(products),
    )


@router.get(
    "/stats/analytics",
    response_model=ApiResponse[ProductStats],
    response_model_exclude_none=True,
)
async def get_product_stats(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IProductService = Depends(get_product_service),
) -> ApiResponse[ProductStats]:
    """Totals, per-category counts and the newest products."""
    stats = await service.get_stats(user.id)
    return ApiResponse[ProductStats](message="Statistics retrieved successfully", data=stats)


@router.get(
    "/barcode/{barcode:path}",
    response_model=ApiResponse[Product],
    response_model_exclude_none=True,
)
async def get_product_by_barcode(
    barcode: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IProductService = Depends(get_product_service),
) -> ApiResponse[Product]:
    """Look up a product by its barcode (used after a scan)."""
    product = await service.get_product_by_barcode(user.id, barcode)
    return ApiResponse[Product](message="Product retrieved successfully", data=product)


@router.get(
    "/{product_id}",
    response_model=ApiResponse[Product],
    response_model_exclude_none=True,
)
async def get_product(
    product_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IProductService = Depends(get_product_service),
) -> ApiResponse[Product]:
    product = await service.get_product(user.id, product_id)
    return ApiResponse[Product](message="Product retrieved successfully", data=product)


@router.put(
    "/{product_id}",
    response_model=ApiResponse[Product],
    response_model_exclude_none=True,
)
async def update_product(
    product_id: str,
    request: UpdateProductRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IProductService = Depends(get_product_service),
) -> ApiResponse[Product]:
    """Update only the fields present in the body."""
    product = await service.update_product(user.id, product_id, request)
    return ApiResponse[Product](message="Product updated successfully", data=product)


@router.delete(
    "/{product_id}",
    response_model=ApiResponse[None],
    response_model_exclude_none=True,
)
async def delete_product(
    product_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IProductService = Depends(get_product_service),
) -> ApiResponse[None]:
    await service.delete_product(user.id, product_id)
    return ApiResponse[None](message="Product deleted successfully")
