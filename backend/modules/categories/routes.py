"""
Category API endpoints.

Categories are addressed by name, which may contain ``/``. Deleting one
moves its products to "Uncategorized".
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_category_service
from api.middleware.auth import get_current_user
from api.models.envelope import ApiResponse
from shared.models import AuthenticatedUser, WireModel

from .defaults import DEFAULT_CATEGORY
from .interfaces import ICategoryService
from .models import Category, CreateCategoryRequest

router = APIRouter()


class CategoryDeleted(WireModel):
    """Outcome of a category delete."""

    name: str
    moved_count: int


@router.post(
    "",
    response_model=ApiResponse[Category],
    response_model_exclude_none=True,
    status_code=201,
)
async def create_category(
    request: CreateCategoryRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: ICategoryService = Depends(get_category_service),
) -> ApiResponse[Category]:
    """
    Create a category.

    On a duplicate name the 400 response carries the existing category.
    """
    category = await service.create_category(user.id, request.name)
    return ApiResponse[Category](message="Category created successfully", data=category)


@router.get("", response_model=ApiResponse[list[str]], response_model_exclude_none=True)
async def list_categories(
    user: AuthenticatedUser = Depends(get_current_user),
    service: ICategoryService = Depends(get_category_service),
) -> ApiResponse[list[str]]:
    """List category names, always including the default."""
    names = await service.list_categories(user.id)
    return ApiResponse[list[str]](
        message="Categories retrieved successfully",
        data=names,
        count=len(names),
    )


@router.delete(
    "/{name:path}",
    response_model=ApiResponse[CategoryDeleted],
    response_model_exclude_none=True,
)
async def delete_category(
    name: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: ICategoryService = Depends(get_category_service),
) -> ApiResponse[CategoryDeleted]:
    """Delete a category and move its products to the default."""
    moved = await service.delete_category(user.id, name)
    return ApiResponse[CategoryDeleted](
        message=f"Category deleted successfully. Products moved to {DEFAULT_CATEGORY}.",
        data=CategoryDeleted(name=name.strip(), moved_count=moved),
    )
