"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations for the configured
storage backend (Supabase or in-memory).
"""

from typing import TYPE_CHECKING, Optional
from fastapi import Depends, Request

from shared.config import Settings, get_settings

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from shared.memory import MemoryStore
    from modules.auth.interfaces import IAuthService, IUserRepository
    from modules.categories.interfaces import ICategoryService, ICategoryRepository
    from modules.products.interfaces import IProductService, IProductRepository


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access.

    All services are cached as singletons within the container.
    Use reset() to clear all cached services for testing.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings = settings or get_settings()
        self._store: "MemoryStore | None" = None
        self._user_repository: "IUserRepository | None" = None
        self._category_repository: "ICategoryRepository | None" = None
        self._product_repository: "IProductRepository | None" = None
        self._auth_service: "IAuthService | None" = None
        self._category_service: "ICategoryService | None" = None
        self._product_service: "IProductService | None" = None

    @property
    def uses_memory(self) -> bool:
        return self.settings.storage_backend == "memory"

    @property
    def store(self) -> "MemoryStore":
        """The in-memory store shared by all memory repositories."""
        if self._store is None:
            from shared.memory import MemoryStore
            self._store = MemoryStore()
        return self._store

    @property
    def user_repository(self) -> "IUserRepository":
        """Get the user repository instance."""
        if self._user_repository is None:
            if self.uses_memory:
                from modules.auth.repository import MemoryUserRepository
                self._user_repository = MemoryUserRepository(self.store)
            else:
                from modules.auth.repository import SupabaseUserRepository
                from shared.database import get_supabase_client
                self._user_repository = SupabaseUserRepository(get_supabase_client(self.settings))
        return self._user_repository

    @property
    def category_repository(self) -> "ICategoryRepository":
        """Get the category repository instance."""
        if self._category_repository is None:
            if self.uses_memory:
                from modules.categories.repository import MemoryCategoryRepository
                self._category_repository = MemoryCategoryRepository(self.store)
            else:
                from modules.categories.repository import SupabaseCategoryRepository
                from shared.database import get_supabase_client
                self._category_repository = SupabaseCategoryRepository(get_supabase_client(self.settings))
        return self._category_repository

    @property
    def product_repository(self) -> "IProductRepository":
        """Get the product repository instance."""
        if self._product_repository is None:
            if self.uses_memory:
                from modules.products.repository import MemoryProductRepository
                self._product_repository = MemoryProductRepository(self.store)
            else:
                from modules.products.repository import SupabaseProductRepository
                from shared.database import get_supabase_client
                self._product_repository = SupabaseProductRepository(get_supabase_client(self.settings))
        return self._product_repository

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.service import AuthService
            self._auth_service = AuthService(self.user_repository, self.settings)
        return self._auth_service

    @property
    def categories(self) -> "ICategoryService":
        """Get the category service instance."""
        if self._category_service is None:
            from modules.categories.service import CategoryService
            self._category_service = CategoryService(self.category_repository)
        return self._category_service

    @property
    def products(self) -> "IProductService":
        """Get the product service instance."""
        if self._product_service is None:
            from modules.products.service import ProductService
            self._product_service = ProductService(self.product_repository)
        return self._product_service

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies. The memory
        store is dropped too, so its data is lost.
        """
        self._store = None
        self._user_repository = None
        self._category_repository = None
        self._product_repository = None
        self._auth_service = None
        self._category_service = None
        self._product_service = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls.
# Each app owns one container, built by create_app() from the app's settings.


def get_container(request: Request) -> ServiceContainer:
    """The service container of the app serving this request."""
    return request.app.state.container


def get_auth_service(container: ServiceContainer = Depends(get_container)) -> "IAuthService":
    """FastAPI dependency for auth service."""
    return container.auth


def get_category_service(
    container: ServiceContainer = Depends(get_container),
) -> "ICategoryService":
    """FastAPI dependency for category service."""
    return container.categories


def get_product_service(
    container: ServiceContainer = Depends(get_container),
) -> "IProductService":
    """FastAPI dependency for product service."""
    return container.products
