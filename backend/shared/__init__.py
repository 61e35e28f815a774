"""
Shared infrastructure for the inventory backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: Supabase client factory
- memory: In-memory document store for development and tests
- repository: Base Supabase repository with error translation
- exceptions: Base exception classes
- log_config: Logging setup

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .database import get_supabase_client, reset_client_cache
from .exceptions import (
    InventoryError,
    NotFoundError,
    ValidationError,
    ConflictError,
    AuthenticationError,
    AuthorizationError,
    ExternalServiceError,
    StoreError,
    DuplicateRecordError,
)
from .memory import MemoryStore
from .models import AuthenticatedUser, WireModel

__all__ = [
    "Settings",
    "get_settings",
    "get_supabase_client",
    "reset_client_cache",
    "InventoryError",
    "NotFoundError",
    "ValidationError",
    "ConflictError",
    "AuthenticationError",
    "AuthorizationError",
    "ExternalServiceError",
    "StoreError",
    "DuplicateRecordError",
    "MemoryStore",
    "AuthenticatedUser",
    "WireModel",
]
