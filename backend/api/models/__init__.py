"""API models package."""

from .envelope import ApiResponse, FieldError

__all__ = [
    "ApiResponse",
    "FieldError",
]
