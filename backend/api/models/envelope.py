"""
Response envelope.

Every endpoint answers with the same JSON shape:

    {"success": true, "message": "...", "data": ..., "count": 3}

``count`` is only present on list responses and ``errors`` only on
validation failures; ``None`` fields are dropped from the output.
"""

from typing import Generic, Optional, TypeVar
from pydantic import BaseModel, Field

T = TypeVar("T")


class FieldError(BaseModel):
    """One failed input check."""

    field: str
    message: str


class ApiResponse(BaseModel, Generic[T]):
    """Standard success/failure envelope."""

    success: bool = True
    message: str = ""
    data: Optional[T] = None
    count: Optional[int] = Field(default=None, description="Item count for list responses")
    errors: Optional[list[FieldError]] = None
    error: Optional[str] = Field(default=None, description="Internal detail, development only")
