"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """
    Base for every model that crosses the HTTP boundary.

    Fields are snake_case in Python and camelCase on the wire
    (``created_at`` <-> ``createdAt``). Both spellings are accepted on input.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class AuthenticatedUser(BaseModel):
    """
    Represents an authenticated user in the system.

    Populated from a verified bearer token plus the user record, and made
    available to route handlers via dependency injection. Every catalog
    query is scoped by ``id``.
    """

    id: str = Field(..., description="User ID")
    username: str = Field(..., description="Lowercase username")
    email: Optional[str] = Field(None, description="Email address, if set")
    email_verified: bool = Field(default=False, description="Whether email is verified")

    model_config = {
        "frozen": True,  # Make immutable for safety
        "extra": "ignore",
    }
