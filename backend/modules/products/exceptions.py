"""
Products module exceptions.
"""

from typing import Any

from shared.exceptions import ConflictError, NotFoundError, ValidationError


class ProductFieldRequiredError(ValidationError):
    """Raised when a required text field is blank after trimming."""

    def __init__(self, field: str):
        super().__init__(
            f"{field} is required",
            code="PRODUCT_FIELD_REQUIRED",
            details={"field": field},
        )


class InvalidPriceError(ValidationError):
    """Raised when a price is negative."""

    def __init__(self, price: float):
        super().__init__(
            "Price must be a positive number",
            code="INVALID_PRICE",
            details={"price": price},
        )


class DuplicateBarcodeError(ConflictError):
    """Raised when the user already has a product with this barcode."""

    def __init__(self, barcode: str, existing: Any = None):
        super().__init__(
            "Product with this barcode already exists",
            code="DUPLICATE_BARCODE",
            details={"barcode": barcode},
            data=existing,
        )


class ProductNotFoundError(NotFoundError):
    """Raised when a product does not exist for this user."""

    def __init__(self, identifier: str):
        super().__init__(
            "Product not found",
            code="PRODUCT_NOT_FOUND",
            details={"identifier": identifier},
        )
