"""
Custom exceptions for cart and checkout operations.
"""

from typing import Any, Iterable

# canonical cart-level exception

class CartError(Exception):
    """
    Base exception for cart misuse.

    - message: human-friendly message (safe to show to clients)
    - fields: optional list of argument names related to the error (e.g., ['quantity'])
    - error_code: canonical short code (e.g., 'empty_cart') used by clients

    Errors raised by discount or tax collaborators are NOT wrapped in CartError;
    they reach the checkout caller unchanged.
    """

    def __init__(self, message: str, *, fields: Iterable[str] | None = None,
                 error_code: str | None = None):
        super().__init__(message)
        self.message = message
        self.fields = list(fields) if fields else None
        self.error_code = error_code

    def __str__(self) -> str:
        base = self.message
        parts = []
        if self.fields:
            parts.append(f"fields: {', '.join(self.fields)}")
        if self.error_code:
            parts.append(f"code: {self.error_code}")
        if parts:
            return f"{base} ({'; '.join(parts)})"
        return base

    def to_payload(self) -> dict[str, Any]:
        """
        Return a JSON-serializable dict for callers that surface the error:
            {
                "detail": "Quantity must be positive",
                "code": "invalid_quantity",   # optional
                "fields": ["quantity"],       # optional
            }
        """
        payload: dict[str, Any] = {"detail": self.message}
        if self.error_code:
            payload["code"] = self.error_code
        if self.fields:
            payload["fields"] = list(self.fields)
        return payload


class InvalidQuantityError(CartError):
    """Raised when add_item() receives a quantity that is not a positive integer."""

    def __init__(self, quantity: object, message: str = "Quantity must be positive"):
        super().__init__(message, fields=["quantity"], error_code="invalid_quantity")
        self.quantity = quantity


class EmptyCartError(CartError):
    """Raised when checkout() is attempted on a cart with no lines."""

    def __init__(self, message: str = "Cannot checkout empty cart"):
        super().__init__(message, error_code="empty_cart")


__all__ = [
    "CartError",
    "InvalidQuantityError",
    "EmptyCartError",
]
