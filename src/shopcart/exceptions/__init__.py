from .base import (
    CartError,
    InvalidQuantityError,
    EmptyCartError,
)

__all__ = ["CartError", "InvalidQuantityError", "EmptyCartError"]
