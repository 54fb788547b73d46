"""
shopcart: an in-memory shopping cart with collaborator-driven checkout.
"""

from .models import CartLine, CheckoutResult, Product
from .services import ShoppingCart

__all__ = ["CartLine", "CheckoutResult", "Product", "ShoppingCart"]
