# Value types shared by the cart and its callers.
from .product import Product
from .cart_line import CartLine
from .checkout_result import CheckoutResult

__all__ = ["Product", "CartLine", "CheckoutResult"]
