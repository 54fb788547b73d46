from .cart import ShoppingCart
from .ports import DiscountCalculator, TaxCalculator, OrderNotifier
from .collaborators import (
    TieredDiscountCalculator,
    RateTableTaxCalculator,
    InMemoryOrderNotifier,
    LoggingOrderNotifier,
)

__all__ = [
    "ShoppingCart",
    "DiscountCalculator",
    "TaxCalculator",
    "OrderNotifier",
    "TieredDiscountCalculator",
    "RateTableTaxCalculator",
    "InMemoryOrderNotifier",
    "LoggingOrderNotifier",
]
