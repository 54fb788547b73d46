"""
Collaborator contracts consumed by ShoppingCart.checkout().

Each contract is a structural Protocol: any object with a matching method is
accepted, including unittest.mock doubles. The cart never constructs its
collaborators; they are injected.
"""

from typing import Awaitable, Protocol, runtime_checkable


@runtime_checkable
class DiscountCalculator(Protocol):
    def calculate_discount(self, subtotal: float, customer_id: str) -> Awaitable[float]:
        """Return the discount (an amount, not a rate) for `subtotal`. Errors propagate to checkout."""
        ...


@runtime_checkable
class TaxCalculator(Protocol):
    def calculate_tax(self, amount: float, location: str) -> float:
        """Return the tax due on the already-discounted `amount`. Synchronous; errors propagate."""
        ...


@runtime_checkable
class OrderNotifier(Protocol):
    def send_order_confirmation(self, customer_id: str, order_id: str) -> Awaitable[None]:
        """Deliver a confirmation. Checkout does not await this; failures are only logged."""
        ...
