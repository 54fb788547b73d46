"""
Shopping cart with collaborator-driven checkout.

The cart owns its line items and nothing else: discounts, tax and order
confirmation are delegated to injected collaborators (see services/ports.py),
which is what makes the checkout testable both with real implementations and
with mocks.
"""

import asyncio
import inspect
import logging
from typing import Any, Awaitable

from shopcart.config.settings import get_settings
from shopcart.core.logging import set_correlation_id, reset_correlation_id
from shopcart.exceptions import EmptyCartError, InvalidQuantityError
from shopcart.models import CartLine, CheckoutResult, Product
from shopcart.utils.order_ids import OrderIdFactory, make_order_id_factory

from .ports import DiscountCalculator, OrderNotifier, TaxCalculator

logger = logging.getLogger(__name__)


def _is_int(value: Any) -> bool:
    # bool is an int subclass, but True is not a quantity.
    return isinstance(value, int) and not isinstance(value, bool)


class ShoppingCart:
    """
    In-memory cart for a single owner.

    Lines are kept in insertion order, one per product id. The cart is meant to
    be driven from one asyncio task at a time and is not thread-safe: the only
    suspension point in checkout() is the discount call, and mutating the cart
    while that call is pending is unsupported.

    Args:
        discount_calculator: async discount collaborator.
        tax_calculator: sync tax collaborator.
        notifier: async order-confirmation collaborator; fire-and-forget.
        order_id_factory: zero-argument callable returning a fresh order id.
            Defaults to ORDER_ID_PREFIX-<millis>-<random suffix>.
    """

    def __init__(
        self,
        discount_calculator: DiscountCalculator,
        tax_calculator: TaxCalculator,
        notifier: OrderNotifier,
        *,
        order_id_factory: OrderIdFactory | None = None,
    ):
        self.discount_calculator = discount_calculator
        self.tax_calculator = tax_calculator
        self.notifier = notifier
        self.order_id_factory = order_id_factory or make_order_id_factory(
            get_settings().ORDER_ID_PREFIX
        )
        # dict keeps insertion order and gives one line per product id.
        self._lines: dict[str, CartLine] = {}
        # Strong references to in-flight confirmation tasks.
        self._notification_tasks: set[asyncio.Task] = set()

    def __repr__(self) -> str:
        return f"<ShoppingCart(lines={len(self._lines)}, units={self.get_item_count()})>"

    def __len__(self) -> int:
        return len(self._lines)

    def __contains__(self, product_id: object) -> bool:
        return product_id in self._lines

    # ---- line-item management ----

    def add_item(self, product: Product, quantity: int = 1) -> None:
        """
        Add `quantity` units of `product`, merging with an existing line.

        Raises:
            InvalidQuantityError: quantity is not a positive integer. The cart
                is left unchanged.
        """
        if not _is_int(quantity) or quantity <= 0:
            raise InvalidQuantityError(quantity)

        existing = self._lines.get(product.id)
        if existing is not None:
            self._lines[product.id] = existing.with_quantity(existing.quantity + quantity)
        else:
            self._lines[product.id] = CartLine(product=product, quantity=quantity)

        logger.debug("Added %d x %s", quantity, product.id, extra={"product_id": product.id})

    def remove_item(self, product_id: str) -> None:
        """Remove the line for `product_id`; unknown ids are ignored."""
        if self._lines.pop(product_id, None) is not None:
            logger.debug("Removed %s", product_id, extra={"product_id": product_id})

    def update_quantity(self, product_id: str, quantity: int) -> None:
        """
        Set the quantity of an existing line (replacement, not increment).

        A quantity of zero or less removes the line. Unknown product ids are
        ignored. A non-integer quantity raises InvalidQuantityError.
        """
        if not _is_int(quantity):
            raise InvalidQuantityError(quantity, "Quantity must be an integer")

        if quantity <= 0:
            self.remove_item(product_id)
            return

        line = self._lines.get(product_id)
        if line is not None:
            self._lines[product_id] = line.with_quantity(quantity)

    def get_line(self, product_id: str) -> CartLine | None:
        return self._lines.get(product_id)

    def get_items(self) -> list[CartLine]:
        """Snapshot of the current lines; lines are immutable and the list is a fresh copy."""
        return list(self._lines.values())

    def get_subtotal(self) -> float:
        return sum((line.line_total for line in self._lines.values()), 0)

    def get_item_count(self) -> int:
        """Number of units across all lines (not the number of lines)."""
        return sum(line.quantity for line in self._lines.values())

    def is_empty(self) -> bool:
        return not self._lines

    def clear(self) -> None:
        self._lines.clear()

    # ---- checkout ----

    async def checkout(self, customer_id: str, location: str) -> CheckoutResult:
        """
        Price the cart, clear it, and fire the order confirmation.

        Order of operations:
          1. Empty cart -> EmptyCartError; no collaborator is called.
          2. subtotal from the current lines.
          3. discount = await discount_calculator.calculate_discount(subtotal, customer_id)
          4. tax = tax_calculator.calculate_tax(subtotal - discount, location)
          5. total = subtotal - discount + tax; a new order id is generated.
          6. The cart is cleared.
          7. notifier.send_order_confirmation(customer_id, order_id) is started
             but not awaited; its failure is logged, never raised.

        Exceptions from the discount or tax collaborator propagate unchanged and
        leave the cart as it was. The discount is not checked against the
        subtotal, so an oversized discount yields a negative total.
        """
        if self.is_empty():
            raise EmptyCartError()

        subtotal = self.get_subtotal()
        item_count = self.get_item_count()

        discount = await self.discount_calculator.calculate_discount(subtotal, customer_id)
        discounted_amount = subtotal - discount
        tax = self.tax_calculator.calculate_tax(discounted_amount, location)
        total = discounted_amount + tax

        order_id = self.order_id_factory()
        result = CheckoutResult(
            order_id=order_id,
            subtotal=subtotal,
            discount=discount,
            tax=tax,
            total=total,
            item_count=item_count,
        )

        self.clear()
        self._send_confirmation(customer_id, order_id)

        logger.info(
            "Checkout completed for order %s", order_id,
            extra={"order_id": order_id, "customer_id": customer_id, "total": total},
        )
        return result

    # ---- order confirmation (fire-and-forget) ----

    @property
    def pending_notifications(self) -> int:
        return len(self._notification_tasks)

    async def drain_notifications(self) -> None:
        """Wait until every confirmation started by checkout() has finished."""
        while self._notification_tasks:
            await asyncio.gather(*self._notification_tasks, return_exceptions=True)

    def _send_confirmation(self, customer_id: str, order_id: str) -> None:
        # The detached task copies the current context, so its log records
        # carry the order id as correlation id.
        token = set_correlation_id(order_id)
        try:
            try:
                pending = self.notifier.send_order_confirmation(customer_id, order_id)
            except Exception:
                self._log_confirmation_failure(customer_id, order_id)
                return

            if not inspect.isawaitable(pending):
                return

            task = asyncio.ensure_future(
                self._await_confirmation(pending, customer_id, order_id)
            )
            self._notification_tasks.add(task)
            task.add_done_callback(self._notification_tasks.discard)
        finally:
            reset_correlation_id(token)

    async def _await_confirmation(
        self, pending: Awaitable[Any], customer_id: str, order_id: str
    ) -> None:
        try:
            await pending
        except Exception:
            self._log_confirmation_failure(customer_id, order_id)

    @staticmethod
    def _log_confirmation_failure(customer_id: str, order_id: str) -> None:
        logger.exception(
            "Failed to send order confirmation",
            extra={"order_id": order_id, "customer_id": customer_id},
        )
