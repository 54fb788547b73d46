"""
Reference collaborator implementations.

These are the plain, real implementations the cart is wired with outside of
mock-based tests: a tiered discount, a flat-rate tax table, and two notifiers
(one recording in memory, one writing to the log). Their parameters come from
Settings so the rules can be tuned without code changes.
"""

import logging

from shopcart.config.settings import Settings, get_settings

logger = logging.getLogger(__name__)


class TieredDiscountCalculator:
    """
    Discount rules, first match wins:
      - VIP customers (id contains VIP_CUSTOMER_MARKER): VIP_DISCOUNT_RATE of the subtotal
      - subtotal above BULK_DISCOUNT_THRESHOLD: flat BULK_DISCOUNT_AMOUNT
      - otherwise no discount
    """

    def __init__(self, settings: Settings | None = None):
        settings = settings or get_settings()
        self.vip_marker = settings.VIP_CUSTOMER_MARKER
        self.vip_rate = settings.VIP_DISCOUNT_RATE
        self.bulk_threshold = settings.BULK_DISCOUNT_THRESHOLD
        self.bulk_amount = settings.BULK_DISCOUNT_AMOUNT

    async def calculate_discount(self, subtotal: float, customer_id: str) -> float:
        if self.vip_marker and self.vip_marker in customer_id:
            return subtotal * self.vip_rate
        if subtotal > self.bulk_threshold:
            return self.bulk_amount
        return 0


class RateTableTaxCalculator:
    """Tax = amount * rate, with the rate looked up by location code."""

    def __init__(self, settings: Settings | None = None):
        settings = settings or get_settings()
        self.rates = dict(settings.TAX_RATES)
        self.default_rate = settings.DEFAULT_TAX_RATE

    def rate_for(self, location: str) -> float:
        return self.rates.get(location.strip().upper(), self.default_rate)

    def calculate_tax(self, amount: float, location: str) -> float:
        return amount * self.rate_for(location)


class InMemoryOrderNotifier:
    """Notifier that records confirmations instead of delivering them."""

    def __init__(self) -> None:
        self._sent: list[tuple[str, str]] = []

    async def send_order_confirmation(self, customer_id: str, order_id: str) -> None:
        self._sent.append((customer_id, order_id))

    @property
    def sent(self) -> list[tuple[str, str]]:
        return list(self._sent)

    def clear(self) -> None:
        self._sent.clear()


class LoggingOrderNotifier:
    """Notifier for environments without a delivery channel: the confirmation is a log line."""

    async def send_order_confirmation(self, customer_id: str, order_id: str) -> None:
        logger.info(
            "Order confirmation for %s", order_id,
            extra={"customer_id": customer_id, "order_id": order_id},
        )
