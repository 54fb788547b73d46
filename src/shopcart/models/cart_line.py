from pydantic import BaseModel, ConfigDict, Field

from .product import Product


class CartLine(BaseModel):
    """
    A (product, quantity) pairing inside a cart.

    Lines are frozen: the cart replaces a line when its quantity changes, so a
    snapshot returned by ShoppingCart.get_items() can never be used to mutate
    the cart. A quantity below 1 is rejected at construction; the cart removes
    the line instead of ever holding one.
    """

    model_config = ConfigDict(frozen=True)

    product: Product
    quantity: int = Field(ge=1)

    @property
    def product_id(self) -> str:
        return self.product.id

    @property
    def line_total(self) -> float:
        return self.product.price * self.quantity

    def with_quantity(self, quantity: int) -> "CartLine":
        """Return a copy of this line holding `quantity` units."""
        return CartLine(product=self.product, quantity=quantity)
