from pydantic import BaseModel, ConfigDict


class CheckoutResult(BaseModel):
    """
    Outcome of a single successful checkout.

    Created only by ShoppingCart.checkout() and never mutated afterwards.
    `total` is exactly subtotal - discount + tax as computed in floating point;
    no rounding is applied here. `item_count` is the number of units the cart
    held when checkout started.
    """

    model_config = ConfigDict(frozen=True)

    order_id: str
    subtotal: float
    discount: float
    tax: float
    total: float
    item_count: int
