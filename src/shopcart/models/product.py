from pydantic import BaseModel, ConfigDict, Field


class Product(BaseModel):
    """
    Immutable catalogue entry as the cart sees it.

    Products are owned by the caller; the cart stores them as-is inside its
    lines. Being frozen, a product held by a line cannot change price behind
    the cart's back.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    name: str
    price: float = Field(ge=0)

    def __repr__(self) -> str:
        return f"<Product(id={self.id!r}, name={self.name!r}, price={self.price})>"
