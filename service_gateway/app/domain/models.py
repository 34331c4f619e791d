"""
Wire models exchanged with the browser client and the upstream service.

Fields use camelCase on the wire. Missing scalar fields decode to their
zero values so the gateway only enforces structure, not completeness.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class WireModel(BaseModel):
    """Immutable model serialized with camelCase aliases."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class LoginRequest(WireModel):
    passkey: str = ""


class AuthOutcome(WireModel):
    success: bool
    message: str


class Product(WireModel):
    """Catalog entry owned by the upstream service."""

    id: str = ""
    name: str = ""
    price: float = 0.0
    image_url: str = Field(default="", alias="imageUrl")
    description: str = ""
    stock: int = 0


class OrderItem(WireModel):
    id: str = ""
    name: str = ""
    quantity: int = 0
    price: float = 0.0


class PlaceOrderRequest(WireModel):
    items: List[OrderItem] = Field(default_factory=list)
    total_amount: float = Field(default=0.0, alias="totalAmount")
    delivery_address: str = Field(default="", alias="deliveryAddress")
    order_date: str = Field(default="", alias="orderDate")


class PlaceOrderResponse(WireModel):
    success: bool = False
    message: Optional[str] = None
    order_id: Optional[str] = Field(default=None, alias="orderId")
    out_of_stock_items: Optional[List[str]] = Field(default=None, alias="outOfStockItems")

    def to_wire(self) -> dict:
        # Optional fields the upstream left out stay out
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


ProductList = TypeAdapter(List[Product])


def products_to_wire(products: List[Product]) -> list:
    return [product.to_wire() for product in products]
