"""
Mock upstream product service for local development.

Serves the static catalog on ``GET /all-products`` and accepts orders on
``POST /place-order``. Orders asking for more units than a product lists
in stock are rejected with 409 and the offending product ids. Stock is
never decremented.
"""

import uuid
from typing import Any, Dict, List

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from shared.logging import get_logger


def _placeholder(color: str, label: str) -> str:
    return f"https://placehold.co/300x200/{color}/000000?text={label}"


CATALOG: List[Dict[str, Any]] = [
    {"id": "prod1", "name": "Wireless Headphones", "price": 99.99, "imageUrl": _placeholder("FFD700", "Headphones"), "description": "High-fidelity sound with noise cancellation.", "stock": 25},
    {"id": "prod2", "name": "Smartwatch", "price": 199.99, "imageUrl": _placeholder("87CEEB", "Smartwatch"), "description": "Track your fitness and receive notifications.", "stock": 15},
    {"id": "prod3", "name": "Portable Bluetooth Speaker", "price": 49.99, "imageUrl": _placeholder("98FB98", "Speaker"), "description": "Compact and powerful sound on the go.", "stock": 0},
    {"id": "prod4", "name": "Ergonomic Office Chair", "price": 249.99, "imageUrl": _placeholder("DDA0DD", "Chair"), "description": "Comfortable and supportive for long working hours.", "stock": 8},
    {"id": "prod5", "name": "4K UHD Monitor", "price": 399.99, "imageUrl": _placeholder("F08080", "Monitor"), "description": "Stunning visuals for work and entertainment.", "stock": 12},
    {"id": "prod6", "name": "Gaming Keyboard", "price": 79.99, "imageUrl": _placeholder("ADD8E6", "Keyboard"), "description": "Mechanical keyboard with RGB lighting.", "stock": 30},
    {"id": "prod7", "name": "Gaming Mouse", "price": 39.99, "imageUrl": _placeholder("FFB6C1", "Mouse"), "description": "High-precision sensor for competitive gaming.", "stock": 40},
    {"id": "prod8", "name": "Webcam 1080p", "price": 59.99, "imageUrl": _placeholder("DAA520", "Webcam"), "description": "Full HD video calls and streaming.", "stock": 20},
    {"id": "prod9", "name": "External SSD 1TB", "price": 129.99, "imageUrl": _placeholder("B0C4DE", "SSD"), "description": "Fast and portable storage solution.", "stock": 18},
    {"id": "prod10", "name": "USB-C Hub", "price": 29.99, "imageUrl": _placeholder("F4A460", "USB-C+Hub"), "description": "Expand your laptop's connectivity with multiple ports.", "stock": 50},
]


class MockOrderItem(BaseModel):
    id: str
    name: str = ""
    quantity: int
    price: float = 0.0


class MockOrderRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    items: List[MockOrderItem]
    total_amount: float = Field(default=0.0, alias="totalAmount")
    delivery_address: str = Field(default="", alias="deliveryAddress")
    order_date: str = Field(default="", alias="orderDate")


class MockProductService:
    """Mock product service implementation."""

    def __init__(self, port: int = 8080):
        self.port = port
        self.logger = get_logger("mock.product_service")
        self.app = FastAPI(title="Mock Product Service", version="1.0.0")
        self.stock = {product["id"]: product["stock"] for product in CATALOG}

        self._setup_routes()

    def _setup_routes(self):
        """Set up mock upstream routes."""

        @self.app.get("/all-products")
        async def all_products():
            """Return the full static catalog."""
            return CATALOG

        @self.app.post("/place-order")
        async def place_order(order: MockOrderRequest):
            """Accept the order unless an item exceeds listed stock."""
            out_of_stock = [
                item.id for item in order.items
                if item.quantity > self.stock.get(item.id, 0)
            ]

            if out_of_stock:
                self.logger.info("Order rejected", out_of_stock_items=out_of_stock)
                return JSONResponse(
                    status_code=409,
                    content={
                        "success": False,
                        "message": "Some items are out of stock",
                        "outOfStockItems": out_of_stock,
                    },
                )

            order_id = str(uuid.uuid4())
            self.logger.info("Order placed", order_id=order_id, item_count=len(order.items))
            return {
                "success": True,
                "message": "Order placed successfully",
                "orderId": order_id,
            }


def create_app():
    """Create mock product service app."""
    service = MockProductService()
    return service.app


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(create_app(), host="0.0.0.0", port=8080)
