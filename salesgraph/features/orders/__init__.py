"""Orders module: paginated order history and order placement."""

from salesgraph.features.orders.schemas import (
    CustomerOrder,
    CustomerOrdersPage,
    PlaceOrderItem,
    PlaceOrderResult,
)
from salesgraph.features.orders.service import OrderService

__all__ = [
    "CustomerOrder",
    "CustomerOrdersPage",
    "OrderService",
    "PlaceOrderItem",
    "PlaceOrderResult",
]
