"""GraphQL object and input types.

Field names are snake_case here and exposed camelCase by strawberry.
"""

import strawberry

from salesgraph.features.analytics import schemas as analytics_schemas
from salesgraph.features.orders import schemas as orders_schemas


@strawberry.type
class CustomerSpending:
    customer_id: strawberry.ID
    total_spent: float
    average_order_value: float
    last_order_date: str | None

    @classmethod
    def from_schema(cls, result: analytics_schemas.CustomerSpending) -> "CustomerSpending":
        return cls(
            customer_id=strawberry.ID(result.customer_id),
            total_spent=result.total_spent,
            average_order_value=result.average_order_value,
            last_order_date=result.last_order_date,
        )


@strawberry.type
class TopProduct:
    product_id: strawberry.ID
    name: str
    total_sold: int

    @classmethod
    def from_schema(cls, result: analytics_schemas.TopProduct) -> "TopProduct":
        return cls(
            product_id=strawberry.ID(result.product_id),
            name=result.name,
            total_sold=result.total_sold,
        )


@strawberry.type
class CategoryBreakdown:
    category: str
    revenue: float


@strawberry.type
class SalesAnalytics:
    total_revenue: float
    completed_orders: int
    category_breakdown: list[CategoryBreakdown]

    @classmethod
    def from_schema(cls, result: analytics_schemas.SalesAnalytics) -> "SalesAnalytics":
        return cls(
            total_revenue=result.total_revenue,
            completed_orders=result.completed_orders,
            category_breakdown=[
                CategoryBreakdown(category=entry.category, revenue=entry.revenue)
                for entry in result.category_breakdown
            ],
        )


@strawberry.type
class OrderItem:
    product_id: strawberry.ID
    quantity: int


@strawberry.type
class CustomerOrder:
    id: strawberry.ID
    order_date: str
    status: str
    items: list[OrderItem]
    total: float


@strawberry.type
class CustomerOrdersPage:
    orders: list[CustomerOrder]
    total_count: int
    page: int
    page_size: int
    total_pages: int

    @classmethod
    def from_schema(cls, result: orders_schemas.CustomerOrdersPage) -> "CustomerOrdersPage":
        return cls(
            orders=[
                CustomerOrder(
                    id=strawberry.ID(order.id),
                    order_date=order.order_date,
                    status=order.status,
                    items=[
                        OrderItem(product_id=strawberry.ID(item.product_id), quantity=item.quantity)
                        for item in order.items
                    ],
                    total=order.total,
                )
                for order in result.orders
            ],
            total_count=result.total_count,
            page=result.page,
            page_size=result.page_size,
            total_pages=result.total_pages,
        )


@strawberry.input
class PlaceOrderItemInput:
    product_id: strawberry.ID
    quantity: int


@strawberry.input
class PlaceOrderInput:
    customer_id: strawberry.ID
    items: list[PlaceOrderItemInput]


@strawberry.type
class PlaceOrderPayload:
    order_id: strawberry.ID | None
    success: bool
    message: str | None

    @classmethod
    def from_schema(cls, result: orders_schemas.PlaceOrderResult) -> "PlaceOrderPayload":
        return cls(
            order_id=strawberry.ID(result.order_id) if result.order_id else None,
            success=result.success,
            message=result.message,
        )
