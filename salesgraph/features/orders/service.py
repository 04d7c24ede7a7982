"""Service layer for order history and order placement.

Neither operation is cached: order pages are small and page-specific, and
placement is a write. Placing an order does not evict cached analytics, so
summaries may lag by up to the cache TTL.
"""

from __future__ import annotations

import asyncio
import uuid
from collections.abc import Callable, Mapping, Sequence
from datetime import UTC, datetime
from typing import Any

import pydantic

from salesgraph.core.database import CUSTOMERS, ORDERS, PRODUCTS, QueryExecutor
from salesgraph.core.exceptions import DatabaseError
from salesgraph.core.logging import get_logger
from salesgraph.features.orders.schemas import (
    CustomerOrder,
    CustomerOrdersPage,
    CustomerOrdersParams,
    OrderItemView,
    PlaceOrderInput,
    PlaceOrderItem,
    PlaceOrderResult,
)
from salesgraph.shared.models import COMPLETED_STATUS, Order, OrderLineItem, Product
from salesgraph.shared.utils import to_iso, total_pages, validate_params

logger = get_logger(__name__)

CUSTOMER_NOT_FOUND = "Customer not found"
ORDER_PLACED = "Order placed successfully"


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _new_order_id() -> str:
    return str(uuid.uuid4())


class OrderService:
    """Reads a customer's order history and places new orders.

    Order placement is not idempotent: a retried call creates a second
    order. There is no transaction between the product lookups and the
    insert.
    """

    def __init__(
        self,
        executor: QueryExecutor,
        clock: Callable[[], datetime] = _utcnow,
        id_factory: Callable[[], str] = _new_order_id,
    ) -> None:
        self.executor = executor
        self.clock = clock
        self.id_factory = id_factory

    async def get_customer_orders(
        self,
        customer_id: str,
        page: int,
        page_size: int,
    ) -> CustomerOrdersPage:
        """Return one page of a customer's orders, newest first.

        The page slice and the total count are fetched concurrently.

        Args:
            customer_id: Customer identifier.
            page: 1-indexed page number.
            page_size: Orders per page.

        Returns:
            The page with total count and page count.

        Raises:
            ValidationError: If page or page_size is not positive.
            DatabaseError: If a stored order does not match the order model.
        """
        params = validate_params(
            CustomerOrdersParams,
            customer_id=customer_id,
            page=page,
            page_size=page_size,
        )
        query = {"customerId": params.customer_id}

        documents, total_count = await asyncio.gather(
            self.executor.find(
                ORDERS,
                query,
                sort=[("orderDate", -1)],
                skip=params.offset,
                limit=params.limit,
            ),
            self.executor.count(ORDERS, query),
        )

        orders = [
            _to_customer_order(_parse_document(Order, ORDERS, doc)) for doc in documents
        ]

        logger.info(
            "orders.customer_orders_listed",
            customer_id=params.customer_id,
            page=params.page,
            page_size=params.page_size,
            returned=len(orders),
            total_count=total_count,
        )

        return CustomerOrdersPage(
            orders=orders,
            total_count=total_count,
            page=params.page,
            page_size=params.page_size,
            total_pages=total_pages(total_count, params.page_size),
        )

    async def place_order(
        self,
        customer_id: str,
        items: Sequence[PlaceOrderItem | Mapping[str, Any]],
    ) -> PlaceOrderResult:
        """Validate references and persist a new completed order.

        Products are resolved in input order; the first unknown product
        aborts the placement before anything is written.

        Args:
            customer_id: Ordering customer.
            items: Product ids and positive quantities.

        Returns:
            The new order id on success, or ``success=False`` with a message
            naming the missing customer or product.

        Raises:
            ValidationError: If the input is malformed.
        """
        request = validate_params(PlaceOrderInput, customer_id=customer_id, items=list(items))

        customer = await self.executor.find_one(CUSTOMERS, {"_id": request.customer_id})
        if customer is None:
            logger.info(
                "orders.place_rejected",
                reason="unknown_customer",
                customer_id=request.customer_id,
            )
            return PlaceOrderResult(order_id=None, success=False, message=CUSTOMER_NOT_FOUND)

        total = 0.0
        line_items: list[OrderLineItem] = []
        for item in request.items:
            document = await self.executor.find_one(PRODUCTS, {"_id": item.product_id})
            if document is None:
                logger.info(
                    "orders.place_rejected",
                    reason="unknown_product",
                    customer_id=request.customer_id,
                    product_id=item.product_id,
                )
                return PlaceOrderResult(
                    order_id=None,
                    success=False,
                    message=f"Product not found: {item.product_id}",
                )
            product = _parse_document(Product, PRODUCTS, document)
            line_items.append(OrderLineItem(product_id=item.product_id, quantity=item.quantity))
            total += product.price * item.quantity

        order = Order(
            id=self.id_factory(),
            customer_id=request.customer_id,
            order_date=self.clock(),
            status=COMPLETED_STATUS,
            items=line_items,
            total=total,
        )
        await self.executor.insert_one(ORDERS, order.to_document())

        logger.info(
            "orders.order_placed",
            order_id=order.id,
            customer_id=order.customer_id,
            item_count=len(line_items),
            total=order.total,
        )

        return PlaceOrderResult(order_id=order.id, success=True, message=ORDER_PLACED)


def _parse_document[M: pydantic.BaseModel](
    model: type[M], collection: str, document: Mapping[str, Any]
) -> M:
    try:
        return model.model_validate(document)
    except pydantic.ValidationError as e:
        logger.error(
            "orders.document_invalid",
            collection=collection,
            document_id=str(document.get("_id")),
            error_count=e.error_count(),
        )
        raise DatabaseError(
            message=f"Stored document in '{collection}' is invalid",
            details={"collection": collection, "document_id": str(document.get("_id"))},
        ) from e


def _to_customer_order(order: Order) -> CustomerOrder:
    return CustomerOrder(
        id=order.id,
        order_date=to_iso(order.order_date),
        status=order.status,
        items=[
            OrderItemView(product_id=item.product_id, quantity=item.quantity)
            for item in order.items
        ],
        total=order.total,
    )
