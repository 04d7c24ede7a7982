"""Test fixtures for orders."""

from datetime import UTC, datetime, timedelta

import pytest

from salesgraph.core.database import CUSTOMERS, ORDERS, PRODUCTS
from salesgraph.features.orders.service import OrderService


@pytest.fixture
def fixed_now():
    """Clock value used for placed orders."""
    return datetime(2024, 6, 1, 12, 0, tzinfo=UTC)


@pytest.fixture
def catalog(fake_executor):
    """One customer and two products priced 10.0 and 5.0."""
    fake_executor.add(CUSTOMERS, {"_id": "c1", "name": "Ada", "email": "ada@example.com"})
    fake_executor.add(
        PRODUCTS,
        {"_id": "pA", "name": "A", "category": "Tools", "price": 10.0},
        {"_id": "pB", "name": "B", "category": "Toys", "price": 5.0},
    )
    return fake_executor


@pytest.fixture
def order_history(catalog):
    """25 orders for customer c1, one day apart; o01 is the oldest."""
    start = datetime(2024, 1, 1, tzinfo=UTC)
    for n in range(1, 26):
        catalog.add(
            ORDERS,
            {
                "_id": f"o{n:02d}",
                "customerId": "c1",
                "orderDate": start + timedelta(days=n),
                "status": "Completed",
                "items": [{"productId": "pA", "quantity": 1}],
                "total": 10.0,
            },
        )
    return catalog


@pytest.fixture
def fixed_order_service(fake_executor, fixed_now):
    """OrderService with a fixed clock and order id."""
    return OrderService(
        fake_executor,
        clock=lambda: fixed_now,
        id_factory=lambda: "order-1",
    )
