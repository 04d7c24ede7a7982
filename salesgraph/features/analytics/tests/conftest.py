"""Test fixtures for analytics."""

from datetime import UTC, datetime

import pytest


@pytest.fixture
def spending_row():
    """Aggregation output for a customer with two orders (10 and 25)."""
    return {
        "_id": None,
        "totalSpent": 35.0,
        "averageOrderValue": 17.5,
        "lastOrderDate": datetime(2024, 2, 1, 9, 30, tzinfo=UTC),
    }


@pytest.fixture
def top_product_rows():
    """Aggregation output ranking product B (5 units) above A (3 units)."""
    return [
        {"productId": "pB", "name": "B", "totalSold": 5},
        {"productId": "pA", "name": "A", "totalSold": 3},
    ]


@pytest.fixture
def sales_row():
    """Aggregation output for two completed orders across two categories."""
    return {
        "_id": None,
        "orderIds": ["o1", "o2"],
        "lineItems": [
            {"category": "Tools", "revenue": 20.0},
            {"category": "Toys", "revenue": 15.0},
            {"category": "Tools", "revenue": 5.0},
        ],
    }
