"""Tests for collection document contracts."""

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from salesgraph.shared.models import Customer, Order, OrderLineItem, Product


class TestOrder:
    """Tests for the Order document model."""

    def test_reads_stored_field_names(self):
        order = Order.model_validate(
            {
                "_id": "o1",
                "customerId": "c1",
                "orderDate": datetime(2024, 1, 1, tzinfo=UTC),
                "status": "Completed",
                "items": [{"productId": "p1", "quantity": 2}],
                "total": 20.0,
            }
        )

        assert order.id == "o1"
        assert order.customer_id == "c1"
        assert order.items == [OrderLineItem(product_id="p1", quantity=2)]

    def test_to_document_uses_stored_field_names(self):
        order = Order(
            id="o1",
            customer_id="c1",
            order_date=datetime(2024, 1, 1, tzinfo=UTC),
            status="Completed",
            items=[OrderLineItem(product_id="p1", quantity=2)],
            total=20.0,
        )

        assert order.to_document() == {
            "_id": "o1",
            "customerId": "c1",
            "orderDate": datetime(2024, 1, 1, tzinfo=UTC),
            "status": "Completed",
            "items": [{"productId": "p1", "quantity": 2}],
            "total": 20.0,
        }

    def test_unknown_fields_ignored(self):
        customer = Customer.model_validate(
            {"_id": "c1", "name": "Ada", "email": "ada@example.com", "__v": 0}
        )
        assert "__v" not in customer.to_document()


class TestConstraints:
    """Tests for field constraints."""

    def test_quantity_must_be_positive(self):
        with pytest.raises(ValidationError):
            OrderLineItem(product_id="p1", quantity=0)

    def test_price_must_not_be_negative(self):
        with pytest.raises(ValidationError):
            Product(id="p1", name="Widget", category="Tools", price=-1)

    def test_order_total_must_not_be_negative(self):
        with pytest.raises(ValidationError):
            Order(
                id="o1",
                customer_id="c1",
                order_date=datetime(2024, 1, 1, tzinfo=UTC),
                status="Completed",
                total=-5,
            )
