"""Document contracts for the customers, products and orders collections.

Stored documents keep camelCase field names and ``_id`` identifiers; the
models expose snake_case attributes and convert with ``to_document``.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

COMPLETED_STATUS = "Completed"


class DocumentModel(BaseModel):
    """Base for collection documents."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def to_document(self) -> dict[str, Any]:
        """Dump using stored field names."""
        return self.model_dump(by_alias=True)


class Customer(DocumentModel):
    """A customer; loaded in bulk, read-only at request time."""

    id: str = Field(..., alias="_id", min_length=1)
    name: str
    email: str


class Product(DocumentModel):
    """A catalog product; read-only at request time."""

    id: str = Field(..., alias="_id", min_length=1)
    name: str
    category: str
    price: float = Field(..., ge=0)


class OrderLineItem(DocumentModel):
    """One ordered product and quantity."""

    product_id: str = Field(..., alias="productId", min_length=1)
    quantity: int = Field(..., ge=1)


class Order(DocumentModel):
    """An order; written once on placement and never mutated.

    ``total`` is a snapshot of price x quantity at creation time.
    """

    id: str = Field(..., alias="_id", min_length=1)
    customer_id: str = Field(..., alias="customerId")
    order_date: datetime = Field(..., alias="orderDate")
    status: str
    items: list[OrderLineItem] = Field(default_factory=list)
    total: float = Field(..., ge=0)
