"""Row contracts for the CSV bulk loader."""

import json
from typing import Any

from pydantic import BaseModel, Field, field_validator

from salesgraph.shared.models import Customer, Order, Product
from salesgraph.shared.utils import parse_timestamp


class CustomerRow(Customer):
    """Row of ``customers.csv`` (``_id,name,email``)."""


class ProductRow(Product):
    """Row of ``products.csv`` (``_id,name,category,price``)."""


class OrderRow(Order):
    """Row of ``orders.csv``.

    ``items`` is a JSON array of ``{"productId", "quantity"}`` objects and
    ``orderDate`` an ISO-8601 timestamp.
    """

    @field_validator("items", mode="before")
    @classmethod
    def parse_items(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip()
            if not v:
                return []
            try:
                return json.loads(v)
            except json.JSONDecodeError as e:
                raise ValueError(f"items is not a JSON array: {e.msg}") from e
        return v

    @field_validator("order_date", mode="before")
    @classmethod
    def parse_order_date(cls, v: Any) -> Any:
        if isinstance(v, str):
            return parse_timestamp(v)
        return v


class ImportRowError(BaseModel):
    """Error detail for a single rejected row."""

    file: str = Field(..., description="CSV file name")
    row_index: int = Field(..., description="0-based index of the failed data row")
    error_message: str = Field(..., description="Human-readable error message")


class ImportSummary(BaseModel):
    """Outcome of a bulk import."""

    counts: dict[str, int] = Field(
        default_factory=dict,
        description="Documents loaded (or validated, on dry run) per collection",
    )
    dry_run: bool = False
