"""Pydantic schemas for analytics queries.

Input models validate caller arguments; result models are both the
service return types and the cached payload format.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from salesgraph.shared.utils import parse_timestamp

# =============================================================================
# Inputs
# =============================================================================


class CustomerSpendingParams(BaseModel):
    """Arguments of the customer spending query."""

    customer_id: str = Field(..., min_length=1)

    @field_validator("customer_id")
    @classmethod
    def strip_customer_id(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("customer_id must not be blank")
        return v


class TopProductsParams(BaseModel):
    """Arguments of the top-selling products query."""

    limit: int = Field(..., ge=1, description="Maximum number of products to return")


class DateRangeParams(BaseModel):
    """Inclusive date range of the sales analytics query.

    Accepts ISO-8601 dates or date-times; both bounds end up as aware UTC
    timestamps.
    """

    start_date: datetime
    end_date: datetime

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def parse_iso(cls, v: Any) -> Any:
        if isinstance(v, str):
            try:
                return parse_timestamp(v)
            except ValueError as e:
                raise ValueError(f"'{v}' is not an ISO-8601 date") from e
        return v

    @model_validator(mode="after")
    def validate_order(self) -> "DateRangeParams":
        """Ensure end_date >= start_date."""
        if self.end_date < self.start_date:
            raise ValueError("end_date must be >= start_date")
        return self


# =============================================================================
# Results
# =============================================================================


class CustomerSpending(BaseModel):
    """Lifetime spending summary of one customer."""

    customer_id: str
    total_spent: float = Field(..., ge=0)
    average_order_value: float = Field(..., ge=0)
    last_order_date: str | None = Field(
        None,
        description="ISO-8601 timestamp of the most recent order.",
    )


class TopProduct(BaseModel):
    """A product ranked by units sold across all orders."""

    product_id: str
    name: str
    total_sold: int = Field(..., ge=0)


class CategoryRevenue(BaseModel):
    """Revenue attributed to one product category."""

    category: str
    revenue: float


class SalesAnalytics(BaseModel):
    """Revenue summary of completed orders within a date range.

    ``total_revenue`` always equals the sum of ``category_breakdown``
    revenues; categories appear in order of first occurrence.
    """

    total_revenue: float = 0.0
    completed_orders: int = Field(0, ge=0)
    category_breakdown: list[CategoryRevenue] = Field(default_factory=list)
