"""Pydantic schemas for order listing and order placement."""

from pydantic import BaseModel, Field, field_validator

from salesgraph.shared.schemas import PaginationParams


def _not_blank(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("must not be blank")
    return v


# =============================================================================
# Customer orders page
# =============================================================================


class CustomerOrdersParams(PaginationParams):
    """Arguments of the paginated customer orders query."""

    customer_id: str = Field(..., min_length=1)

    @field_validator("customer_id")
    @classmethod
    def strip_customer_id(cls, v: str) -> str:
        return _not_blank(v)


class OrderItemView(BaseModel):
    """A line item as returned to callers."""

    product_id: str
    quantity: int


class CustomerOrder(BaseModel):
    """One order in a customer's order history."""

    id: str
    order_date: str = Field(..., description="ISO-8601 timestamp")
    status: str
    items: list[OrderItemView]
    total: float


class CustomerOrdersPage(BaseModel):
    """A page of a customer's orders, newest first."""

    orders: list[CustomerOrder]
    total_count: int = Field(..., ge=0)
    page: int = Field(..., ge=1)
    page_size: int = Field(..., ge=1)
    total_pages: int = Field(..., ge=0)


# =============================================================================
# Order placement
# =============================================================================


class PlaceOrderItem(BaseModel):
    """A requested product and quantity."""

    product_id: str = Field(..., min_length=1)
    quantity: int = Field(..., ge=1, description="Units ordered (positive)")

    @field_validator("product_id")
    @classmethod
    def strip_product_id(cls, v: str) -> str:
        return _not_blank(v)


class PlaceOrderInput(BaseModel):
    """Order placement request."""

    customer_id: str = Field(..., min_length=1)
    items: list[PlaceOrderItem] = Field(..., min_length=1)

    @field_validator("customer_id")
    @classmethod
    def strip_customer_id(cls, v: str) -> str:
        return _not_blank(v)


class PlaceOrderResult(BaseModel):
    """Outcome of an order placement.

    Unknown customers and products are reported here with
    ``success=False`` rather than raised.
    """

    order_id: str | None = None
    success: bool
    message: str
