"""GraphQL schema: analytics queries and the placeOrder mutation.

Resolvers only translate between GraphQL types and the services. Domain
absences come back as null or ``success: false``; ValidationError and
DatabaseError surface as GraphQL errors carrying a ``code`` extension.
"""

from typing import Annotated, Any

import strawberry
from graphql import GraphQLError
from strawberry.extensions import MaskErrors
from strawberry.types import ExecutionContext, Info

from salesgraph.api.deps import GraphQLContext
from salesgraph.api.types import (
    CustomerOrdersPage,
    CustomerSpending,
    PlaceOrderInput,
    PlaceOrderPayload,
    SalesAnalytics,
    TopProduct,
)
from salesgraph.core.config import Settings, get_settings
from salesgraph.core.exceptions import SalesGraphError, ValidationError
from salesgraph.core.logging import get_logger

logger = get_logger(__name__)

SalesGraphInfo = Info[GraphQLContext, None]


@strawberry.type
class Query:
    @strawberry.field(description="Lifetime spending of a customer; null if they have no orders.")
    async def get_customer_spending(
        self,
        info: SalesGraphInfo,
        customer_id: strawberry.ID,
    ) -> CustomerSpending | None:
        result = await info.context.analytics.get_customer_spending(str(customer_id))
        return CustomerSpending.from_schema(result) if result is not None else None

    @strawberry.field(description="Products with the most units sold, highest first.")
    async def get_top_selling_products(
        self,
        info: SalesGraphInfo,
        limit: int,
    ) -> list[TopProduct]:
        results = await info.context.analytics.get_top_selling_products(limit)
        return [TopProduct.from_schema(result) for result in results]

    @strawberry.field(description="Revenue of completed orders between two ISO-8601 dates.")
    async def get_sales_analytics(
        self,
        info: SalesGraphInfo,
        start_date: str,
        end_date: str,
    ) -> SalesAnalytics:
        result = await info.context.analytics.get_sales_analytics(start_date, end_date)
        return SalesAnalytics.from_schema(result)

    @strawberry.field(description="A page of a customer's orders, newest first.")
    async def get_customer_orders(
        self,
        info: SalesGraphInfo,
        customer_id: strawberry.ID,
        page: int,
        page_size: int,
    ) -> CustomerOrdersPage:
        result = await info.context.orders.get_customer_orders(str(customer_id), page, page_size)
        return CustomerOrdersPage.from_schema(result)


@strawberry.type
class Mutation:
    @strawberry.mutation(description="Place a completed order at current catalog prices.")
    async def place_order(
        self,
        info: SalesGraphInfo,
        order: Annotated[PlaceOrderInput, strawberry.argument(name="input")],
    ) -> PlaceOrderPayload:
        result = await info.context.orders.place_order(
            str(order.customer_id),
            [
                {"product_id": str(item.product_id), "quantity": item.quantity}
                for item in order.items
            ],
        )
        return PlaceOrderPayload.from_schema(result)


class SalesGraphSchema(strawberry.Schema):
    """Schema that reports resolver errors through structlog."""

    def process_errors(
        self,
        errors: list[GraphQLError],
        execution_context: ExecutionContext | None = None,
    ) -> None:
        for error in errors:
            original: Any = error.original_error
            path = ".".join(str(p) for p in error.path) if error.path else None
            if original is None:
                # Query syntax or schema validation failure
                logger.warning("graphql.request_error", error=error.message, path=path)
            elif isinstance(original, ValidationError):
                logger.warning(
                    "graphql.validation_error",
                    error=original.message,
                    path=path,
                )
            elif isinstance(original, SalesGraphError):
                logger.error(
                    "graphql.error_handled",
                    error=original.message,
                    error_code=original.code,
                    details=original.details,
                    path=path,
                )
            else:
                logger.error(
                    "graphql.unhandled_error",
                    error=error.message,
                    error_type=type(original).__name__,
                    path=path,
                    exc_info=original,
                )


def _is_unexpected(error: GraphQLError) -> bool:
    return error.original_error is not None and not isinstance(
        error.original_error, SalesGraphError
    )


def build_schema(settings: Settings | None = None) -> SalesGraphSchema:
    """Build the schema; unexpected errors are masked outside development and testing."""
    settings = settings or get_settings()
    extensions = []
    if not (settings.is_development or settings.is_testing):
        extensions.append(
            MaskErrors(
                should_mask_error=_is_unexpected,
                error_message="An unexpected error occurred.",
            )
        )
    return SalesGraphSchema(query=Query, mutation=Mutation, extensions=extensions)
