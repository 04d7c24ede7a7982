"""Service layer for the cached analytics queries.

Every query follows the same cache-aside flow: derive a key from the
operation and its arguments, return the cached payload on a hit, otherwise
run the aggregation, reshape it and store it with the fixed TTL. Results
that only say "no data yet" (a customer without orders, an empty date
range) are returned but not cached.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any

import pydantic
from pydantic import TypeAdapter

from salesgraph.core.cache import CacheAside, cache_key
from salesgraph.core.database import ORDERS, QueryExecutor
from salesgraph.core.logging import get_logger
from salesgraph.features.analytics.pipelines import (
    customer_spending_pipeline,
    sales_analytics_pipeline,
    top_selling_products_pipeline,
)
from salesgraph.features.analytics.schemas import (
    CategoryRevenue,
    CustomerSpending,
    CustomerSpendingParams,
    DateRangeParams,
    SalesAnalytics,
    TopProduct,
    TopProductsParams,
)
from salesgraph.shared.utils import to_iso, validate_params

logger = get_logger(__name__)

_customer_spending_adapter: TypeAdapter[CustomerSpending | None] = TypeAdapter(
    CustomerSpending | None
)
_top_products_adapter: TypeAdapter[list[TopProduct]] = TypeAdapter(list[TopProduct])
_sales_analytics_adapter: TypeAdapter[SalesAnalytics] = TypeAdapter(SalesAnalytics)


class AnalyticsService:
    """Cache-aside analytics over the orders collection.

    Depends only on the QueryExecutor and CacheAside it is given.
    """

    def __init__(self, executor: QueryExecutor, cache: CacheAside) -> None:
        self.executor = executor
        self.cache = cache

    async def get_customer_spending(self, customer_id: str) -> CustomerSpending | None:
        """Lifetime spend of a customer across orders of every status.

        Args:
            customer_id: Customer identifier.

        Returns:
            Spending summary, or None when the customer has no orders.

        Raises:
            ValidationError: If customer_id is blank.
        """
        params = validate_params(CustomerSpendingParams, customer_id=customer_id)

        async def compute() -> CustomerSpending | None:
            rows = await self.executor.aggregate(
                ORDERS, customer_spending_pipeline(params.customer_id)
            )
            if not rows:
                logger.info("analytics.customer_spending_empty", customer_id=params.customer_id)
                return None
            row = rows[0]
            last_order_date = row.get("lastOrderDate")
            return CustomerSpending(
                customer_id=params.customer_id,
                total_spent=row.get("totalSpent") or 0,
                average_order_value=row.get("averageOrderValue") or 0,
                last_order_date=to_iso(last_order_date) if last_order_date else None,
            )

        return await self._cache_aside(
            cache_key("customerSpending", params.customer_id),
            _customer_spending_adapter,
            compute,
            should_cache=lambda result: result is not None,
        )

    async def get_top_selling_products(self, limit: int) -> list[TopProduct]:
        """Products with the most units sold, highest first.

        Args:
            limit: Maximum number of products (positive).

        Returns:
            Up to ``limit`` products; products missing from the catalog are
            skipped. An empty list is cached like any other result.

        Raises:
            ValidationError: If limit is not positive.
        """
        params = validate_params(TopProductsParams, limit=limit)

        async def compute() -> list[TopProduct]:
            rows = await self.executor.aggregate(
                ORDERS, top_selling_products_pipeline(params.limit)
            )
            return [
                TopProduct(
                    product_id=str(row["productId"]),
                    name=row["name"],
                    total_sold=int(row["totalSold"]),
                )
                for row in rows
            ]

        return await self._cache_aside(
            cache_key("topSellingProducts", params.limit),
            _top_products_adapter,
            compute,
        )

    async def get_sales_analytics(self, start_date: str, end_date: str) -> SalesAnalytics:
        """Revenue of completed orders in an inclusive date range.

        Args:
            start_date: ISO-8601 start of the range (inclusive).
            end_date: ISO-8601 end of the range (inclusive).

        Returns:
            Total revenue, distinct completed orders and revenue per category.
            A zero result (not cached) when nothing matches.

        Raises:
            ValidationError: If a date is unparseable or end precedes start.
        """
        params = validate_params(DateRangeParams, start_date=start_date, end_date=end_date)

        async def compute() -> SalesAnalytics:
            rows = await self.executor.aggregate(
                ORDERS, sales_analytics_pipeline(params.start_date, params.end_date)
            )
            if not rows:
                logger.info(
                    "analytics.sales_analytics_empty",
                    start_date=params.start_date.isoformat(),
                    end_date=params.end_date.isoformat(),
                )
                return SalesAnalytics()
            return _reshape_sales_analytics(rows[0])

        return await self._cache_aside(
            cache_key(
                "salesAnalytics",
                to_iso(params.start_date),
                to_iso(params.end_date),
            ),
            _sales_analytics_adapter,
            compute,
            should_cache=lambda result: result.completed_orders > 0,
        )

    async def _cache_aside[T](
        self,
        key: str,
        adapter: TypeAdapter[T],
        compute: Callable[[], Awaitable[T]],
        should_cache: Callable[[T], bool] = lambda _result: True,
    ) -> T:
        cached = await self.cache.read(key)
        if cached is not None:
            try:
                value = adapter.validate_json(cached)
            except pydantic.ValidationError as e:
                # Foreign or truncated entry: recompute and overwrite it
                logger.warning(
                    "analytics.cache_payload_invalid",
                    key=key,
                    error_count=e.error_count(),
                )
            else:
                logger.info("analytics.cache_hit", key=key)
                return value

        result = await compute()
        cacheable = should_cache(result)
        if cacheable:
            await self.cache.write(key, adapter.dump_json(result))
        logger.info("analytics.query_computed", key=key, cached=cacheable)
        return result


def _reshape_sales_analytics(row: dict[str, Any]) -> SalesAnalytics:
    """Fold line-item revenues into per-category totals, keeping first-seen order."""
    by_category: dict[str, float] = {}
    for item in row.get("lineItems", []):
        category = item["category"]
        by_category[category] = by_category.get(category, 0.0) + item["revenue"]

    breakdown = [
        CategoryRevenue(category=category, revenue=revenue)
        for category, revenue in by_category.items()
    ]
    return SalesAnalytics(
        total_revenue=sum(entry.revenue for entry in breakdown),
        completed_orders=len(row.get("orderIds", [])),
        category_breakdown=breakdown,
    )
