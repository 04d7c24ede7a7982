"""FastAPI dependencies wiring services into the GraphQL context."""

from fastapi import Depends
from strawberry.fastapi import BaseContext

from salesgraph.core.cache import CacheAside, get_cache
from salesgraph.core.database import QueryExecutor, get_query_executor
from salesgraph.features.analytics.service import AnalyticsService
from salesgraph.features.orders.service import OrderService


class GraphQLContext(BaseContext):
    """Per-request resolver context holding the services."""

    def __init__(self, analytics: AnalyticsService, orders: OrderService) -> None:
        super().__init__()
        self.analytics = analytics
        self.orders = orders


def get_analytics_service(
    executor: QueryExecutor = Depends(get_query_executor),
    cache: CacheAside = Depends(get_cache),
) -> AnalyticsService:
    return AnalyticsService(executor, cache)


def get_order_service(
    executor: QueryExecutor = Depends(get_query_executor),
) -> OrderService:
    return OrderService(executor)


async def get_context(
    analytics: AnalyticsService = Depends(get_analytics_service),
    orders: OrderService = Depends(get_order_service),
) -> GraphQLContext:
    return GraphQLContext(analytics=analytics, orders=orders)
